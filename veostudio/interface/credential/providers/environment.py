__all__ = ["Environment"]

import os
from getpass import getpass
from typing import Callable

from loguru import logger

from veostudio.core import Provider
from veostudio.core.exceptions import BadRequestError


class Environment(Provider):
    variable: str
    prompt: str
    _reader: Callable[[str], str]

    def __init__(
        self,
        variable: str = "GEMINI_API_KEY",
        prompt: str = "API key: ",
        reader: Callable[[str], str] | None = None,
        **kwargs,
    ):
        """Initialize.

        Args:
            variable:
                Environment variable holding the key.
            prompt:
                Prompt shown when selecting a key.
            reader:
                Function reading the key, getpass by default.
        """
        self.variable = variable
        self.prompt = prompt
        self._reader = reader or getpass
        super().__init__(**kwargs)

    def has_credential(self) -> bool:
        return bool(os.environ.get(self.variable, "").strip())

    def select(self) -> None:
        value = self._reader(self.prompt).strip()
        if not value:
            raise BadRequestError("No API key entered.")
        os.environ[self.variable] = value
        logger.info("API key stored in {}", self.variable)
