__all__ = ["Static"]

import os

from veostudio.core import Context, Provider


class Static(Provider):
    api_key: str | None
    variable: str | None

    def __init__(
        self,
        api_key: str | None = None,
        variable: str | None = "GEMINI_API_KEY",
        **kwargs,
    ):
        """Initialize.

        Args:
            api_key:
                The key.
            variable:
                Environment variable the key is exported to on select,
                so the video provider picks it up.
        """
        self.api_key = api_key
        self.variable = variable
        super().__init__(**kwargs)

    def __setup__(self, context: Context | None = None) -> None:
        self.select()

    def has_credential(self) -> bool:
        return bool(self.api_key)

    def select(self) -> None:
        if self.api_key and self.variable:
            os.environ[self.variable] = self.api_key
