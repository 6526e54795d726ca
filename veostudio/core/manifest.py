from __future__ import annotations

import os
from typing import Any

from pydantic import ValidationError

from ._yaml_loader import YamlLoader
from .data_model import DataModel
from .exceptions import LoadError

__all__ = [
    "CONFIG_ENV",
    "CONFIG_FILE",
    "LoggingConfig",
    "ProviderConfig",
    "StudioConfig",
]


CONFIG_FILE = "veostudio.yaml"
CONFIG_ENV = "VEOSTUDIO_CONFIG"


class LoggingConfig(DataModel):
    level: str = "INFO"
    file: str | None = None
    rotation: str = "10 MB"
    retention: str = "7 days"


class ProviderConfig(DataModel):
    type: str
    parameters: dict[str, Any] = dict()

    def to_binding(self) -> dict[str, Any]:
        return dict(type=self.type, parameters=dict(self.parameters))


class StudioConfig(DataModel):
    logging: LoggingConfig = LoggingConfig()
    video_generation: ProviderConfig = ProviderConfig(
        type="google", parameters={"poll_interval": 10}
    )
    credential: ProviderConfig | None = ProviderConfig(
        type="environment", parameters={"variable": "GEMINI_API_KEY"}
    )
    output: str = "output"

    @staticmethod
    def load(path: str | None = None) -> StudioConfig:
        """Load the studio configuration.

        The path falls back to ``$VEOSTUDIO_CONFIG`` and then to
        ``veostudio.yaml`` in the working directory. A missing file yields
        the defaults; values in the file override them.
        """
        explicit = path or os.environ.get(CONFIG_ENV)
        path = explicit or CONFIG_FILE
        if not os.path.exists(path):
            if explicit:
                raise LoadError(f"Config file {path} not found")
            return StudioConfig()
        try:
            return StudioConfig.from_dict(YamlLoader.load(path))
        except ValidationError as e:
            raise LoadError(f"Invalid config {path}: {e}") from e
