from enum import Enum

import pytest
from pydantic import ValidationError

from veostudio.ai.video_generation import VideoGeneration
from veostudio.ai.video_generation.providers.mock import Mock
from veostudio.core import (
    Component,
    FrozenDataModel,
    Operation,
    Provider,
    StudioConfig,
    TypeConverter,
    operation,
)
from veostudio.core.exceptions import LoadError, NotSupportedError
from veostudio.interface.credential import Credential
from veostudio.interface.credential.providers.environment import Environment


class Color(str, Enum):
    RED = "red"


class Echo(Provider):
    def __init__(self, **kwargs):
        super().__init__(**kwargs)

    def shout(self, text: str, times: int = 1) -> str:
        return text.upper() * times


class Speaker(Component):
    @operation()
    def shout(self, text: str, times: int = 1) -> str:
        ...

    @operation()
    async def ashout(self, text: str, times: int = 1) -> str:
        ...

    @operation()
    def whisper(self, text: str) -> str:
        return text.lower()


def test_operation_forwards_to_provider():
    speaker = Speaker(__provider__=Echo())
    assert speaker.shout(text="hi", times=2) == "HIHI"


@pytest.mark.asyncio
async def test_async_operation_falls_back_to_sync_provider():
    speaker = Speaker(__provider__=Echo())
    assert await speaker.ashout(text="hi") == "HI"


def test_operation_falls_back_to_component_body():
    speaker = Speaker(__provider__=Echo())
    assert speaker.whisper(text="HI") == "hi"


def test_component_without_provider():
    with pytest.raises(NotSupportedError):
        Speaker().__run__(operation="shout")


def test_bind_by_type():
    component = VideoGeneration(
        __provider__=dict(type="mock", parameters={"delay": "0.5"})
    )
    assert isinstance(component.__provider__, Mock)
    assert component.__provider__.delay == 0.5
    assert component.__provider__.__component__ is component

    credential = Credential(__provider__="environment")
    assert isinstance(credential.__provider__, Environment)


def test_bind_unknown_type():
    with pytest.raises(LoadError):
        VideoGeneration(__provider__="unknown")


def test_operation_normalize():
    op = Operation.normalize(
        name="generate",
        args={"self": None, "a": 1, "b": None, "kwargs": {"c": "x"}},
    )
    assert op.args == {"a": 1, "c": "x"}
    assert str(op) == "generate(a=int, c=str)"


def test_type_converter():
    def func(a: int, b: Color, c: float | None = None, d: list[int] = []):
        ...

    args = TypeConverter.convert_args(
        func, {"a": "3", "b": "red", "c": "1.5", "d": ["1", "2"]}
    )
    assert args == {"a": 3, "b": Color.RED, "c": 1.5, "d": [1, 2]}


def test_frozen_data_model():
    class Point(FrozenDataModel):
        x: int

    point = Point(x=1)
    with pytest.raises(ValidationError):
        point.x = 2
    assert point.copy(update={"x": 3}).x == 3


def test_config_defaults(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("VEOSTUDIO_CONFIG", raising=False)

    config = StudioConfig.load()
    assert config.video_generation.type == "google"
    assert config.credential.type == "environment"
    assert config.logging.level == "INFO"
    assert config.output == "output"


def test_config_file(tmp_path, monkeypatch):
    path = tmp_path / "studio.yaml"
    path.write_text(
        "logging:\n"
        "  level: DEBUG\n"
        "video_generation:\n"
        "  type: mock\n"
        "  parameters:\n"
        "    delay: 0\n"
        "credential: null\n"
        "output: videos\n"
    )
    monkeypatch.setenv("VEOSTUDIO_CONFIG", str(path))

    config = StudioConfig.load()
    assert config.logging.level == "DEBUG"
    assert config.video_generation.to_binding() == {
        "type": "mock",
        "parameters": {"delay": 0},
    }
    assert config.credential is None
    assert config.output == "videos"


def test_config_missing_explicit_file(tmp_path):
    with pytest.raises(LoadError):
        StudioConfig.load(str(tmp_path / "missing.yaml"))


def test_config_invalid(tmp_path):
    path = tmp_path / "studio.yaml"
    path.write_text("video_generation:\n  parameters: {}\n")

    with pytest.raises(LoadError):
        StudioConfig.load(str(path))
