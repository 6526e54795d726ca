__all__ = ["DataModel", "DataModelField", "FrozenDataModel"]

from typing import Any, Self

from pydantic import BaseModel, ConfigDict, Field


class DataModel(BaseModel):
    """Data model."""

    model_config = ConfigDict(arbitrary_types_allowed=True, extra="ignore")

    def to_dict(self):
        return self.model_dump()

    def to_json(self, indent: int | None = None):
        return self.model_dump_json(indent=indent)

    def copy(self, deep: bool = False, **kwargs):
        return self.model_copy(deep=deep, **kwargs)

    @classmethod
    def from_dict(cls, obj: dict | None) -> Self:
        return cls.model_validate(obj)

    @classmethod
    def from_json(cls, json: str) -> Self:
        return cls.model_validate_json(json)


class FrozenDataModel(DataModel):
    """Immutable data model."""

    model_config = ConfigDict(
        arbitrary_types_allowed=True, extra="ignore", frozen=True
    )


def DataModelField(
    alias: str | None = None,
    exclude: bool | None = None,
    min_length: int | None = None,
    max_length: int | None = None,
    **kwargs,
) -> Any:
    return Field(
        alias=alias,
        exclude=exclude,
        min_length=min_length,
        max_length=max_length,
        **kwargs,
    )
