"""Common base for transport DTOs mirrored from the backend."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter
from pydantic.alias_generators import to_camel

ModelT = TypeVar("ModelT", bound=BaseModel)
ItemT = TypeVar("ItemT")


class ApiModel(BaseModel):
    """camelCase on the wire, snake_case in Python; unknown fields are ignored."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    def to_api(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, mode="json", exclude_none=True)


class Page(ApiModel, Generic[ItemT]):
    content: list[ItemT] = Field(default_factory=list)
    total_pages: int = 0
    total_elements: int = 0
    number: int = Field(default=0, description="0-indexed page number")
    size: int = 0


class PublicRef(ApiModel):
    """``{"publicId": ...}`` reference used inside request bodies."""

    public_id: str


def parse_list(model: type[ModelT], data: Iterable[Any] | None) -> list[ModelT]:
    if not data:
        return []
    return TypeAdapter(list[model]).validate_python(list(data))
