# Copyright (c) 2023-2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from .._errors import ValidationError
from ..ln import json_dumps, json_loads

__all__ = (
    "Element",
    "to_element",
    "to_tree",
)


_OPTIONAL_SLOTS = (
    "placeholder",
    "options",
    "validation",
    "style",
    "schema_field",
    "option_set_id",
)


class Element(BaseModel):
    """A node of a form tree.

    A node whose ``children`` is a list (even an empty one) is a container;
    ``children=None`` marks a leaf. Instances are frozen: editing a tree
    always produces new nodes via ``model_copy``.
    """

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        extra="allow",
        use_attribute_docstrings=True,
    )

    id: str = Field(min_length=1)
    """Identifier, unique across the whole tree."""

    kind: str = Field(alias="type", min_length=1)
    """Open-ended tag selecting the element variant, e.g. "text" or "section"."""

    label: str = ""
    """Display name."""

    placeholder: str | None = None
    required: bool = False
    options: list[dict[str, Any]] | None = None
    validation: Any = None
    style: Any = None
    schema_field: str | None = Field(default=None, alias="schemaField")
    option_set_id: int | None = Field(default=None, alias="optionSetId")

    properties: dict[str, Any] = Field(default_factory=dict)
    """Kind-specific configuration, opaque to the tree editor."""

    children: list[Element] | None = None
    """Ordered child elements; ``None`` for leaves."""

    @field_validator("id", mode="before")
    def _coerce_id(cls, value: Any) -> str:
        if isinstance(value, bool):
            raise TypeError(f"Invalid type for id: {type(value)}")
        if isinstance(value, int):
            return str(value)
        if isinstance(value, str):
            if value != value.strip():
                raise ValueError(f"id {value!r} has surrounding whitespace")
            return value
        raise TypeError(f"Invalid type for id: {type(value)}")

    @field_validator("properties", mode="before")
    def _coerce_properties(cls, value: Any) -> dict:
        if value is None:
            return {}
        return value

    @property
    def is_container(self) -> bool:
        return self.children is not None

    def __hash__(self) -> int:
        """Returns a hash of this element's ID."""
        return hash(self.id)

    def __bool__(self) -> bool:
        """Elements are always considered truthy."""
        return True

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Element:
        """Validates the JSON shape of an element (and its subtree)."""
        try:
            return cls.model_validate(dict(data))
        except PydanticValidationError as e:
            raise ValidationError.from_value(
                dict(data),
                expected="element mapping",
                element_id=data.get("id") if isinstance(data.get("id"), str) else None,
                message=f"Invalid element: {e.error_count()} validation error(s)",
                cause=e,
            ) from e

    @classmethod
    def from_json(cls, data: str | bytes) -> Element:
        return cls.from_dict(json_loads(data))

    def to_dict(self, *, by_alias: bool = True, exclude_none: bool = True) -> dict[str, Any]:
        """Serializes this element into its JSON shape.

        ``exclude_none`` only drops the optional slots left unset. Extra
        top-level keys and ``properties`` values are kept verbatim, nulls
        included. ``children`` is emitted for containers only.
        """
        exclude = {"children"}
        if exclude_none:
            exclude.update(n for n in _OPTIONAL_SLOTS if getattr(self, n) is None)
        data = self.model_dump(mode="json", by_alias=by_alias, exclude=exclude)
        if self.children is not None:
            data["children"] = [
                child.to_dict(by_alias=by_alias, exclude_none=exclude_none)
                for child in self.children
            ]
        return data

    def to_json(self, **kw) -> str:
        return json_dumps(self.to_dict(), **kw)


def to_element(value: Any) -> Element:
    if isinstance(value, Element):
        return value
    if isinstance(value, Mapping):
        return Element.from_dict(value)
    raise ValidationError.from_value(
        value,
        expected="Element or mapping",
        message=f"Cannot convert {type(value).__name__} to Element",
    )


def to_tree(value: Iterable[Any] | None) -> list[Element]:
    """Validates a tree value into a fresh list of elements.

    Elements already validated are reused as-is, so the result shares
    nodes with the input.
    """
    if value is None:
        return []
    if isinstance(value, (Element, Mapping, str, bytes)):
        raise ValidationError.from_value(
            value,
            expected="sequence of elements",
            message="A tree must be a sequence of elements",
        )
    return [to_element(item) for item in value]
