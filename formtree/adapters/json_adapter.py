"""JSON shape of whole form trees (string and plain-data forms)."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from .._errors import ValidationError
from ..generic.element import Element, to_tree
from ..ln import json_dumps, json_loads

__all__ = (
    "dump_tree",
    "load_tree",
    "tree_from_json",
    "tree_to_json",
)


def dump_tree(tree: Iterable[Element | Mapping]) -> list[dict[str, Any]]:
    return [element.to_dict() for element in to_tree(tree)]


def load_tree(data: Iterable[Mapping[str, Any]] | None) -> list[Element]:
    return to_tree(data)


def tree_to_json(tree: Iterable[Element | Mapping], *, indent: bool = False) -> str:
    return json_dumps(dump_tree(tree), indent=indent)


def tree_from_json(text: str | bytes) -> list[Element]:
    """Parse a JSON array of elements.

    Raises:
        ValidationError: If the text is not JSON or not a list of elements.
    """
    try:
        data = json_loads(text)
    except ValueError as e:
        raise ValidationError("Tree JSON could not be decoded", cause=e) from e
    if not isinstance(data, list):
        raise ValidationError.from_value(data, expected="JSON array of elements")
    return load_tree(data)
