# Copyright (c) 2023-2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Read-only helpers over form trees: walking, lookup, counting and the
render-time column partition of containers."""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Iterator, Sequence

from .._errors import IDError
from ..generic.element import Element
from ..generic.ids import iter_ids

__all__ = (
    "column_children",
    "column_count",
    "count_elements",
    "find_by_id",
    "find_duplicate_ids",
    "iter_elements",
    "validate_tree",
)


def iter_elements(tree: Iterable[Element]) -> Iterator[tuple[Element, int]]:
    """Depth-first pre-order walk yielding ``(element, depth)``."""
    stack = [(element, 0) for element in reversed(list(tree))]
    while stack:
        element, depth = stack.pop()
        yield element, depth
        if element.children:
            stack.extend((child, depth + 1) for child in reversed(element.children))


def find_by_id(tree: Iterable[Element], element_id: str) -> Element | None:
    for element, _ in iter_elements(tree):
        if element.id == element_id:
            return element
    return None


def count_elements(tree: Iterable[Element]) -> int:
    """Total number of nodes at every depth, containers and leaves alike."""
    return sum(
        1 + (count_elements(element.children) if element.children else 0)
        for element in tree
    )


def column_count(container: Element) -> int:
    """Number of render columns of a container, from ``properties["columns"]``.

    Missing, non-numeric or non-positive values count as a single column.
    """
    raw = container.properties.get("columns", 1)
    if isinstance(raw, bool):
        return 1
    try:
        columns = int(raw)
    except (TypeError, ValueError):
        return 1
    return columns if columns > 0 else 1


def column_children(container: Element, column_index: int) -> list[Element]:
    """Children rendered in column `column_index`.

    Columns are not stored: child ``i`` belongs to column ``i % columns``.
    """
    if not container.children:
        return []
    columns = column_count(container)
    return [
        child
        for idx, child in enumerate(container.children)
        if idx % columns == column_index
    ]


def find_duplicate_ids(tree: Sequence[Element]) -> list[str]:
    counts = Counter(iter_ids(tree))
    return sorted(id_ for id_, n in counts.items() if n > 1)


def validate_tree(tree: Sequence[Element]) -> None:
    """Check the global id uniqueness of a tree.

    Raises:
        IDError: If any id occurs more than once.
    """
    if duplicates := find_duplicate_ids(tree):
        raise IDError(
            f"Duplicate element ids in tree: {', '.join(duplicates)}",
            element_ids=duplicates,
        )
