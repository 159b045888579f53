# Copyright (c) 2023-2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Resolve where a dropped element lands.

The drag-and-drop layer reports the id of the zone an element was released
over. Zone ids follow these forms:

- ``None``, ``"form-canvas"`` or ``"drop-zone-root"``: end of the form
- ``"drop-zone-<n>"``: root position ``n``
- ``"drop-zone-<container id>-col-<n>"``: column ``n`` of a container
- ``"drop-zone-<container id>"``: a container
- anything else: the element itself, treated as a container
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from ..generic.element import Element
from .editor import insert_at_root, insert_into_container

__all__ = (
    "DropTarget",
    "apply_drop",
)

CANVAS_ZONES = frozenset({"form-canvas", "drop-zone-root"})
ZONE_PREFIX = "drop-zone-"
COLUMN_MARKER = "-col-"


@dataclass(frozen=True, slots=True)
class DropTarget:
    """Parsed drop zone: a root position, or a container (and column)."""

    index: int | None = None
    container_id: str | None = None
    column_index: int | None = None

    @property
    def is_root(self) -> bool:
        return self.container_id is None

    @classmethod
    def parse(cls, over_id: str | int | None) -> DropTarget:
        if not isinstance(over_id, str) or over_id in CANVAS_ZONES:
            return cls()
        if not over_id.startswith(ZONE_PREFIX):
            return cls(container_id=over_id)

        zone = over_id[len(ZONE_PREFIX) :]
        if zone.isdigit():
            return cls(index=int(zone))

        container_id, sep, column = zone.rpartition(COLUMN_MARKER)
        if sep and container_id and column.isdigit():
            return cls(container_id=container_id, column_index=int(column))
        return cls(container_id=zone)


def apply_drop(
    tree: Iterable[Element | Mapping],
    over_id: str | int | None,
    new_element: Element | Mapping,
) -> list[Element]:
    """Insert `new_element` at the zone named by `over_id`."""
    target = DropTarget.parse(over_id)
    if target.is_root:
        return insert_at_root(tree, new_element, target.index)
    return insert_into_container(
        tree, target.container_id, new_element, target.column_index
    )
