# Copyright (c) 2023-2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, field_validator

from ._errors import ValidationError
from .config import settings
from .generic.element import Element, to_element, to_tree
from .generic.ids import generate_id
from .tree import editor
from .tree.drop import apply_drop
from .tree.events import MutationBroadcaster, MutationKind, TreeMutation
from .tree.palette import DEFAULT_PALETTE, Palette, new_section
from .tree.traversal import count_elements, find_by_id

__all__ = ("FormDocument",)

logger = logging.getLogger(__name__)


class FormDocument(BaseModel):
    """A form being edited: metadata plus its element tree.

    Each edit runs the matching pure editor operation and replaces
    ``elements`` with the result, then logs and broadcasts a
    `TreeMutation`. Edits on ids that match nothing change nothing and
    emit nothing. Single writer: callers serialize edits per document.
    """

    model_config = ConfigDict(validate_assignment=True)

    title: str = ""
    description: str = ""
    elements: list[Element] = Field(default_factory=list)

    _id_generator: Callable[[], str] = PrivateAttr(default_factory=lambda: generate_id)
    _broadcaster: type[MutationBroadcaster] = PrivateAttr(
        default_factory=lambda: MutationBroadcaster
    )

    @field_validator("elements", mode="before")
    def _coerce_elements(cls, value: Any) -> list[Element]:
        return to_tree(value)

    @classmethod
    def create(
        cls,
        title: str = "",
        description: str = "",
        elements: Any = None,
        *,
        id_generator: Callable[[], str] | None = None,
        broadcaster: type[MutationBroadcaster] | None = None,
    ) -> FormDocument:
        doc = cls(title=title, description=description, elements=elements or [])
        if id_generator is not None:
            doc._id_generator = id_generator
        if broadcaster is not None:
            doc._broadcaster = broadcaster
        return doc

    @property
    def total_elements(self) -> int:
        return count_elements(self.elements)

    def find(self, element_id: str) -> Element | None:
        return find_by_id(self.elements, element_id)

    def _commit(
        self,
        elements: list[Element],
        kind: MutationKind,
        element: Element,
        **details: Any,
    ) -> TreeMutation | None:
        if elements == self.elements:
            return None
        self.elements = elements
        event = TreeMutation(
            kind=kind,
            element_id=element.id,
            element_type=element.kind,
            total_elements=self.total_elements,
            details=details,
        )
        if settings.FORMTREE_LOG_MUTATIONS:
            logger.info(
                f"Element {kind.value}: {element.id} ({element.kind}),"
                f" {event.total_elements} elements total"
            )
        self._broadcaster.broadcast(event)
        return event

    def add(
        self, element: Element | Mapping, over_id: str | int | None = None
    ) -> TreeMutation | None:
        """Drop `element` on the zone `over_id` (end of the form by default)."""
        element = to_element(element)
        elements = apply_drop(self.elements, over_id, element)
        return self._commit(elements, MutationKind.ADDED, element, over_id=over_id)

    def add_from_palette(
        self,
        type_: str,
        over_id: str | int | None = None,
        *,
        palette: Palette | None = None,
    ) -> Element | None:
        """Instantiate a palette item and drop it on `over_id`.

        Returns the new element, or None when the drop target accepted
        nothing (a leaf or an unknown container).
        """
        element = (palette or DEFAULT_PALETTE).create(type_, self._id_generator)
        if self.add(element, over_id) is None:
            return None
        return element

    def add_section(self) -> Element:
        section = new_section(self._id_generator)
        self.add(section)
        return section

    def update(self, element_id: str, patch: Mapping[str, Any]) -> TreeMutation | None:
        elements = editor.update_by_id(self.elements, element_id, patch)
        if (updated := find_by_id(elements, element_id)) is None:
            return None
        return self._commit(
            elements, MutationKind.UPDATED, updated, updates=sorted(patch)
        )

    def delete(self, element_id: str) -> TreeMutation | None:
        if (element := self.find(element_id)) is None:
            return None
        elements = editor.delete_by_id(self.elements, element_id)
        return self._commit(elements, MutationKind.DELETED, element)

    def duplicate(self, element_id: str) -> TreeMutation | None:
        if (element := self.find(element_id)) is None:
            return None
        elements = editor.duplicate_by_id(self.elements, element_id, self._id_generator)
        return self._commit(elements, MutationKind.DUPLICATED, element)

    def move(self, element_id: str, target_id: str) -> TreeMutation | None:
        ids = [element.id for element in self.elements]
        elements = editor.move_element(self.elements, element_id, target_id)
        if (element := self.find(element_id)) is None:
            return None
        return self._commit(
            elements,
            MutationKind.REORDERED,
            element,
            from_index=ids.index(element_id) if element_id in ids else None,
            to_index=ids.index(target_id) if target_id in ids else None,
        )

    def update_metadata(self, **fields: Any) -> None:
        """Update ``title`` and/or ``description``."""
        unknown = set(fields) - {"title", "description"}
        if unknown:
            raise ValidationError(
                f"Unknown form metadata field(s): {', '.join(sorted(unknown))}",
                details={"fields": sorted(unknown)},
            )
        for name, value in fields.items():
            setattr(self, name, value)

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "description": self.description,
            "elements": [element.to_dict() for element in self.elements],
        }
