# Copyright (c) 2023-2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

import copy
from collections.abc import Callable, Iterable, Iterator, Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .._errors import ItemExistsError, ItemNotFoundError
from ..generic.element import Element
from ..generic.ids import generate_id

__all__ = (
    "DEFAULT_PALETTE",
    "Palette",
    "PaletteItem",
    "create_element",
    "new_section",
)


class PaletteItem(BaseModel):
    """A draggable element kind and the defaults new instances start from."""

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        use_attribute_docstrings=True,
    )

    type: str = Field(min_length=1)
    """Element kind created from this item."""

    label: str = ""
    description: str = ""
    category: str = "Basic Fields"

    accepts_children: bool = Field(default=False, alias="acceptsChildren")
    """Instances are containers when True."""

    default_properties: dict[str, Any] = Field(
        default_factory=dict, alias="defaultProperties"
    )
    pro: bool = False


def create_element(
    item: PaletteItem,
    id_generator: Callable[[], str] | None = None,
    *,
    label: str | None = None,
) -> Element:
    """Instantiate a new element from a palette item.

    The label comes from `label`, else the item label, else the
    ``label`` default property, else the kind. Field slots (placeholder,
    required, options, ...) are seeded from the default properties, which
    are also deep-copied into ``properties``.
    """
    defaults = copy.deepcopy(item.default_properties)
    return Element(
        id=(id_generator or generate_id)(),
        kind=item.type,
        label=label or item.label or defaults.get("label") or item.type,
        placeholder=defaults.get("placeholder"),
        required=bool(defaults.get("required", False)),
        options=copy.deepcopy(defaults.get("options")) or [],
        validation=defaults.get("validation"),
        style=defaults.get("style"),
        schema_field=defaults.get("schemaField"),
        option_set_id=defaults.get("optionSetId"),
        properties=defaults,
        children=[] if item.accepts_children else None,
    )


def new_section(
    id_generator: Callable[[], str] | None = None,
    *,
    title: str = "New Section",
) -> Element:
    """An empty one-column section container."""
    return Element(
        id=(id_generator or generate_id)(),
        kind="section",
        label="Section",
        properties={"title": title, "columns": 1},
        children=[],
    )


class Palette:
    """Ordered catalog of palette items keyed by element kind."""

    def __init__(self, items: Iterable[PaletteItem | Mapping[str, Any]] = ()) -> None:
        self._items: dict[str, PaletteItem] = {}
        for item in items:
            self.register(item)

    def register(
        self, item: PaletteItem | Mapping[str, Any], *, replace: bool = False
    ) -> PaletteItem:
        """Add an item to the catalog.

        Raises:
            ItemExistsError: If the kind is registered and `replace` is False.
        """
        if not isinstance(item, PaletteItem):
            item = PaletteItem.model_validate(item)
        if item.type in self._items and not replace:
            raise ItemExistsError(
                f"Palette already has an item of type '{item.type}'",
                details={"type": item.type},
            )
        self._items[item.type] = item
        return item

    def get(self, type_: str) -> PaletteItem:
        try:
            return self._items[type_]
        except KeyError as e:
            raise ItemNotFoundError(
                f"No palette item of type '{type_}'",
                details={"type": type_},
                cause=e,
            ) from e

    def __contains__(self, type_: object) -> bool:
        return type_ in self._items

    def __iter__(self) -> Iterator[PaletteItem]:
        return iter(self._items.values())

    def __len__(self) -> int:
        return len(self._items)

    def search(self, term: str) -> list[PaletteItem]:
        """Items whose label or description contains `term`, case-insensitively."""
        needle = term.strip().lower()
        if not needle:
            return list(self)
        return [
            item
            for item in self
            if needle in item.label.lower() or needle in item.description.lower()
        ]

    def by_category(self) -> dict[str, list[PaletteItem]]:
        grouped: dict[str, list[PaletteItem]] = {}
        for item in self:
            grouped.setdefault(item.category, []).append(item)
        return grouped

    def create(
        self,
        type_: str,
        id_generator: Callable[[], str] | None = None,
        *,
        label: str | None = None,
    ) -> Element:
        return create_element(self.get(type_), id_generator, label=label)


_OPTIONS = [
    {"label": "Option 1", "value": "option1"},
    {"label": "Option 2", "value": "option2"},
]


def _default_items() -> list[dict[str, Any]]:
    return [
        # Basic Fields
        {
            "type": "text",
            "label": "Text Input",
            "description": "Single line text field",
            "defaultProperties": {
                "label": "Text Field",
                "placeholder": "Enter text...",
                "required": False,
                "maxLength": None,
            },
        },
        {
            "type": "email",
            "label": "Email",
            "description": "Email address input",
            "defaultProperties": {
                "label": "Email Address",
                "placeholder": "Enter email...",
                "required": False,
            },
        },
        {
            "type": "phone",
            "label": "Phone",
            "description": "Phone number input",
            "defaultProperties": {
                "label": "Phone Number",
                "placeholder": "Enter phone...",
                "required": False,
            },
        },
        {
            "type": "textarea",
            "label": "Textarea",
            "description": "Multi-line text input",
            "defaultProperties": {
                "label": "Message",
                "placeholder": "Enter your message...",
                "required": False,
                "rows": 4,
            },
        },
        {
            "type": "number",
            "label": "Number",
            "description": "Numeric input field",
            "defaultProperties": {
                "label": "Number",
                "placeholder": "Enter number...",
                "required": False,
                "min": None,
                "max": None,
            },
        },
        {
            "type": "password",
            "label": "Password",
            "description": "Password input field",
            "defaultProperties": {
                "label": "Password",
                "placeholder": "Enter password...",
                "required": False,
            },
        },
        # Date & Time
        {
            "type": "date",
            "label": "Date",
            "description": "Date picker",
            "category": "Date & Time",
            "defaultProperties": {"label": "Date", "required": False},
        },
        {
            "type": "time",
            "label": "Time",
            "description": "Time picker",
            "category": "Date & Time",
            "defaultProperties": {"label": "Time", "required": False},
        },
        {
            "type": "datetime",
            "label": "Date & Time",
            "description": "Date and time picker",
            "category": "Date & Time",
            "defaultProperties": {"label": "Date & Time", "required": False},
        },
        # Selection
        {
            "type": "select",
            "label": "Dropdown",
            "description": "Select from options",
            "category": "Selection",
            "defaultProperties": {
                "label": "Select Option",
                "placeholder": "Choose an option...",
                "required": False,
                "options": _OPTIONS,
            },
        },
        {
            "type": "radio",
            "label": "Radio Buttons",
            "description": "Single choice selection",
            "category": "Selection",
            "defaultProperties": {
                "label": "Choose One",
                "required": False,
                "options": _OPTIONS,
            },
        },
        {
            "type": "checkbox",
            "label": "Checkboxes",
            "description": "Multiple choice selection",
            "category": "Selection",
            "defaultProperties": {
                "label": "Select All That Apply",
                "required": False,
                "options": _OPTIONS,
            },
        },
        {
            "type": "switch",
            "label": "Toggle Switch",
            "description": "On/off toggle",
            "category": "Selection",
            "defaultProperties": {
                "label": "Enable Feature",
                "required": False,
                "defaultValue": False,
            },
        },
        # Media
        {
            "type": "file",
            "label": "File Upload",
            "description": "File upload field",
            "category": "Media",
            "defaultProperties": {
                "label": "Upload File",
                "accept": "*/*",
                "required": False,
                "multiple": False,
            },
        },
        {
            "type": "image",
            "label": "Image Upload",
            "description": "Image upload field",
            "category": "Media",
            "defaultProperties": {
                "label": "Upload Image",
                "accept": "image/*",
                "required": False,
                "multiple": False,
            },
        },
        # Layout
        {
            "type": "section",
            "label": "Section",
            "description": "Container section",
            "category": "Layout",
            "acceptsChildren": True,
            "defaultProperties": {
                "title": "Section Title",
                "columns": 1,
                "background": "#ffffff",
                "padding": 16,
            },
        },
        {
            "type": "columns",
            "label": "Columns",
            "description": "Multi-column layout",
            "category": "Layout",
            "acceptsChildren": True,
            "defaultProperties": {"columns": 2, "gap": 16},
        },
        {
            "type": "card",
            "label": "Card",
            "description": "Card container",
            "category": "Layout",
            "acceptsChildren": True,
            "defaultProperties": {
                "title": "Card Title",
                "padding": 16,
                "shadow": True,
            },
        },
        {
            "type": "grid",
            "label": "Grid Layout",
            "description": "Responsive grid system",
            "category": "Layout Blocks",
            "acceptsChildren": True,
            "defaultProperties": {"columns": 3, "gap": 16, "responsive": True},
        },
        # Content
        {
            "type": "heading",
            "label": "Heading",
            "description": "Heading text",
            "category": "Content",
            "defaultProperties": {
                "text": "Heading Text",
                "size": "h2",
                "align": "left",
                "color": "#000000",
            },
        },
        {
            "type": "paragraph",
            "label": "Paragraph",
            "description": "Paragraph text",
            "category": "Content",
            "defaultProperties": {
                "text": "This is a paragraph of text.",
                "align": "left",
                "color": "#000000",
            },
        },
        {
            "type": "divider",
            "label": "Divider",
            "description": "Horizontal line",
            "category": "Content",
            "defaultProperties": {
                "style": "solid",
                "color": "#e5e7eb",
                "thickness": 1,
                "margin": 16,
            },
        },
    ]


DEFAULT_PALETTE = Palette(_default_items())
