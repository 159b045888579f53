# Copyright (c) 2023-2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Pure edit operations over form trees.

Every function takes a tree (a sequence of `Element`, or of mappings in the
element JSON shape) and returns a new list. Inputs are never mutated, and
subtrees off the edited path are shared between input and output.

An id that matches nothing is not an error: the tree comes back unchanged.
Malformed input fails fast with a `FormTreeError` subclass.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping, MutableSet
from typing import Any

from .._errors import ItemExistsError, ValidationError
from ..config import settings
from ..generic.element import Element, to_element, to_tree
from ..generic.ids import collect_ids, generate_id, iter_ids, mint_unique
from .traversal import count_elements as _count_nodes
from .traversal import find_duplicate_ids

__all__ = (
    "clone_element",
    "count_elements",
    "delete_by_id",
    "duplicate_by_id",
    "insert_at_root",
    "insert_into_container",
    "move_element",
    "update_by_id",
)

logger = logging.getLogger(__name__)

SiblingEdit = Callable[[list[Element], int], list[Element] | None]


def _edit_siblings(
    elements: list[Element], element_id: str, edit: SiblingEdit
) -> list[Element] | None:
    """Apply `edit` to the sibling list holding the first pre-order match.

    `edit` receives that list and the match index and returns the new list,
    or None to leave it alone. The path from the root to the match is
    rebuilt; None is returned when nothing changed.
    """
    for idx, element in enumerate(elements):
        if element.id == element_id:
            return edit(elements, idx)
        if element.children:
            children = _edit_siblings(element.children, element_id, edit)
            if children is not None:
                rebuilt = element.model_copy(update={"children": children})
                return [*elements[:idx], rebuilt, *elements[idx + 1 :]]
    return None


def _ensure_fresh_ids(tree: list[Element], new_element: Element) -> None:
    incoming = list(iter_ids([new_element]))
    clash = collect_ids(tree).intersection(incoming)
    clash.update(find_duplicate_ids([new_element]))
    if clash:
        raise ItemExistsError(
            f"Element id(s) already in use: {', '.join(sorted(clash))}",
            element_ids=sorted(clash),
        )


def insert_at_root(
    tree: Iterable[Element | Mapping],
    new_element: Element | Mapping,
    index: int | None = None,
) -> list[Element]:
    """Insert `new_element` among the root elements.

    Without an index, or with one outside ``0..len(tree)``, the element is
    appended; otherwise it is spliced in at `index`.

    Raises:
        ValidationError: If `new_element` is not a valid element.
        ItemExistsError: If any id of `new_element` is already in the tree.
    """
    elements = to_tree(tree)
    new_element = to_element(new_element)
    _ensure_fresh_ids(elements, new_element)

    if index is None or isinstance(index, bool) or not 0 <= index <= len(elements):
        elements.append(new_element)
    else:
        elements.insert(index, new_element)
    return elements


def insert_into_container(
    tree: Iterable[Element | Mapping],
    container_id: str,
    new_element: Element | Mapping,
    column_index: int | None = None,
) -> list[Element]:
    """Append `new_element` to the children of container `container_id`.

    Column membership is derived at render time from ``index % columns``,
    so `column_index` never changes where the element is stored: it always
    lands at the end of the container's flat children list.

    If `container_id` is missing, or names a leaf, the tree is returned
    unchanged.
    """
    elements = to_tree(tree)
    new_element = to_element(new_element)
    _ensure_fresh_ids(elements, new_element)

    def _append(siblings: list[Element], idx: int) -> list[Element] | None:
        container = siblings[idx]
        if container.children is None:
            return None
        updated = container.model_copy(
            update={"children": [*container.children, new_element]}
        )
        return [*siblings[:idx], updated, *siblings[idx + 1 :]]

    result = _edit_siblings(elements, container_id, _append)
    if result is None:
        logger.debug(
            f"insert_into_container: no container with id {container_id!r}"
            f" (column {column_index}), tree unchanged"
        )
        return elements
    return result


_PROTECTED_KEYS = ("id", "children")


def _normalize_patch(element_id: str, patch: Mapping[str, Any]) -> dict[str, Any]:
    """Key a patch by serialization alias (``kind`` -> ``type`` etc.)."""
    if not isinstance(patch, Mapping):
        raise ValidationError.from_value(patch, expected="mapping", element_id=element_id)
    normalized = {}
    for key, value in patch.items():
        field = Element.model_fields.get(key)
        normalized[field.alias if field and field.alias else key] = value
    if "properties" in normalized and not isinstance(normalized["properties"], Mapping):
        raise ValidationError.from_value(
            normalized["properties"],
            expected="mapping",
            element_id=element_id,
            message="Patch 'properties' must be a mapping",
        )
    return normalized


def _patched(element: Element, patch: dict[str, Any]) -> Element:
    data = element.model_dump(by_alias=True, exclude={"children"})
    data.update({k: v for k, v in patch.items() if k != "properties"})
    if "properties" in patch:
        data["properties"] = {**element.properties, **patch["properties"]}
    updated = type(element).from_dict(data)
    if element.children is not None:
        updated = updated.model_copy(update={"children": element.children})
    return updated


def update_by_id(
    tree: Iterable[Element | Mapping],
    element_id: str,
    patch: Mapping[str, Any],
) -> list[Element]:
    """Apply a partial patch to the element `element_id`.

    Top-level fields present in `patch` are replaced wholesale; the
    ``properties`` bag is merged key by key. Patch keys may be field names
    (``kind``) or their JSON aliases (``type``).

    Raises:
        ValidationError: If the patch changes ``id``, replaces ``children``
            or yields an invalid element.
    """
    elements = to_tree(tree)
    patch = _normalize_patch(element_id, patch)
    if "children" in patch or patch.get("id", element_id) != element_id:
        raise ValidationError(
            "A patch cannot change an element's id or replace its children",
            element_ids=[element_id],
            details={"keys": sorted(k for k in patch if k in _PROTECTED_KEYS)},
        )

    def _update(siblings: list[Element], idx: int) -> list[Element]:
        updated = _patched(siblings[idx], patch)
        return [*siblings[:idx], updated, *siblings[idx + 1 :]]

    result = _edit_siblings(elements, element_id, _update)
    if result is None:
        logger.debug(f"update_by_id: no element with id {element_id!r}, tree unchanged")
        return elements
    return result


def delete_by_id(tree: Iterable[Element | Mapping], element_id: str) -> list[Element]:
    """Remove the element `element_id`, with its subtree, wherever it is."""
    elements = to_tree(tree)
    result = _edit_siblings(
        elements,
        element_id,
        lambda siblings, idx: [*siblings[:idx], *siblings[idx + 1 :]],
    )
    if result is None:
        logger.debug(f"delete_by_id: no element with id {element_id!r}, tree unchanged")
        return elements
    return result


def clone_element(
    element: Element,
    id_generator: Callable[[], str] | None = None,
    *,
    taken: MutableSet[str] | None = None,
) -> Element:
    """Deep-copy `element` and give it, and every descendant, a fresh id.

    Minted ids are checked against and added to `taken`; by default that is
    the id set of `element`'s own subtree.
    """
    taken = collect_ids([element]) if taken is None else taken

    def _clone(node: Element) -> Element:
        children = None if node.children is None else [_clone(c) for c in node.children]
        return node.model_copy(update={"children": None}).model_copy(
            deep=True,
            update={"id": mint_unique(taken, id_generator), "children": children},
        )

    return _clone(element)


def duplicate_by_id(
    tree: Iterable[Element | Mapping],
    element_id: str,
    id_generator: Callable[[], str] | None = None,
    *,
    copy_suffix: str | None = None,
) -> list[Element]:
    """Insert a deep copy of `element_id` right after it among its siblings.

    Every node of the copy gets an id that is new to the whole tree. Only the
    copy's root label receives the copy marker.

    Raises:
        IDError: If `id_generator` cannot produce an unused id.
    """
    elements = to_tree(tree)
    id_generator = id_generator or generate_id
    suffix = settings.FORMTREE_COPY_SUFFIX if copy_suffix is None else copy_suffix
    taken = collect_ids(elements)

    def _duplicate(siblings: list[Element], idx: int) -> list[Element]:
        original = siblings[idx]
        clone = clone_element(original, id_generator, taken=taken)
        label = " ".join(part for part in (original.label, suffix) if part)
        clone = clone.model_copy(update={"label": label})
        return [*siblings[: idx + 1], clone, *siblings[idx + 1 :]]

    result = _edit_siblings(elements, element_id, _duplicate)
    if result is None:
        logger.debug(f"duplicate_by_id: no element with id {element_id!r}, tree unchanged")
        return elements
    return result


def move_element(
    tree: Iterable[Element | Mapping], element_id: str, target_id: str
) -> list[Element]:
    """Move root element `element_id` to the index held by `target_id`.

    Only root-level elements are reordered; anything else is a no-op.
    """
    elements = to_tree(tree)
    positions = {element.id: idx for idx, element in enumerate(elements)}
    src, dst = positions.get(element_id), positions.get(target_id)
    if src is None or dst is None:
        logger.debug(
            f"move_element: {element_id!r} or {target_id!r} is not a root element,"
            " tree unchanged"
        )
        return elements
    if src != dst:
        elements.insert(dst, elements.pop(src))
    return elements


def count_elements(tree: Iterable[Element | Mapping]) -> int:
    """Total number of nodes at every depth."""
    return _count_nodes(to_tree(tree))
