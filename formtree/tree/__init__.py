# Copyright (c) 2023-2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

from .drop import DropTarget, apply_drop
from .editor import (
    clone_element,
    count_elements,
    delete_by_id,
    duplicate_by_id,
    insert_at_root,
    insert_into_container,
    move_element,
    update_by_id,
)
from .events import MutationBroadcaster, MutationKind, TreeMutation
from .palette import DEFAULT_PALETTE, Palette, PaletteItem, create_element, new_section
from .traversal import (
    column_children,
    column_count,
    find_by_id,
    find_duplicate_ids,
    iter_elements,
    validate_tree,
)

__all__ = (
    "DEFAULT_PALETTE",
    "DropTarget",
    "MutationBroadcaster",
    "MutationKind",
    "Palette",
    "PaletteItem",
    "TreeMutation",
    "apply_drop",
    "clone_element",
    "column_children",
    "column_count",
    "count_elements",
    "create_element",
    "delete_by_id",
    "duplicate_by_id",
    "find_by_id",
    "find_duplicate_ids",
    "insert_at_root",
    "insert_into_container",
    "iter_elements",
    "move_element",
    "new_section",
    "update_by_id",
    "validate_tree",
)
