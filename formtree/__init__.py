# Copyright (c) 2023-2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

import logging

from ._errors import (
    ConfigurationError,
    FormTreeError,
    IDError,
    ItemExistsError,
    ItemNotFoundError,
    ValidationError,
)
from .document import FormDocument
from .generic import Element, IDGenerator, generate_id
from .tree import (
    DEFAULT_PALETTE,
    DropTarget,
    MutationBroadcaster,
    MutationKind,
    Palette,
    PaletteItem,
    TreeMutation,
    apply_drop,
    count_elements,
    delete_by_id,
    duplicate_by_id,
    find_by_id,
    insert_at_root,
    insert_into_container,
    move_element,
    update_by_id,
)
from .version import __version__

logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)

__all__ = (
    "__version__",
    "ConfigurationError",
    "DEFAULT_PALETTE",
    "DropTarget",
    "Element",
    "FormDocument",
    "FormTreeError",
    "IDError",
    "IDGenerator",
    "ItemExistsError",
    "ItemNotFoundError",
    "MutationBroadcaster",
    "MutationKind",
    "Palette",
    "PaletteItem",
    "TreeMutation",
    "ValidationError",
    "apply_drop",
    "count_elements",
    "delete_by_id",
    "duplicate_by_id",
    "find_by_id",
    "generate_id",
    "insert_at_root",
    "insert_into_container",
    "move_element",
    "update_by_id",
)
