# Copyright (c) 2023-2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

from .element import Element, to_element, to_tree
from .ids import IDGenerator, collect_ids, generate_id, iter_ids, mint_unique

__all__ = (
    "Element",
    "IDGenerator",
    "collect_ids",
    "generate_id",
    "iter_ids",
    "mint_unique",
    "to_element",
    "to_tree",
)
