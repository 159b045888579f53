# Copyright (c) 2023-2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

import itertools

import pytest

from formtree.generic.element import Element
from formtree.generic.ids import IDGenerator
from formtree.tree.events import MutationBroadcaster


@pytest.fixture
def id_gen():
    """Deterministic id source: gen-1, gen-2, ..."""
    return IDGenerator(seq=(f"gen-{n}" for n in itertools.count(1)))


@pytest.fixture
def sample_tree():
    """Root leaf, a two-child section, and a section nested in a card.

    1 (text)
    2 (section)
      3 (text)
      4 (email)
    5 (card)
      6 (section)
        7 (text)
    """
    return [
        Element(id="1", kind="text", label="Name", properties={}),
        Element(
            id="2",
            kind="section",
            label="Sec",
            properties={"columns": 2},
            children=[
                Element(id="3", kind="text", label="First"),
                Element(id="4", kind="email", label="Email"),
            ],
        ),
        Element(
            id="5",
            kind="card",
            label="Card",
            children=[
                Element(
                    id="6",
                    kind="section",
                    label="Inner",
                    children=[Element(id="7", kind="text", label="Deep")],
                )
            ],
        ),
    ]


@pytest.fixture
def broadcaster():
    """A broadcaster subclass with its own subscriber list per test."""

    class _TestBroadcaster(MutationBroadcaster):
        pass

    yield _TestBroadcaster
    _TestBroadcaster.clear()
