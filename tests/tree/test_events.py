# Copyright (c) 2023-2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Tests for TreeMutation and MutationBroadcaster."""

import gc
import logging

import pytest

from formtree.tree.events import MutationBroadcaster, MutationKind, TreeMutation


def make_event(**kw):
    return TreeMutation(kind=MutationKind.ADDED, element_id="a", **kw)


class TestTreeMutation:
    def test_defaults(self):
        event = make_event()
        assert event.kind is MutationKind.ADDED
        assert event.total_elements == 0
        assert event.details == {}
        assert event.created_at.tzinfo is not None

    def test_kind_from_string(self):
        assert TreeMutation(kind="deleted", element_id="a").kind is MutationKind.DELETED

    def test_invalid_kind(self):
        with pytest.raises(Exception):
            TreeMutation(kind="exploded", element_id="a")


class TestSubscribe:
    def test_subscribe_is_idempotent(self, broadcaster):
        def handler(e):
            pass

        broadcaster.subscribe(handler)
        broadcaster.subscribe(handler)
        assert broadcaster.get_subscriber_count() == 1

    def test_unsubscribe(self, broadcaster):
        def handler(e):
            pass

        broadcaster.subscribe(handler)
        broadcaster.unsubscribe(handler)
        assert broadcaster.get_subscriber_count() == 0

    def test_subclasses_are_isolated(self, broadcaster):
        def handler(e):
            pass

        broadcaster.subscribe(handler)
        assert handler not in MutationBroadcaster._cleanup_dead_refs()

    def test_singleton(self, broadcaster):
        assert broadcaster() is broadcaster()

    def test_dead_bound_method_is_dropped(self, broadcaster):
        class Sink:
            def on_event(self, e):
                pass

        sink = Sink()
        broadcaster.subscribe(sink.on_event)
        assert broadcaster.get_subscriber_count() == 1
        del sink
        gc.collect()
        assert broadcaster.get_subscriber_count() == 0


class TestBroadcast:
    def test_delivers_in_order(self, broadcaster):
        seen = []

        def first(e):
            seen.append(("first", e.element_id))

        def second(e):
            seen.append(("second", e.element_id))

        broadcaster.subscribe(first)
        broadcaster.subscribe(second)
        broadcaster.broadcast(make_event())
        assert seen == [("first", "a"), ("second", "a")]

    def test_wrong_event_type(self, broadcaster):
        with pytest.raises(ValueError):
            broadcaster.broadcast({"kind": "added"})

    def test_failing_subscriber_does_not_block_others(self, broadcaster, caplog):
        seen = []

        def broken(e):
            raise RuntimeError("boom")

        def healthy(e):
            seen.append(e)

        broadcaster.subscribe(broken)
        broadcaster.subscribe(healthy)
        with caplog.at_level(logging.ERROR, logger="formtree.tree.events"):
            broadcaster.broadcast(make_event())
        assert len(seen) == 1
        assert "boom" in caplog.text
