# Copyright (c) 2023-2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

import logging
import weakref
from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING, Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field

from ..ln import now_utc

if TYPE_CHECKING:
    from collections.abc import Callable

__all__ = (
    "MutationBroadcaster",
    "MutationKind",
    "TreeMutation",
)

logger = logging.getLogger(__name__)


class MutationKind(str, Enum):
    """What happened to a form tree.

    Attributes:
        ADDED: An element was inserted at the root or into a container.
        UPDATED: An element's fields or properties were patched.
        DELETED: An element and its subtree were removed.
        DUPLICATED: A deep copy was inserted next to an element.
        REORDERED: A root element changed position.
    """

    ADDED = "added"
    UPDATED = "updated"
    DELETED = "deleted"
    DUPLICATED = "duplicated"
    REORDERED = "reordered"


class TreeMutation(BaseModel):
    """Telemetry record of one applied edit."""

    model_config = ConfigDict(frozen=True)

    kind: MutationKind
    element_id: str
    element_type: str | None = None
    total_elements: int = 0
    details: dict[str, Any] = Field(default_factory=dict)
    created_at: datetime = Field(default_factory=now_utc)


class MutationBroadcaster:
    """Singleton pub/sub for tree mutations, with weakref subscribers.

    Subscribers are stored as weakrefs (WeakMethod for bound methods) so
    they are dropped once the referenced object is garbage collected.
    Delivery is synchronous and in subscription order.

    Example::

        MutationBroadcaster.subscribe(audit.record)
        MutationBroadcaster.broadcast(TreeMutation(kind="added", element_id="a"))
    """

    _instance: ClassVar[MutationBroadcaster | None] = None
    _subscribers: ClassVar[list[weakref.ref[Callable[[Any], None]]]] = []
    _event_type: ClassVar[type] = TreeMutation

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init_subclass__(cls, **kwargs: Any) -> None:
        """Each subclass gets its own subscriber list and singleton slot."""
        super().__init_subclass__(**kwargs)
        cls._instance = None
        cls._subscribers = []

    @classmethod
    def subscribe(cls, callback: Callable[[Any], None]) -> None:
        """Add subscriber callback (idempotent, stored as weakref)."""
        for weak_ref in cls._subscribers:
            if weak_ref() is callback:
                return
        if hasattr(callback, "__self__"):
            weak_callback = weakref.WeakMethod(callback)
        else:
            weak_callback = weakref.ref(callback)
        cls._subscribers.append(weak_callback)

    @classmethod
    def unsubscribe(cls, callback: Callable[[Any], None]) -> None:
        for weak_ref in list(cls._subscribers):
            if weak_ref() is callback:
                cls._subscribers.remove(weak_ref)
                return

    @classmethod
    def _cleanup_dead_refs(cls) -> list[Callable[[Any], None]]:
        """Prune dead weakrefs, return live callbacks."""
        callbacks, alive_refs = [], []
        for weak_ref in cls._subscribers:
            if (cb := weak_ref()) is not None:
                callbacks.append(cb)
                alive_refs.append(weak_ref)
        cls._subscribers[:] = alive_refs
        return callbacks

    @classmethod
    def broadcast(cls, event: Any) -> None:
        """Deliver `event` to every live subscriber.

        Raises:
            ValueError: If event type doesn't match _event_type.

        Note:
            Callback exceptions are logged and suppressed so one failing
            subscriber cannot block the others.
        """
        if not isinstance(event, cls._event_type):
            raise ValueError(f"Event must be of type {cls._event_type.__name__}")
        for callback in cls._cleanup_dead_refs():
            try:
                callback(event)
            except Exception as e:
                logger.error(f"Error in subscriber callback: {e}", exc_info=True)

    @classmethod
    def get_subscriber_count(cls) -> int:
        """Count live subscribers (triggers dead ref cleanup)."""
        return len(cls._cleanup_dead_refs())

    @classmethod
    def clear(cls) -> None:
        cls._subscribers.clear()
