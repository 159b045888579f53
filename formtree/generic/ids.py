import time
from collections.abc import Callable, Iterable, Iterator, MutableSet
from typing import TYPE_CHECKING

from .._errors import IDError
from ..config import settings
from ..ln import random_base36

if TYPE_CHECKING:
    from .element import Element

__all__ = (
    "IDGenerator",
    "collect_ids",
    "generate_id",
    "iter_ids",
    "mint_unique",
)


def generate_id(prefix: str | None = None, suffix_length: int | None = None) -> str:
    """Mint an element id: ``{prefix}_{epoch millis}_{random base36}``."""
    prefix = prefix or settings.FORMTREE_ID_PREFIX
    suffix_length = suffix_length or settings.FORMTREE_ID_SUFFIX_LENGTH
    millis = time.time_ns() // 1_000_000
    return f"{prefix}_{millis}_{random_base36(suffix_length)}"


class IDGenerator:
    """Callable id source that never hands out the same id twice.

    With ``seq`` it draws from a fixed iterable instead of the clock, which
    keeps tests deterministic.
    """

    def __init__(
        self,
        prefix: str | None = None,
        *,
        seq: Iterable[str] | None = None,
        max_attempts: int | None = None,
    ) -> None:
        self.prefix = prefix
        self.max_attempts = max_attempts or settings.FORMTREE_MAX_ID_ATTEMPTS
        self._seq = iter(seq) if seq is not None else None
        self._issued: set[str] = set()

    @property
    def issued(self) -> frozenset[str]:
        return frozenset(self._issued)

    def _draw(self) -> str:
        if self._seq is None:
            return generate_id(self.prefix)
        try:
            return str(next(self._seq))
        except StopIteration as e:
            raise IDError("Id sequence exhausted", cause=e) from e

    def __call__(self) -> str:
        for _ in range(self.max_attempts):
            candidate = self._draw()
            if candidate not in self._issued:
                self._issued.add(candidate)
                return candidate
        raise IDError(
            f"Could not mint a fresh id in {self.max_attempts} attempts",
            details={"issued": len(self._issued)},
        )


def iter_ids(tree: Iterable["Element"]) -> Iterator[str]:
    """Yield every id in a tree, depth-first pre-order."""
    stack = list(reversed(list(tree)))
    while stack:
        element = stack.pop()
        yield element.id
        if element.children:
            stack.extend(reversed(element.children))


def collect_ids(tree: Iterable["Element"]) -> set[str]:
    return set(iter_ids(tree))


def mint_unique(
    taken: MutableSet[str],
    id_generator: Callable[[], str] | None = None,
    max_attempts: int | None = None,
) -> str:
    """Draw ids until one is not in `taken`, record it there and return it.

    Raises:
        IDError: If the generator keeps colliding or returns a non-string.
    """
    id_generator = id_generator or generate_id
    max_attempts = max_attempts or settings.FORMTREE_MAX_ID_ATTEMPTS
    for _ in range(max_attempts):
        candidate = id_generator()
        if not isinstance(candidate, str) or not candidate:
            raise IDError(
                f"Id generator returned an invalid id: {candidate!r}",
                details={"type": type(candidate).__name__},
            )
        if candidate not in taken:
            taken.add(candidate)
            return candidate
    raise IDError(
        f"Id generator collided with existing ids {max_attempts} times in a row",
        details={"attempts": max_attempts, "taken": len(taken)},
    )
