"""Ordered key/value container backed by a probabilistic skip list.

Every element carries a random number of forward pointers ("lanes"); a
search starts on the highest lane of the list head and drops one lane at a
time, so lookups, inserts and removals run in expected O(log n) without any
rebalancing.

Ordering is defined by a *greater than* comparator supplied at construction
(see :mod:`pyskiplist.comparators`). For equal keys ``compare(a, b)`` and
``compare(b, a)`` must both be false.

    >>> from pyskiplist import SkipList, comparators
    >>> sl = SkipList(comparators.INT)
    >>> _ = sl.set(20, "Hello")
    >>> _ = sl.set(10, "World")
    >>> sl.get_value(10)
    ('World', True)
    >>> sl.front().key
    10

The structure is not thread-safe; callers serialise access themselves.
"""
from __future__ import annotations

import logging
import random
from collections.abc import Callable, Iterable, Iterator, Mapping
from typing import Any, Generic, Optional, Protocol, TypeVar, Union

from .comparators import ascending

__all__ = ["SkipList", "Element", "DEFAULT_MAX_LEVEL"]

logger = logging.getLogger(__name__)

K = TypeVar("K")
V = TypeVar("V")

DEFAULT_MAX_LEVEL = 24

GreaterThan = Callable[[Any, Any], bool]


class RandomSource(Protocol):
    def randrange(self, stop: int) -> int: ...


def _check_level(level: int) -> None:
    # bool is an int subclass but never a meaningful level
    if not isinstance(level, int) or isinstance(level, bool) or level <= 0:
        raise ValueError(f"skip list max level must be a positive int, got {level!r}")


class Element(Generic[K, V]):
    """One stored pair. ``value`` may be reassigned, ``key`` may not."""

    __slots__ = ("_key", "value", "forward")

    def __init__(self, key: K, value: V, level: int):
        self._key = key
        self.value = value
        self.forward: list[Optional[Element[K, V]]] = [None] * level

    @property
    def key(self) -> K:
        return self._key

    @property
    def level(self) -> int:
        return len(self.forward)

    def next(self) -> Optional[Element[K, V]]:
        """Bottom-lane successor, or ``None`` at the tail."""
        return self.forward[0]

    def __repr__(self) -> str:
        return f"Element<{self._key!r}:{self.value!r}>"


class SkipList(Generic[K, V]):
    """Skip list mapping keys, ordered by ``compare``, to arbitrary values.

    Parameters
    ----------
    compare:
        ``compare(lhs, rhs)`` returns true iff ``lhs > rhs``.
    max_level:
        Number of lanes. Defaults to :data:`DEFAULT_MAX_LEVEL` as it is at
        construction time.
    rng:
        Anything with ``randrange(n)``; used once per insertion to pick the
        height of the new element.
    """

    def __init__(
        self,
        compare: GreaterThan = ascending,
        *,
        max_level: Optional[int] = None,
        rng: Optional[RandomSource] = None,
    ):
        level = DEFAULT_MAX_LEVEL if max_level is None else max_level
        _check_level(level)
        self.compare = compare
        self._level = level
        self._rng: RandomSource = rng if rng is not None else random.Random()
        self._heads: list[Optional[Element[K, V]]] = [None] * level
        self._length = 0

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def init(self) -> SkipList[K, V]:
        """Drop every element, keeping comparator and max level."""
        self._heads = [None] * self._level
        self._length = 0
        logger.debug("skip list reset (max_level=%d)", self._level)
        return self

    clear = init

    # ------------------------------------------------------------------
    # Levels
    # ------------------------------------------------------------------
    @property
    def max_level(self) -> int:
        return self._level

    def set_max_level(self, level: int) -> int:
        """Change the number of lanes and return the previous value.

        Growing appends empty lanes; existing elements keep their height.
        Shrinking drops the upper lanes and trims every element taller than
        ``level`` so no forward list outlives its lane.
        """
        _check_level(level)
        old, self._level = self._level, level
        if old == level:
            return old

        if level < old:
            del self._heads[level:]
            node = self._heads[0]
            while node is not None:
                if len(node.forward) > level:
                    del node.forward[level:]
                node = node.forward[0]
        else:
            self._heads.extend([None] * (level - old))

        logger.debug("skip list max level changed %d -> %d", old, level)
        return old

    def _random_level(self) -> int:
        return self._rng.randrange(self._level) + 1

    # ------------------------------------------------------------------
    # Traversal
    # ------------------------------------------------------------------
    def _find_prevs(self, key: K) -> list[Union[SkipList[K, V], Element[K, V]]]:
        # the list itself is the sentinel; heads play the role of its forward
        update: list[Union[SkipList[K, V], Element[K, V]]] = [self] * self._level
        prev: Union[SkipList[K, V], Element[K, V]] = self
        last: Optional[Element[K, V]] = None
        for i in reversed(range(self._level)):
            nxt = self._next_of(prev, i)
            while nxt is not last and self.compare(key, nxt.key):  # type: ignore[union-attr]
                prev = nxt  # type: ignore[assignment]
                nxt = nxt.forward[i]  # type: ignore[union-attr]
            update[i] = prev
            last = nxt
        return update

    def _next_of(self, node: Union[SkipList[K, V], Element[K, V]], i: int) -> Optional[Element[K, V]]:
        if node is self:
            return self._heads[i]
        return node.forward[i]  # type: ignore[union-attr]

    def _link(self, node: Union[SkipList[K, V], Element[K, V]], i: int, target: Optional[Element[K, V]]) -> None:
        if node is self:
            self._heads[i] = target
        else:
            node.forward[i] = target  # type: ignore[union-attr]

    def _match(self, candidate: Optional[Element[K, V]], key: K) -> bool:
        return candidate is not None and not self.compare(candidate.key, key)

    # ------------------------------------------------------------------
    # Query API
    # ------------------------------------------------------------------
    def get(self, key: K) -> Optional[Element[K, V]]:
        """Return the element stored under ``key`` or ``None``."""
        prev: Union[SkipList[K, V], Element[K, V]] = self
        nxt: Optional[Element[K, V]] = None
        last: Optional[Element[K, V]] = None
        for i in reversed(range(self._level)):
            nxt = self._next_of(prev, i)
            while nxt is not last and self.compare(key, nxt.key):  # type: ignore[union-attr]
                prev = nxt  # type: ignore[assignment]
                nxt = nxt.forward[i]  # type: ignore[union-attr]
            last = nxt
        if self._match(last, key):
            return last
        return None

    def get_value(self, key: K, default: Any = None) -> tuple[Any, bool]:
        """Shorthand for ``get(key).value``; the flag tells whether it exists."""
        element = self.get(key)
        if element is None:
            return default, False
        return element.value, True

    def front(self) -> Optional[Element[K, V]]:
        return self._heads[0]

    def __len__(self) -> int:
        return self._length

    # ------------------------------------------------------------------
    # Mutation API
    # ------------------------------------------------------------------
    def set(self, key: K, value: V) -> Element[K, V]:
        """Insert or update ``key``. Returns the affected element."""
        update = self._find_prevs(key)
        element = self._next_of(update[0], 0)
        if self._match(element, key):
            element.value = value  # type: ignore[union-attr]
            return element  # type: ignore[return-value]

        element = Element(key, value, self._random_level())
        for i in range(element.level):
            element.forward[i] = self._next_of(update[i], i)
            self._link(update[i], i, element)
        self._length += 1
        return element

    def remove(self, key: K) -> Optional[Element[K, V]]:
        """Unlink ``key`` and return its element, or ``None`` if absent."""
        update = self._find_prevs(key)
        element = self._next_of(update[0], 0)
        if not self._match(element, key):
            return None

        for i, nxt in enumerate(element.forward):  # type: ignore[union-attr]
            self._link(update[i], i, nxt)
        self._length -= 1
        return element

    def update(self, other: Union[Mapping[K, V], Iterable[tuple[K, V]]]) -> None:
        pairs = other.items() if isinstance(other, Mapping) else other
        for key, value in pairs:
            self.set(key, value)

    # ------------------------------------------------------------------
    # Mapping protocol
    # ------------------------------------------------------------------
    def __contains__(self, key: object) -> bool:
        return self.get(key) is not None  # type: ignore[arg-type]

    def __getitem__(self, key: K) -> V:
        element = self.get(key)
        if element is None:
            raise KeyError(key)
        return element.value

    def __setitem__(self, key: K, value: V) -> None:
        self.set(key, value)

    def __delitem__(self, key: K) -> None:
        if self.remove(key) is None:
            raise KeyError(key)

    # ------------------------------------------------------------------
    # Iteration helpers (ordered)
    # ------------------------------------------------------------------
    def elements(self) -> Iterator[Element[K, V]]:
        node = self._heads[0]
        while node is not None:
            yield node
            node = node.forward[0]

    def __iter__(self) -> Iterator[K]:
        for element in self.elements():
            yield element.key

    keys = __iter__

    def values(self) -> Iterator[V]:
        for element in self.elements():
            yield element.value

    def items(self) -> Iterator[tuple[K, V]]:
        for element in self.elements():
            yield element.key, element.value

    def __repr__(self) -> str:
        body = ", ".join(f"{k!r}: {v!r}" for k, v in self.items())
        return f"SkipList({{{body}}}, max_level={self._level})"
