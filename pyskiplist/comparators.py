"""Built-in *greater than* comparators.

A comparator ``f(lhs, rhs)`` returns true iff ``lhs`` sorts after ``rhs``.
Equal keys must give false in both directions. The plain ``*`` names order
keys ascending; the ``*_REVERSED`` ones order them descending.

The typed comparators refuse operands of the wrong type with ``TypeError``,
which catches mixed-type keys early instead of producing an odd order.
"""
from __future__ import annotations

from collections.abc import Callable
from typing import Any

__all__ = [
    "ascending",
    "descending",
    "by_key",
    "INT",
    "INT_REVERSED",
    "FLOAT",
    "FLOAT_REVERSED",
    "STRING",
    "STRING_REVERSED",
    "BYTES",
    "BYTES_REVERSED",
]


def ascending(lhs: Any, rhs: Any) -> bool:
    return lhs > rhs


def descending(lhs: Any, rhs: Any) -> bool:
    return lhs < rhs


def by_key(func: Callable[[Any], Any], reverse: bool = False) -> Callable[[Any, Any], bool]:
    """Compare keys by ``func(key)``, like the ``key=`` argument of ``sorted``."""
    if reverse:
        return lambda lhs, rhs: func(lhs) < func(rhs)
    return lambda lhs, rhs: func(lhs) > func(rhs)


def _typed(name: str, types: tuple[type, ...], reverse: bool,
           convert: Callable[[Any], Any] | None = None) -> Callable[[Any, Any], bool]:
    def check(value: Any) -> Any:
        # bool is an int subclass; it is not a valid numeric key here
        if not isinstance(value, types) or isinstance(value, bool):
            raise TypeError(f"{name} comparator got {type(value).__name__} key {value!r}")
        return convert(value) if convert is not None else value

    if reverse:
        def compare(lhs: Any, rhs: Any) -> bool:
            return check(lhs) < check(rhs)
    else:
        def compare(lhs: Any, rhs: Any) -> bool:
            return check(lhs) > check(rhs)

    compare.__name__ = compare.__qualname__ = name
    return compare


INT = _typed("INT", (int,), False)
INT_REVERSED = _typed("INT_REVERSED", (int,), True)
FLOAT = _typed("FLOAT", (int, float), False)
FLOAT_REVERSED = _typed("FLOAT_REVERSED", (int, float), True)
STRING = _typed("STRING", (str,), False)
STRING_REVERSED = _typed("STRING_REVERSED", (str,), True)
# memoryview has no ordering of its own
BYTES = _typed("BYTES", (bytes, bytearray, memoryview), False, bytes)
BYTES_REVERSED = _typed("BYTES_REVERSED", (bytes, bytearray, memoryview), True, bytes)
