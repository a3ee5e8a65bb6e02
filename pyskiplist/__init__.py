"""pyskiplist: an ordered key/value container built on a probabilistic skip list.

The engine lives in `pyskiplist.SkipList`; ordering functions for common key
types are in `pyskiplist.comparators` and msgpack snapshots in
`pyskiplist.codec`.
"""

from __future__ import annotations

__all__ = [
    "SkipList",
    "Element",
    "DEFAULT_MAX_LEVEL",
    "comparators",
    "codec",
]

from . import codec, comparators
from .skiplist import DEFAULT_MAX_LEVEL, Element, SkipList
