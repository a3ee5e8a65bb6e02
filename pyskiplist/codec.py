"""Snapshot encoding of a skip list's contents.

The blob is a single *msgpack* array::

    [version, max_level, length, [[key, value], ...]]

with pairs in list order. Only data is stored; the comparator is code and
must be supplied again on :func:`loads`. Keys and values therefore have to
be msgpack-encodable (bytes, str, numbers, lists, dicts, ...). msgpack has a
single array type, so tuple keys and values come back as lists.
"""
from __future__ import annotations

import logging
from typing import Any, Optional

import msgpack

from .comparators import ascending
from .skiplist import GreaterThan, RandomSource, SkipList

__all__ = ["dumps", "loads", "CodecError", "FORMAT_VERSION"]

logger = logging.getLogger(__name__)

FORMAT_VERSION = 1


class CodecError(ValueError):
    """Raised when a blob is not a valid skip list snapshot."""


def dumps(skiplist: SkipList[Any, Any]) -> bytes:
    pairs = [[k, v] for k, v in skiplist.items()]
    return msgpack.packb(
        [FORMAT_VERSION, skiplist.max_level, len(skiplist), pairs],
        use_bin_type=True,
    )


def loads(
    blob: bytes,
    compare: GreaterThan = ascending,
    *,
    rng: Optional[RandomSource] = None,
) -> SkipList[Any, Any]:
    """Rebuild a list from :func:`dumps` output, ordered by ``compare``."""
    try:
        version, max_level, length, pairs = msgpack.unpackb(blob, raw=False)
    except (msgpack.UnpackException, ValueError, TypeError) as exc:
        raise CodecError(f"malformed skip list snapshot: {exc}") from exc

    if version != FORMAT_VERSION:
        raise CodecError(f"unsupported snapshot version {version!r}")
    if not isinstance(max_level, int) or isinstance(max_level, bool) or max_level <= 0:
        raise CodecError(f"invalid max level {max_level!r}")
    if not isinstance(pairs, list) or len(pairs) != length:
        raise CodecError(f"snapshot declares {length!r} pairs")

    skiplist: SkipList[Any, Any] = SkipList(compare, max_level=max_level, rng=rng)
    for pair in pairs:
        if not isinstance(pair, list) or len(pair) != 2:
            raise CodecError(f"invalid pair {pair!r}")
        try:
            skiplist.set(pair[0], pair[1])
        except TypeError as exc:
            raise CodecError(f"key {pair[0]!r} rejected by comparator: {exc}") from exc
    if len(skiplist) != length:
        raise CodecError(f"snapshot declares {length} pairs but holds {len(skiplist)} distinct keys")
    logger.debug("loaded skip list snapshot: %d pairs, max_level=%d", length, max_level)
    return skiplist
