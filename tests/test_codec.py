"""Unit tests for msgpack snapshots."""
import random

import msgpack
import pytest

from pyskiplist import SkipList, codec, comparators


@pytest.fixture
def populated():
    sl = SkipList(comparators.BYTES, max_level=6, rng=random.Random(11))
    sl.set(b"key2", b"value2")
    sl.set(b"key1", {"nested": [1, 2]})
    sl.set(b"key3", None)
    return sl


def test_snapshot_restores_contents(populated):
    blob = codec.dumps(populated)
    restored = codec.loads(blob, comparators.BYTES)

    assert restored.max_level == 6
    assert len(restored) == 3
    assert list(restored.items()) == list(populated.items())
    assert restored.get_value(b"key3") == (None, True)


def test_snapshot_of_empty_list():
    restored = codec.loads(codec.dumps(SkipList(max_level=3)))
    assert len(restored) == 0
    assert restored.max_level == 3
    assert restored.front() is None


def test_loads_with_other_order(populated):
    restored = codec.loads(codec.dumps(populated), comparators.BYTES_REVERSED)
    assert list(restored) == [b"key3", b"key2", b"key1"]


@pytest.mark.parametrize(
    "blob",
    [
        b"",
        b"\xc1",
        msgpack.packb(42),
        msgpack.packb([99, 4, 0, []]),
        msgpack.packb([codec.FORMAT_VERSION, 0, 0, []]),
        msgpack.packb([codec.FORMAT_VERSION, 4, 2, [[1, 2]]]),
        msgpack.packb([codec.FORMAT_VERSION, 4, 1, [[1, 2, 3]]]),
        msgpack.packb([codec.FORMAT_VERSION, True, 0, []]),
        msgpack.packb([codec.FORMAT_VERSION, 4, 2, [[1, 1], [1, 2]]]),
    ],
)
def test_malformed(blob):
    with pytest.raises(codec.CodecError):
        codec.loads(blob)


def test_comparator_rejecting_keys():
    """Keys of the wrong type for a typed comparator fail the load."""
    blob = msgpack.packb([codec.FORMAT_VERSION, 4, 2, [[1, "a"], ["x", "b"]]])
    with pytest.raises(codec.CodecError):
        codec.loads(blob, comparators.INT)


def test_tuples_come_back_as_lists():
    sl = SkipList()
    sl.set((1, 2), ("a", "b"))
    restored = codec.loads(codec.dumps(sl))
    assert list(restored.items()) == [([1, 2], ["a", "b"])]
