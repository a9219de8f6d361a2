import math

import pytest

from elirtsi.endian import (
    KINDS,
    pack,
    pack_array,
    size_of,
    split_string,
    unpack,
    unpack_array,
)


def test_split_string_basic():
    assert split_string("DOUBLE,UINT32,BOOL", ",") == ["DOUBLE", "UINT32", "BOOL"]


def test_split_string_multi_char_delimiter():
    assert split_string("a::b::c", "::") == ["a", "b", "c"]


def test_split_string_empty_delimiter():
    with pytest.raises(ValueError):
        split_string("abc", "")


def test_pack_is_big_endian():
    assert pack("uint16", 0x1234) == b"\x12\x34"
    assert pack("uint32", 0x01020304) == b"\x01\x02\x03\x04"


def test_pack_double_one():
    assert pack("double", 1.0) == b"\x3f\xf0\x00\x00\x00\x00\x00\x00"


def test_pack_bool():
    assert pack("bool", True) == b"\x01"
    assert pack("bool", False) == b"\x00"


@pytest.mark.parametrize(
    "kind,value",
    [
        ("bool", True),
        ("int8", -5),
        ("uint8", 200),
        ("int16", -1234),
        ("uint16", 65535),
        ("int32", -123456),
        ("uint32", 4000000000),
        ("int64", -(2**40)),
        ("uint64", 2**63),
        ("double", 3.25),
        ("float", 0.5),
    ],
)
def test_scalar_round_trip(kind, value):
    data = pack(kind, value)
    assert len(data) == size_of(kind)
    decoded, offset = unpack(kind, data, 0)
    assert decoded == value
    assert offset == len(data)


def test_unpack_advances_offset():
    data = b"\xff" + pack("uint16", 7) + pack("int32", -2)
    first, offset = unpack("uint16", data, 1)
    second, offset = unpack("int32", data, offset)
    assert (first, second) == (7, -2)
    assert offset == len(data)


def test_unpack_bool_nonzero_is_true():
    value, offset = unpack("bool", b"\x05", 0)
    assert value is True
    assert offset == 1


def test_unpack_short_buffer():
    with pytest.raises(ValueError):
        unpack("uint32", b"\x00\x01", 0)
    with pytest.raises(ValueError):
        unpack("uint8", b"\x00", 1)


def test_unknown_kind():
    with pytest.raises(ValueError):
        pack("vector", 1)
    with pytest.raises(ValueError):
        unpack("char", b"\x00", 0)


def test_pack_out_of_range():
    with pytest.raises(ValueError):
        pack("uint8", 256)
    with pytest.raises(ValueError):
        pack("uint16", -1)


def test_array_round_trip():
    values = (1.5, -2.0, 0.0, 1e-3, 42.0, math.pi)
    data = pack_array("double", values)
    assert len(data) == 6 * size_of("double")
    decoded, offset = unpack_array("double", 6, data, 0)
    assert decoded == values
    assert offset == len(data)


def test_array_matches_scalar_concatenation():
    values = [1, -2, 3]
    assert pack_array("int32", values) == b"".join(pack("int32", v) for v in values)


def test_unpack_array_with_offset():
    data = b"\x00\x00" + pack_array("uint32", [10, 20, 30])
    decoded, offset = unpack_array("uint32", 3, data, 2)
    assert decoded == (10, 20, 30)
    assert offset == len(data)


def test_unpack_array_errors():
    with pytest.raises(ValueError):
        unpack_array("double", 3, pack_array("double", [1.0, 2.0]), 0)
    with pytest.raises(ValueError):
        unpack_array("double", -1, b"", 0)


def test_kinds_all_have_sizes():
    assert all(size_of(kind) >= 1 for kind in KINDS)
    assert size_of("double") == size_of("uint64")