"""Big-endian packing of scalar values and string splitting helpers."""

from __future__ import annotations

import struct
from collections.abc import Iterable
from typing import Any

_CODES = {
    "bool": "?",
    "int8": "b",
    "uint8": "B",
    "int16": "h",
    "uint16": "H",
    "int32": "i",
    "uint32": "I",
    "int64": "q",
    "uint64": "Q",
    "float": "f",
    "double": "d",
}

_STRUCTS = {kind: struct.Struct(">" + code) for kind, code in _CODES.items()}

KINDS = tuple(_CODES)


def _code_for(kind: str) -> str:
    try:
        return _CODES[kind]
    except KeyError:
        raise ValueError(f"unknown scalar kind: {kind!r}") from None


def size_of(kind: str) -> int:
    """Return the number of bytes a value of ``kind`` occupies."""
    _code_for(kind)
    return _STRUCTS[kind].size


def split_string(text: str, delimiter: str) -> list[str]:
    """Split ``text`` on every occurrence of ``delimiter``."""
    if not delimiter:
        raise ValueError("delimiter must not be empty")
    return text.split(delimiter)


def pack(kind: str, value: Any) -> bytes:
    """Encode a scalar as big-endian bytes."""
    _code_for(kind)
    try:
        return _STRUCTS[kind].pack(value)
    except struct.error as exc:
        raise ValueError(f"cannot pack {value!r} as {kind}: {exc}") from exc


def _check_span(data: bytes, offset: int, size: int) -> int:
    end = offset + size
    if offset < 0 or end > len(data):
        raise ValueError(f"buffer of {len(data)} bytes too short to read {size} bytes at offset {offset}")
    return end


def unpack(kind: str, data: bytes, offset: int = 0) -> tuple[Any, int]:
    """Decode a big-endian scalar at ``offset``; return the value and the next offset."""
    _code_for(kind)
    layout = _STRUCTS[kind]
    end = _check_span(data, offset, layout.size)
    (value,) = layout.unpack_from(data, offset)
    return value, end


def pack_array(kind: str, values: Iterable[Any]) -> bytes:
    """Encode a sequence of scalars one after another."""
    return b"".join(pack(kind, value) for value in values)


def unpack_array(kind: str, count: int, data: bytes, offset: int = 0) -> tuple[tuple[Any, ...], int]:
    """Decode ``count`` scalars at ``offset``; return them as a tuple and the next offset."""
    if count < 0:
        raise ValueError("count must not be negative")
    layout = struct.Struct(f">{count}{_code_for(kind)}")
    end = _check_span(data, offset, layout.size)
    return layout.unpack_from(data, offset), end