"""RTSI recipes: named variables, their wire types and their current values."""

from __future__ import annotations

import threading
from collections.abc import Iterable
from enum import Enum
from typing import Any, Optional

from . import endian


class RtsiRecipeError(Exception):
    """A recipe could not be set up, decoded or encoded."""


class UnknownVariableTypeError(RtsiRecipeError):
    """The controller reported a type this client does not know for a variable."""


class RtsiType(Enum):
    """Wire type of an RTSI variable, as named by the controller."""

    BOOL = "BOOL"
    UINT8 = "UINT8"
    UINT16 = "UINT16"
    UINT32 = "UINT32"
    UINT64 = "UINT64"
    INT32 = "INT32"
    DOUBLE = "DOUBLE"
    VECTOR3D = "VECTOR3D"
    VECTOR6D = "VECTOR6D"
    VECTOR6INT32 = "VECTOR6INT32"
    VECTOR6UINT32 = "VECTOR6UINT32"

    @property
    def kind(self) -> str:
        """Scalar kind of the value or of each vector element."""
        return _LAYOUT[self][0]

    @property
    def count(self) -> Optional[int]:
        """Number of vector elements, or None for a scalar."""
        return _LAYOUT[self][1]

    def default(self) -> Any:
        """Initial value of a variable of this type."""
        zero = _scalar_default(self.kind)
        return zero if self.count is None else (zero,) * self.count

    def coerce(self, value: Any) -> Any:
        """Check ``value`` against this type and return it in canonical form."""
        if self.count is None:
            return _coerce_scalar(self.kind, value)
        values = tuple(value)
        if len(values) != self.count:
            raise ValueError(f"{self.value} needs {self.count} elements, got {len(values)}")
        return tuple(_coerce_scalar(self.kind, item) for item in values)

    def encode(self, value: Any) -> bytes:
        if self.count is None:
            return endian.pack(self.kind, value)
        return endian.pack_array(self.kind, value)

    def decode(self, data: bytes, offset: int) -> tuple[Any, int]:
        if self.count is None:
            return endian.unpack(self.kind, data, offset)
        return endian.unpack_array(self.kind, self.count, data, offset)


_LAYOUT: dict[RtsiType, tuple[str, Optional[int]]] = {
    RtsiType.BOOL: ("bool", None),
    RtsiType.UINT8: ("uint8", None),
    RtsiType.UINT16: ("uint16", None),
    RtsiType.UINT32: ("uint32", None),
    RtsiType.UINT64: ("uint64", None),
    RtsiType.INT32: ("int32", None),
    RtsiType.DOUBLE: ("double", None),
    RtsiType.VECTOR3D: ("double", 3),
    RtsiType.VECTOR6D: ("double", 6),
    RtsiType.VECTOR6INT32: ("int32", 6),
    RtsiType.VECTOR6UINT32: ("uint32", 6),
}


def _scalar_default(kind: str) -> Any:
    if kind == "bool":
        return False
    if kind == "double":
        return 0.0
    return 0


def _coerce_scalar(kind: str, value: Any) -> Any:
    if kind == "double":
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise TypeError(f"expected a number, got {value!r}")
        return float(value)
    if kind == "bool":
        if isinstance(value, bool):
            return value
        if isinstance(value, int) and value in (0, 1):
            return bool(value)
        raise TypeError(f"expected a boolean, got {value!r}")
    if isinstance(value, bool):
        value = int(value)
    if not isinstance(value, int):
        raise TypeError(f"expected an integer, got {value!r}")
    endian.pack(kind, value)  # range check
    return value


# Offset of the recipe id within an RTSI message: after length (2) and type (1).
_RECIPE_ID_OFFSET = 3


class RtsiRecipe:
    """An ordered list of RTSI variables bound to a recipe id."""

    def __init__(self, names: Iterable[str]) -> None:
        self._names = tuple(names)
        self.recipe_id = 0
        self._types: dict[str, RtsiType] = {}
        self._values: dict[str, Any] = {}
        self._lock = threading.Lock()

    @property
    def names(self) -> tuple[str, ...]:
        return self._names

    @property
    def types(self) -> dict[str, RtsiType]:
        with self._lock:
            return dict(self._types)

    def __contains__(self, name: object) -> bool:
        return name in self._names

    def parse_type_package(self, package: bytes) -> None:
        """Read the recipe id and variable types from a setup reply message."""
        package = bytes(package)
        if len(package) <= _RECIPE_ID_OFFSET:
            raise RtsiRecipeError("setup package too short")
        recipe_id = package[_RECIPE_ID_OFFSET]
        text = package[_RECIPE_ID_OFFSET + 1:].decode("ascii", errors="replace")
        type_names = endian.split_string(text, ",")
        if len(type_names) != len(self._names):
            raise RtsiRecipeError("not match recipe")

        types: dict[str, RtsiType] = {}
        values: dict[str, Any] = {}
        for name, type_name in zip(self._names, type_names):
            try:
                rtsi_type = RtsiType(type_name)
            except ValueError:
                raise UnknownVariableTypeError(f'variable "{name}" error type: {type_name}') from None
            types.setdefault(name, rtsi_type)
            values.setdefault(name, rtsi_type.default())

        with self._lock:
            self.recipe_id = recipe_id
            self._types = types
            self._values = values

    def parse_data_package(self, package: bytes) -> bool:
        """Update values from a data message; return False if it is for another recipe."""
        package = bytes(package)
        if len(package) <= _RECIPE_ID_OFFSET:
            raise RtsiRecipeError("data package too short")
        with self._lock:
            if package[_RECIPE_ID_OFFSET] != self.recipe_id:
                return False
            if not self._types:
                raise RtsiRecipeError("recipe types are not set up")
            offset = _RECIPE_ID_OFFSET + 1
            updated: dict[str, Any] = {}
            for name in self._names:
                try:
                    updated[name], offset = self._types[name].decode(package, offset)
                except ValueError as exc:
                    raise RtsiRecipeError(f"data package too short for {name!r}") from exc
            self._values.update(updated)
        return True

    def pack(self) -> bytes:
        """Encode the recipe id followed by every value, in recipe order."""
        with self._lock:
            parts = [bytes([self.recipe_id])]
            for name in self._names:
                if name not in self._values:
                    raise RtsiRecipeError("bad recipe")
                parts.append(self._types[name].encode(self._values[name]))
        return b"".join(parts)

    def get_value(self, name: str) -> Any:
        """Return the current value of ``name``."""
        with self._lock:
            try:
                return self._values[name]
            except KeyError:
                raise KeyError(name) from None

    def set_value(self, name: str, value: Any) -> None:
        """Set ``name`` to ``value``, checked against the variable's type."""
        with self._lock:
            try:
                rtsi_type = self._types[name]
            except KeyError:
                raise KeyError(name) from None
            self._values[name] = rtsi_type.coerce(value)