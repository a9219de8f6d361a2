"""Four-part version numbers of the controller and of this package."""

from __future__ import annotations

from dataclasses import dataclass

_UINT32_MAX = 0xFFFFFFFF


@dataclass(frozen=True, order=True)
class VersionInfo:
    """A version of the form major.minor.bugfix.build, ordered field by field."""

    major: int = 0
    minor: int = 0
    bugfix: int = 0
    build: int = 0

    def __post_init__(self) -> None:
        for name in ("major", "minor", "bugfix", "build"):
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool):
                raise TypeError(f"{name} must be an integer")
            if not 0 <= value <= _UINT32_MAX:
                raise ValueError(f"{name} out of range: {value}")

    @classmethod
    def from_string(cls, text: str) -> VersionInfo:
        """Parse ``major[.minor[.bugfix[.build]]]``; missing parts are zero."""
        parts = text.strip().split(".")
        if len(parts) > 4:
            raise ValueError(f"invalid version string: {text!r}")
        numbers = []
        for part in parts:
            part = part.strip()
            if not part.isdigit():
                raise ValueError(f"invalid version string: {text!r}")
            numbers.append(int(part))
        return cls(*numbers)

    def to_string(self) -> str:
        """Return the version as ``major.minor.bugfix.build``."""
        return f"{self.major}.{self.minor}.{self.bugfix}.{self.build}"

    def __str__(self) -> str:
        return self.to_string()


SDK_VERSION_INFO = VersionInfo(1, 2, 0, 0)