"""Exception events reported by the robot controller."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Union

_UINT64_MAX = 0xFFFFFFFFFFFFFFFF


class RobotExceptionType(IntEnum):
    """Kind of robot exception."""

    ROBOT_DISCONNECTED = -1
    ROBOT_ERROR = 6
    SCRIPT_RUNTIME = 10


@dataclass(frozen=True)
class RobotException:
    """Common properties of a robot exception: its type and timestamp in milliseconds."""

    type: RobotExceptionType
    timestamp: int

    def __post_init__(self) -> None:
        object.__setattr__(self, "type", RobotExceptionType(self.type))
        if not isinstance(self.timestamp, int) or isinstance(self.timestamp, bool):
            raise TypeError("timestamp must be an integer")
        if not 0 <= self.timestamp <= _UINT64_MAX:
            raise ValueError(f"timestamp out of range: {self.timestamp}")


ErrorData = Union[int, float, str]


@dataclass(frozen=True)
class RobotError(RobotException):
    """An error raised by the controller or hardware, with code, source, level and data."""

    class Source(IntEnum):
        """Module the error comes from."""

        SAFETY = 99
        GUI = 103
        CONTROLLER = 104
        RTSI = 105
        JOINT = 120
        TOOL = 121
        TP = 122
        JOINT_FPGA = 200
        TOOL_FPGA = 201

    class DataType(IntEnum):
        """How the additional data is to be read."""

        NONE = 0
        UNSIGNED = 1
        SIGNED = 2
        FLOAT = 3
        HEX = 4
        STRING = 5
        JOINT = 6

    class Level(IntEnum):
        """Severity of the error."""

        INFO = 0
        WARNING = 1
        ERROR = 2
        FATAL = 3

    type: RobotExceptionType = field(default=RobotExceptionType.ROBOT_ERROR, init=False)
    code: int
    sub_code: int
    source: RobotError.Source
    level: RobotError.Level
    data_type: RobotError.DataType
    data: ErrorData

    def __post_init__(self) -> None:
        super().__post_init__()
        object.__setattr__(self, "source", RobotError.Source(self.source))
        object.__setattr__(self, "level", RobotError.Level(self.level))
        object.__setattr__(self, "data_type", RobotError.DataType(self.data_type))


@dataclass(frozen=True)
class RobotRuntimeException(RobotException):
    """A script runtime or syntax error, located by line and column."""

    type: RobotExceptionType = field(default=RobotExceptionType.SCRIPT_RUNTIME, init=False)
    line: int
    column: int
    message: str