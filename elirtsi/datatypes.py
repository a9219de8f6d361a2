"""Enumerations and value types shared by the robot interfaces."""

from __future__ import annotations

from enum import IntEnum

Vector3d = tuple[float, float, float]
Vector6d = tuple[float, float, float, float, float, float]
Vector6Int32 = tuple[int, int, int, int, int, int]
Vector6UInt32 = tuple[int, int, int, int, int, int]

# Scaling factors used when encoding control values as integers on the wire.
POS_ZOOM_RATIO = 1000000
COMMON_ZOOM_RATIO = 1000000
TIME_ZOOM_RATIO = 1000


class RobotMode(IntEnum):
    """Overall operating mode of the robot."""

    UNKNOWN = -2
    NO_CONTROLLER = -1
    DISCONNECTED = 0
    CONFIRM_SAFETY = 1
    BOOTING = 2
    POWER_OFF = 3
    POWER_ON = 4
    IDLE = 5
    BACKDRIVE = 6
    RUNNING = 7
    UPDATING_FIRMWARE = 8
    WAITING_CALIBRATION = 9


class JointMode(IntEnum):
    """Operating mode of a single joint."""

    MODE_RESET = 235
    MODE_SHUTTING_DOWN = 236
    MODE_BACKDRIVE = 238
    MODE_POWER_OFF = 239
    MODE_READY_FOR_POWEROFF = 240
    MODE_NOT_RESPONDING = 245
    MODE_MOTOR_INITIALISATION = 246
    MODE_BOOTING = 247
    MODE_BOOTLOADER = 249
    MODE_VIOLATION = 251
    MODE_FAULT = 252
    MODE_RUNNING = 253
    MODE_IDLE = 255


class SafetyMode(IntEnum):
    """Safety state reported by the safety controller."""

    UNKNOWN = -2
    NORMAL = 1
    REDUCED = 2
    PROTECTIVE_STOP = 3
    RECOVERY = 4
    SAFEGUARD_STOP = 5
    SYSTEM_EMERGENCY_STOP = 6
    ROBOT_EMERGENCY_STOP = 7
    VIOLATION = 8
    FAULT = 9
    VALIDATE_JOINT_ID = 10
    UNDEFINED_SAFETY_MODE = 11
    AUTOMATIC_MODE_SAFEGUARD_STOP = 12
    SYSTEM_THREE_POSITION_ENABLING_STOP = 13
    TP_THREE_POSITION_ENABLING_STOP = 14


class ToolMode(IntEnum):
    """Operating mode of the tool board."""

    MODE_RESET = 235
    MODE_SHUTTING_DOWN = 236
    MODE_POWER_OFF = 239
    MODE_NOT_RESPONDING = 245
    MODE_BOOTING = 247
    MODE_BOOTLOADER = 249
    MODE_FAULT = 252
    MODE_RUNNING = 253
    MODE_IDLE = 255


class ToolDigitalMode(IntEnum):
    """Which tool digital pins are available."""

    SINGLE_NEEDLE = 0
    DOUBLE_NEEDLE_1 = 1
    DOUBLE_NEEDLE_2 = 2
    TRIPLE_NEEDLE = 3


class ToolDigitalOutputMode(IntEnum):
    """Electrical mode of a tool digital output."""

    PUSH_PULL_MODE = 0
    SOURCING_PNP_MODE = 1
    SINKING_NPN_MODE = 2


class TaskStatus(IntEnum):
    """Runtime state of the robot program."""

    UNKNOWN = 0
    PLAYING = 1
    PAUSED = 2
    STOPPED = 3


class TrajectoryMotionResult(IntEnum):
    """Outcome of a forwarded trajectory."""

    SUCCESS = 0
    CANCELED = 1
    FAILURE = 2


class TrajectoryControlAction(IntEnum):
    """Control command for trajectory forwarding."""

    CANCEL = -1
    NOOP = 0
    START = 1


class ToolVoltage(IntEnum):
    """Supply voltage of the tool connector."""

    OFF = 0
    V_12 = 12
    V_24 = 24


class ForceMode(IntEnum):
    """How the force frame is derived in force control mode."""

    FIX = 0
    POINT = 1
    MOTION = 2
    TCP = 3


class FreedriveAction(IntEnum):
    """Freedrive mode control command."""

    FREEDRIVE_END = -1
    FREEDRIVE_NOOP = 0
    FREEDRIVE_START = 1


class ControlMode(IntEnum):
    """Control mode sent to the external control script."""

    MODE_STOPPED = -2
    MODE_UNINITIALIZED = -1
    MODE_IDLE = 0
    MODE_SERVOJ = 1
    MODE_SPEEDJ = 2
    MODE_TRAJECTORY = 3
    MODE_SPEEDL = 4
    MODE_POSE = 5
    MODE_FREEDRIVE = 6
    MODE_TOOL_IN_CONTACT = 7
    MODE_SERVOJ_QUEUE = 8
    MODE_POSE_QUEUE = 9