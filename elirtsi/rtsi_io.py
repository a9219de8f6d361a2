"""High-level RTSI interface that keeps recipe values synchronised in the background."""

from __future__ import annotations

import inspect
import os
import queue
import threading
from enum import IntEnum
from pathlib import Path
from typing import Any, Optional, TypeVar, Union

from .datatypes import (
    JointMode,
    RobotMode,
    SafetyMode,
    TaskStatus,
    ToolDigitalMode,
    ToolDigitalOutputMode,
    ToolMode,
    Vector3d,
    Vector6d,
)
from .log import LogLevel, log
from .recipe import RtsiRecipe, UnknownVariableTypeError
from .rtsi_client import DEFAULT_PORT, RtsiClient
from .version import VersionInfo

_SOURCE_FILE = "elirtsi/rtsi_io.py"
_ZERO3: Vector3d = (0.0, 0.0, 0.0)
_ZERO6: Vector6d = (0.0, 0.0, 0.0, 0.0, 0.0, 0.0)

_E = TypeVar("_E", bound=IntEnum)


class RecipeFileError(Exception):
    """A recipe file could not be opened or holds no variables."""


def _log(level: LogLevel, fmt: str, *args: object) -> None:
    frame = inspect.currentframe()
    caller = frame.f_back if frame is not None else None
    line = caller.f_lineno if caller is not None else 0
    log(_SOURCE_FILE, line, level, fmt, *args)


def _as_enum(cls: type[_E], value: int) -> Union[_E, int]:
    """Convert ``value`` to ``cls``, keeping the raw integer if it names no member."""
    try:
        return cls(value)
    except ValueError:
        return value


def read_recipe(path: Union[str, os.PathLike]) -> list[str]:
    """Read one variable name per line from a recipe file."""
    try:
        text = Path(path).read_text()
    except OSError as exc:
        reason = exc.strerror or str(exc)
        raise RecipeFileError(f"Opening file '{os.fspath(path)}' failed with error: {reason}") from exc
    if not text:
        raise RecipeFileError(f"The recipe '{os.fspath(path)}' file is empty exiting ")
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return lines


class RtsiIOInterface(RtsiClient):
    """RTSI session that subscribes to recipe files and syncs them on a background thread.

    Output values are refreshed continuously after :meth:`connect`; input values set
    through the ``set_*`` methods are sent with the next cycle.
    """

    def __init__(
        self,
        output_recipe_file: Union[str, os.PathLike],
        input_recipe_file: Union[str, os.PathLike],
        frequency: float,
        *,
        port: int = DEFAULT_PORT,
        timeout: float = 0.5,
    ) -> None:
        super().__init__(timeout)
        self.output_names = read_recipe(output_recipe_file)
        self.input_names = read_recipe(input_recipe_file)
        self.frequency = frequency
        self.port = port
        self.output_recipe: Optional[RtsiRecipe] = None
        self.input_recipe: Optional[RtsiRecipe] = None
        self._controller_version = VersionInfo()
        self._recv_thread: Optional[threading.Thread] = None
        self._recv_alive = False
        self._input_new_cmd = False

    # ----------------------------------------------------------------- session

    def connect(self, ip: str) -> bool:  # type: ignore[override]
        """Connect, set up both recipes, start syncing; return whether it all worked."""
        if self.is_connected() or self._recv_thread is not None:
            self.disconnect()

        RtsiClient.connect(self, ip, self.port)

        if not self.negotiate_protocol_version():
            _log(LogLevel.FATAL, "RTSI negitiate protocol version fail.")
            return False

        self._controller_version = RtsiClient.get_controller_version(self)

        try:
            self.input_recipe = self.setup_input_recipe(self.input_names)
            self.output_recipe = self.setup_output_recipe(self.output_names, self.frequency)
            if not self.start():
                _log(LogLevel.FATAL, "RTSI start signal send fail.")
                return False
        except UnknownVariableTypeError as exc:
            _log(LogLevel.FATAL, "RTSI setup recipe fail: %s. Check recipe files.", exc)
            self.disconnect()
            return False

        self._recv_alive = True
        first_result: queue.Queue[bool] = queue.Queue(maxsize=1)

        def run() -> None:
            # Receive one package first so values are valid as soon as connect returns.
            try:
                ok = self.receive_data(self.output_recipe, False)
            except Exception:
                ok = False
            first_result.put(ok)
            if ok:
                self._recv_loop()

        self._recv_thread = threading.Thread(target=run, name="rtsi-io-sync", daemon=True)
        self._recv_thread.start()
        return first_result.get()

    def disconnect(self) -> None:
        """Stop the sync thread and close the connection."""
        thread = self._recv_thread
        if thread is not None:
            self._recv_alive = False
            if thread is not threading.current_thread():
                thread.join()
            self._recv_thread = None
        RtsiClient.disconnect(self)

    def get_controller_version(self) -> VersionInfo:
        """Return the controller version read when connecting."""
        return self._controller_version

    def _recv_loop(self) -> None:
        period_ms = (1 / self.frequency) * 1000
        _log(LogLevel.INFO, "RTSI IO interface sync thread start, period %lfms".replace("%lf", "%f"), period_ms)
        while self._recv_alive:
            try:
                self.receive_data(self.output_recipe, False)
                if self._input_new_cmd:
                    self._input_new_cmd = False
                    self.send(self.input_recipe)
            except Exception:
                self._recv_alive = False
        _log(LogLevel.INFO, "RTSI IO interface sync thread dropped")

    # ------------------------------------------------------------ value access

    def _set_input(self, name: str, value: Any) -> bool:
        recipe = self.input_recipe
        if recipe is None or name not in recipe:
            return False
        try:
            recipe.set_value(name, value)
        except (KeyError, TypeError, ValueError):
            return False
        self._input_new_cmd = True
        return True

    def _get(self, name: str, default: Any) -> Any:
        for recipe in (self.output_recipe, self.input_recipe):
            if recipe is not None and name in recipe:
                try:
                    return recipe.get_value(name)
                except KeyError:
                    continue
        return default

    # ----------------------------------------------------------------- setters

    def set_speed_scaling(self, slider: float) -> bool:
        if self.input_recipe is not None:
            if not self._set_input("speed_slider_mask", 1):
                return False
            if not self._set_input("speed_slider_fraction", slider):
                return False
        return True

    def set_standard_digital(self, index: int, level: bool) -> bool:
        if self.input_recipe is not None:
            if not self._set_input("standard_digital_output_mask", (1 << index) & 0xFFFF):
                return False
            if not self._set_input("standard_digital_output", (int(bool(level)) << index) & 0xFFFF):
                return False
        return True

    def set_configure_digital(self, index: int, level: bool) -> bool:
        if self.input_recipe is not None:
            if not self._set_input("configurable_digital_output_mask", (1 << index) & 0xFF):
                return False
            if not self._set_input("configurable_digital_output", (int(bool(level)) << index) & 0xFF):
                return False
        return True

    def _set_analog_output(self, index: int, level: float, output_type: int) -> bool:
        if not self._set_input("standard_analog_output_type", output_type):
            return False
        if index == 0:
            return self._set_input("standard_analog_output_mask", 1) and self._set_input(
                "standard_analog_output_0", level
            )
        if index == 1:
            return self._set_input("standard_analog_output_mask", 2) and self._set_input(
                "standard_analog_output_1", level
            )
        return self._set_input("standard_analog_output_mask", 0)

    def set_analog_output_voltage(self, index: int, value: float) -> bool:
        """Set a standard analog output to ``value`` volts (0-10 V)."""
        if self.input_recipe is not None:
            return self._set_analog_output(index, value / 10.0, 3)
        return True

    def set_analog_output_current(self, index: int, value: float) -> bool:
        """Set a standard analog output to ``value`` amperes (4-20 mA)."""
        if self.input_recipe is not None:
            return self._set_analog_output(index, (value - 0.004) / (0.02 - 0.004), 0)
        return True

    def set_external_force_torque(self, value: Vector6d) -> bool:
        if self.input_recipe is not None:
            if not self._set_input("external_force_torque", value):
                return False
        return True

    def set_tool_digital_output(self, index: int, level: bool) -> bool:
        if self.input_recipe is not None:
            if not self._set_input("tool_digital_output_mask", (1 << index) & 0xFF):
                return False
            if not self._set_input("tool_digital_output", (int(bool(level)) << index) & 0xFF):
                return False
        return True

    # ----------------------------------------------------------------- getters

    def get_timestamp(self) -> float:
        return self._get("timestamp", 0.0)

    def get_payload_mass(self) -> float:
        return self._get("payload_mass", 0.0)

    def get_payload_cog(self) -> Vector3d:
        return self._get("payload_cog", _ZERO3)

    def get_target_joint_positions(self) -> Vector6d:
        return self._get("target_joint_positions", _ZERO6)

    def get_script_control_line(self) -> int:
        return self._get("script_control_line", 0)

    def get_target_joint_velocity(self) -> Vector6d:
        return self._get("target_joint_speeds", _ZERO6)

    def get_actual_joint_positions(self) -> Vector6d:
        return self._get("actual_joint_positions", _ZERO6)

    def get_actual_joint_torques(self) -> Vector6d:
        return self._get("actual_joint_torques", _ZERO6)

    def get_actual_joint_velocity(self) -> Vector6d:
        return self._get("actual_joint_speeds", _ZERO6)

    def get_actual_joint_current(self) -> Vector6d:
        return self._get("actual_joint_current", _ZERO6)

    def get_actual_joint_temperatures(self) -> Vector6d:
        return self._get("joint_temperatures", _ZERO6)

    def get_actual_tcp_pose(self) -> Vector6d:
        return self._get("actual_TCP_pose", _ZERO6)

    def get_actual_tcp_velocity(self) -> Vector6d:
        return self._get("actual_TCP_speed", _ZERO6)

    def get_actual_tcp_force(self) -> Vector6d:
        return self._get("actual_TCP_force", _ZERO6)

    def get_target_tcp_pose(self) -> Vector6d:
        return self._get("target_TCP_pose", _ZERO6)

    def get_target_tcp_velocity(self) -> Vector6d:
        return self._get("target_TCP_speed", _ZERO6)

    def get_digital_input_bits(self) -> int:
        return self._get("actual_digital_input_bits", 0)

    def get_digital_output_bits(self) -> int:
        return self._get("actual_digital_output_bits", 0)

    def get_robot_mode(self) -> Union[RobotMode, int]:
        return _as_enum(RobotMode, self._get("robot_mode", 0))

    def get_joint_mode(self) -> tuple[Union[JointMode, int], ...]:
        modes = self._get("joint_mode", (0,) * 6)
        return tuple(_as_enum(JointMode, mode) for mode in modes)

    def get_safety_status(self) -> Union[SafetyMode, int]:
        return _as_enum(SafetyMode, self._get("safety_status", 0))

    def get_actual_speed_scaling(self) -> float:
        return self._get("speed_scaling", 0.0)

    def get_target_speed_scaling(self) -> float:
        return self._get("target_speed_fraction", 0.0)

    def get_robot_voltage(self) -> float:
        return self._get("actual_robot_voltage", 0.0)

    def get_robot_current(self) -> float:
        return self._get("actual_robot_current", 0.0)

    def get_runtime_state(self) -> Union[TaskStatus, int]:
        return _as_enum(TaskStatus, self._get("runtime_state", 0))

    def get_elbow_position(self) -> Vector3d:
        return self._get("elbow_position", _ZERO3)

    def get_elbow_velocity(self) -> Vector3d:
        return self._get("elbow_velocity", _ZERO3)

    def get_robot_status(self) -> int:
        return self._get("robot_status_bits", 0)

    def get_safety_status_bits(self) -> int:
        return self._get("safety_status_bits", 0)

    def get_analog_io_types(self) -> int:
        return self._get("analog_io_types", 0)

    def get_analog_input(self, index: int) -> float:
        name = "standard_analog_input0" if index == 0 else "standard_analog_input1"
        return self._get(name, 0.0)

    def get_analog_output(self, index: int) -> float:
        name = "standard_analog_output0" if index == 0 else "standard_analog_output1"
        return self._get(name, 0.0)

    def get_io_current(self) -> float:
        return self._get("io_current", 0.0)

    def get_tool_mode(self) -> Union[ToolMode, int]:
        return _as_enum(ToolMode, self._get("tool_mode", 0))

    def get_tool_analog_input_type(self) -> int:
        return self._get("tool_analog_input_types", 0)

    def get_tool_analog_output_type(self) -> int:
        return self._get("tool_analog_output_types", 0)

    def get_tool_analog_input(self) -> float:
        return self._get("tool_analog_input", 0.0)

    def get_tool_analog_output(self) -> float:
        return self._get("tool_analog_output", 0.0)

    def get_tool_output_voltage(self) -> float:
        return self._get("tool_output_voltage", 0.0)

    def get_tool_output_current(self) -> float:
        return self._get("tool_output_current", 0.0)

    def get_tool_output_temperature(self) -> float:
        return self._get("tool_temperature", 0.0)

    def get_tool_digital_mode(self) -> Union[ToolDigitalMode, int]:
        return _as_enum(ToolDigitalMode, self._get("tool_digital_mode", 0))

    def get_tool_digital_output_mode(self, index: int) -> Union[ToolDigitalOutputMode, int]:
        if index in (0, 1, 2, 3):
            return _as_enum(ToolDigitalOutputMode, self._get(f"tool_digital{index}_mode", 0))
        return ToolDigitalOutputMode.PUSH_PULL_MODE

    def get_out_bool_registers_0_to_31(self) -> int:
        return self._get("output_bit_registers0_to_31", 0)

    def get_out_bool_registers_32_to_63(self) -> int:
        return self._get("output_bit_registers32_to_63", 0)

    def get_in_bool_registers_0_to_31(self) -> int:
        return self._get("input_bit_registers0_to_31", 0)

    def get_in_bool_registers_32_to_63(self) -> int:
        return self._get("input_bit_registers32_to_63", 0)

    def get_in_bool_register(self, index: int) -> bool:
        return bool(self._get(f"input_bit_register{index}", False))

    def get_out_bool_register(self, index: int) -> bool:
        return bool(self._get(f"output_bit_register{index}", False))

    def get_in_int_register(self, index: int) -> int:
        return self._get(f"input_int_register{index}", 0)

    def get_out_int_register(self, index: int) -> int:
        return self._get(f"output_int_register{index}", 0)

    def get_in_double_register(self, index: int) -> float:
        return self._get(f"input_double_register{index}", 0.0)

    def get_out_double_register(self, index: int) -> float:
        return self._get(f"output_double_register{index}", 0.0)