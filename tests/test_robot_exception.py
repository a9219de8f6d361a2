import dataclasses

import pytest

from elirtsi.robot_exception import (
    RobotError,
    RobotException,
    RobotExceptionType,
    RobotRuntimeException,
)


def _error(**overrides):
    args = dict(
        timestamp=1000,
        code=42,
        sub_code=3,
        source=RobotError.Source.JOINT,
        level=RobotError.Level.ERROR,
        data_type=RobotError.DataType.STRING,
        data="joint fault",
    )
    args.update(overrides)
    return RobotError(**args)


def test_robot_error_has_error_type_and_fields():
    err = _error()
    assert err.type is RobotExceptionType.ROBOT_ERROR
    assert err.timestamp == 1000
    assert err.code == 42
    assert err.sub_code == 3
    assert err.source is RobotError.Source.JOINT
    assert err.data == "joint fault"
    assert isinstance(err, RobotException)


def test_robot_error_positional_order():
    err = RobotError(5, 1, 2, RobotError.Source.TOOL, RobotError.Level.FATAL, RobotError.DataType.FLOAT, 1.5)
    assert (err.timestamp, err.code, err.sub_code) == (5, 1, 2)
    assert err.level is RobotError.Level.FATAL
    assert err.data == 1.5


def test_robot_error_coerces_integer_enums():
    err = _error(source=99, level=1, data_type=5)
    assert err.source is RobotError.Source.SAFETY
    assert err.level is RobotError.Level.WARNING
    assert err.data_type is RobotError.DataType.STRING


def test_robot_error_rejects_unknown_source():
    with pytest.raises(ValueError):
        _error(source=5)


def test_runtime_exception_fields():
    exc = RobotRuntimeException(77, 12, 4, "syntax error")
    assert exc.type is RobotExceptionType.SCRIPT_RUNTIME
    assert (exc.line, exc.column, exc.message) == (12, 4, "syntax error")
    assert exc.timestamp == 77


def test_disconnected_base_exception():
    exc = RobotException(RobotExceptionType.ROBOT_DISCONNECTED, 9)
    assert exc.type == -1
    assert exc.timestamp == 9


def test_base_exception_coerces_type_value():
    assert RobotException(10, 0).type is RobotExceptionType.SCRIPT_RUNTIME


def test_negative_timestamp_rejected():
    with pytest.raises(ValueError):
        RobotException(RobotExceptionType.ROBOT_ERROR, -1)


def test_exceptions_are_frozen():
    err = _error()
    with pytest.raises(dataclasses.FrozenInstanceError):
        err.code = 1
    assert err.code == 42
    assert err.source is RobotError.Source.JOINT