import pytest

from elirtsi.version import SDK_VERSION_INFO, VersionInfo


def test_to_string():
    assert VersionInfo(1, 2, 3, 4).to_string() == "1.2.3.4"
    assert str(VersionInfo(2, 0, 0, 7)) == "2.0.0.7"


def test_from_string():
    v = VersionInfo.from_string("1.2.3.4")
    assert (v.major, v.minor, v.bugfix, v.build) == (1, 2, 3, 4)


def test_from_string_missing_parts_are_zero():
    assert VersionInfo.from_string("2.5") == VersionInfo(2, 5, 0, 0)


@pytest.mark.parametrize("text", ["0.0.0.0", "2.1.0.15", "10.20.30.40"])
def test_round_trip(text):
    assert VersionInfo.from_string(text).to_string() == text


@pytest.mark.parametrize("text", ["", "a.b", "1.2.3.4.5", "1..2", "1.-2"])
def test_invalid_strings(text):
    with pytest.raises(ValueError):
        VersionInfo.from_string(text)


def test_ordering():
    assert VersionInfo(1, 2, 0, 0) < VersionInfo(1, 10, 0, 0)
    assert VersionInfo(2, 0, 0, 0) > VersionInfo(1, 99, 99, 99)
    assert VersionInfo(1, 2, 3, 4) <= VersionInfo(1, 2, 3, 4)
    assert VersionInfo(1, 2, 3, 5) >= VersionInfo(1, 2, 3, 4)
    assert VersionInfo(1, 2, 3, 4) != VersionInfo(1, 2, 3, 5)


def test_default_is_zero():
    assert VersionInfo() == VersionInfo.from_string("0.0.0.0")


def test_out_of_range():
    with pytest.raises(ValueError):
        VersionInfo(-1, 0, 0, 0)
    with pytest.raises(ValueError):
        VersionInfo(0, 0, 0, 2**32)


def test_immutable():
    v = VersionInfo(1, 0, 0, 0)
    with pytest.raises(AttributeError):
        v.major = 2
    assert v.major == 1
    assert v.to_string() == "1.0.0.0"


def test_sdk_version():
    assert SDK_VERSION_INFO.to_string() == "1.2.0.0"