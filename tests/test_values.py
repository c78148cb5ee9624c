import pytest

from cityscript.errors import InvalidArgumentError
from cityscript.values import ValueKind, as_int, as_optional_int, as_str, render_value, value_kind


def test_value_kind_for_each_primitive():
    assert value_kind(None) == ValueKind.NULL
    assert value_kind(True) == ValueKind.BOOL
    assert value_kind(3) == ValueKind.NUMBER
    assert value_kind(2.5) == ValueKind.NUMBER
    assert value_kind("x") == ValueKind.STRING


def test_value_kind_rejects_unknown_value():
    with pytest.raises(AssertionError, match="Unknown value type"):
        value_kind([1, 2])


def test_render_value_uses_script_spelling():
    assert render_value(None) == "None"
    assert render_value(False) == "False"
    assert render_value(550.0) == "550.0"
    assert render_value("Home") == "'Home'"


def test_as_int_accepts_whole_numbers_only():
    assert as_int(4, "floors") == 4
    assert as_int(4.0, "floors") == 4
    with pytest.raises(InvalidArgumentError, match="whole number"):
        as_int(4.2, "floors")
    with pytest.raises(InvalidArgumentError, match="got null None"):
        as_int(None, "floors")


def test_as_optional_int_and_as_str():
    assert as_optional_int(None, "row") is None
    assert as_optional_int(7, "row") == 7
    assert as_str(None, "name") == ""
    assert as_str("Town", "name") == "Town"
    with pytest.raises(InvalidArgumentError, match="must be a string"):
        as_str(False, "name")
