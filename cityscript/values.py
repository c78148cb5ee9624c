from enum import Enum
from typing import Optional, Union

from cityscript.errors import InvalidArgumentError

Value = Union[None, bool, int, float, str]


class ValueKind(Enum):
    NULL = "null"
    BOOL = "bool"
    NUMBER = "number"
    STRING = "string"


def value_kind(value: Value) -> ValueKind:
    if value is None:
        return ValueKind.NULL
    # bool before number: bool is an int subclass.
    if isinstance(value, bool):
        return ValueKind.BOOL
    if isinstance(value, (int, float)):
        return ValueKind.NUMBER
    if isinstance(value, str):
        return ValueKind.STRING
    raise AssertionError("Unknown value type")


def render_value(value: Value) -> str:
    """Render a value the way it would be written in a script."""
    kind = value_kind(value)
    if kind == ValueKind.NULL:
        return "None"
    if kind == ValueKind.BOOL:
        return "True" if value else "False"
    return repr(value)


def as_int(value: Value, param: str) -> int:
    kind = value_kind(value)
    if kind == ValueKind.NUMBER:
        if isinstance(value, float) and not value.is_integer():
            raise InvalidArgumentError(
                f"Parameter '{param}' must be a whole number, got {render_value(value)}."
            )
        return int(value)
    raise InvalidArgumentError(
        f"Parameter '{param}' must be a number, got {kind.value} {render_value(value)}."
    )


def as_optional_int(value: Value, param: str) -> Optional[int]:
    if value is None:
        return None
    return as_int(value, param)


def as_str(value: Value, param: str) -> str:
    kind = value_kind(value)
    if kind == ValueKind.NULL:
        return ""
    if kind == ValueKind.STRING:
        return value
    raise InvalidArgumentError(
        f"Parameter '{param}' must be a string, got {kind.value} {render_value(value)}."
    )
