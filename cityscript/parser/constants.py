import re

# Optional ``name =`` prefix, then ``identifier(...)`` with nothing but
# whitespace after the last closing parenthesis.
CALL_PATTERN = re.compile(
    r"^(?:[A-Za-z_]\w*\s*=\s*)?([A-Za-z_]\w*)\s*\((.*)\)\s*$",
    re.DOTALL,
)

INT_PATTERN = re.compile(r"^[+-]?\d+$")
NUMBER_PATTERN = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?$")

QUOTE_CHARS = ("'", '"')
OPEN_BRACKETS = ("(", "[")
CLOSE_BRACKETS = (")", "]")
COMMENT_CHAR = "#"

NULL_LITERALS = {"None", "null"}
BOOL_LITERALS = {"True": True, "False": False}

__all__ = [
    "CALL_PATTERN",
    "INT_PATTERN",
    "NUMBER_PATTERN",
    "QUOTE_CHARS",
    "OPEN_BRACKETS",
    "CLOSE_BRACKETS",
    "COMMENT_CHAR",
    "NULL_LITERALS",
    "BOOL_LITERALS",
]
