"""Script parsing entry points.

Line-level helpers live in :mod:`cityscript.parser.helpers`; use
:class:`cityscript.parser.core.ScriptTranspiler` as the stable API.
"""

from cityscript.parser.core import ScriptTranspiler, render_call, resolve_arguments
from cityscript.parser.helpers import (
    parse_arguments,
    parse_value,
    split_arguments,
    split_call,
    strip_comment,
)

__all__ = [
    "ScriptTranspiler",
    "parse_arguments",
    "parse_value",
    "render_call",
    "resolve_arguments",
    "split_arguments",
    "split_call",
    "strip_comment",
]
