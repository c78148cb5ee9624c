import contextvars
from contextlib import contextmanager
from typing import Iterator, Optional, Tuple


_CURRENT_SCRIPT_LINE: contextvars.ContextVar[Optional[Tuple[int, str]]] = (
    contextvars.ContextVar("cityscript_current_script_line", default=None)
)


def _format_with_context(
    message: str,
    *,
    line_no: Optional[int] = None,
    code: Optional[str] = None,
) -> str:
    if line_no is None:
        return message

    details = [f"Location: line {line_no}"]
    if code:
        details.append(f"Code: {code.strip()}")
    return f"{message}\n" + "\n".join(details)


def format_script_diagnostic(message: str) -> str:
    """Attach best-effort line context to a warning/info diagnostic string."""
    current = _CURRENT_SCRIPT_LINE.get()
    if current is None:
        return message
    line_no, code = current
    return _format_with_context(message, line_no=line_no, code=code)


@contextmanager
def script_line_context(line_no: int, code: str) -> Iterator[None]:
    token = _CURRENT_SCRIPT_LINE.set((line_no, code))
    try:
        yield
    finally:
        _CURRENT_SCRIPT_LINE.reset(token)


class CityScriptError(Exception):
    """Base CityScript error."""


class ScriptError(CityScriptError):
    """Raised when a script line cannot be turned into an operation call.

    ``message`` keeps the bare text; ``str(exc)`` carries the line location
    when the error was raised inside :func:`script_line_context`.
    """

    def __init__(
        self,
        message: str,
        *,
        line_no: Optional[int] = None,
        code: Optional[str] = None,
    ):
        current = _CURRENT_SCRIPT_LINE.get()
        if line_no is None and current is not None:
            line_no, code = current
        self.message = message
        self.line_no = line_no
        self.code = code
        super().__init__(_format_with_context(message, line_no=line_no, code=code))


class ScriptSyntaxError(ScriptError):
    """Raised when a line does not have the ``name(args)`` call shape."""


class UnknownOperationError(ScriptError):
    """Raised when a call names an operation that is not registered."""

    def __init__(self, operation: str, **kwargs):
        self.operation = operation
        super().__init__(
            f"Unknown operation '{operation}'. See the operation reference for "
            "supported calls.",
            **kwargs,
        )


class PlacementError(CityScriptError):
    """Raised by placement handlers when a call cannot be carried out."""


class InvalidArgumentError(PlacementError):
    """Raised when an argument value has the wrong type for its parameter."""


class CellUnavailableError(PlacementError):
    """Raised when a specific cell is off-grid, not buildable or taken."""


class NoFreeCellError(PlacementError):
    """Raised when the nearest-free-cell search finds nothing."""
