"""Public Python API for CityScript.

The package exposes a small stable surface for running city scripts against a
grid session and exporting the results. Parser helpers live in
``cityscript.parser``; grid primitives live in ``cityscript.grid``.
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

from cityscript.engine import ExecutionEngine
from cityscript.errors import (
    CityScriptError,
    NoFreeCellError,
    PlacementError,
    ScriptError,
)
from cityscript.exporter import export_report, report_to_dict, session_to_dict
from cityscript.grid import GridOccupancy, TileLayout, ValidityMask
from cityscript.mcp_bridge import build_fastmcp_server
from cityscript.parser import ScriptTranspiler
from cityscript.registry import OperationRegistry
from cityscript.session import CitySession

try:
    __version__: str = version("cityscript")
except PackageNotFoundError:  # pragma: no cover - editable local fallback
    __version__ = "0.1.0"


def run_script(script: str, mask: ValidityMask | None = None):
    """Run ``script`` in a fresh :class:`CitySession` and return its report."""
    return CitySession(mask).run(script)


def about(*, print_output: bool = True) -> str:
    """Return and optionally print the engine semantic contract.

    Args:
        print_output: Whether to print the returned summary.

    Returns:
        Human-readable semantic summary string.

    Side Effects:
        Prints to stdout when ``print_output`` is True.

    Example:
        >>> from cityscript import about
        >>> text = about(print_output=False)
        >>> "Grid" in text
        True
    """
    text = (
        f"CityScript {__version__}\n"
        "Script lines: one [name =] operation(args) call per line; '#' starts a comment.\n"
        "Arguments: positional then keyword, merged onto operation defaults; extras are ignored.\n"
        "Grid: square, cells addressed (row, col) from the top-left, only land cells are buildable.\n"
        "Placement: a taken or missing cell falls back to the nearest free cell by square rings.\n"
        "Errors: bad lines become diagnostics, failed calls become error results; a run never stops early."
    )
    if print_output:
        print(text)
    return text


__all__ = [
    "__version__",
    "about",
    "run_script",
    "CityScriptError",
    "CitySession",
    "ExecutionEngine",
    "GridOccupancy",
    "NoFreeCellError",
    "OperationRegistry",
    "PlacementError",
    "ScriptError",
    "ScriptTranspiler",
    "TileLayout",
    "ValidityMask",
    "build_fastmcp_server",
    "export_report",
    "report_to_dict",
    "session_to_dict",
]
