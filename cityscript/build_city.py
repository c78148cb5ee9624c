#!/usr/bin/env python3
from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from cityscript.constants import GRID_SIZE, TILE_WIDTH
from cityscript.exporter import export_report
from cityscript.grid import ValidityMask
from cityscript.ir import Err, Ok, ScriptReport
from cityscript.session import CitySession


def _read_text(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    source = Path(path)
    if not source.exists():
        raise FileNotFoundError(f"Script file not found: {source}")
    if not source.is_file():
        raise FileNotFoundError(f"Script path is not a file: {source}")
    return source.read_text(encoding="utf-8")


def _load_mask(path: Optional[str]) -> Optional[ValidityMask]:
    if path is None:
        return None
    mask_path = Path(path)
    if not mask_path.exists():
        raise FileNotFoundError(f"Mask file not found: {mask_path}")
    return ValidityMask.from_text(mask_path.read_text(encoding="utf-8"))


def format_report(report: ScriptReport) -> str:
    lines: List[str] = ["Normalized code:"]
    lines.extend(f"  {line}" for line in report.normalized_code)

    if report.diagnostics:
        lines.append("Diagnostics:")
        lines.extend(
            f"  line {d.source_line} [{d.kind.value}]: {d.message}"
            for d in report.diagnostics
        )

    lines.append("Results:")
    for result in report.results:
        prefix = f"  line {result.call.source_line} {result.call.operation}"
        outcome = result.outcome
        if isinstance(outcome, Ok):
            lines.append(f"{prefix}: ok {_describe_value(outcome.value)}")
        elif isinstance(outcome, Err):
            lines.append(f"{prefix}: error {outcome.message}")
    lines.append(f"Built {report.success_count}/{len(report.results)} calls.")
    return "\n".join(lines)


def _describe_value(value: object) -> str:
    kind = getattr(value, "kind", None)
    if kind is not None:
        return f"{kind.value} at ({value.row}, {value.col})"
    return repr(value)


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description=(
            "Run a city script: one build_*(...) call per line, placed on a "
            "square grid of buildable tiles."
        )
    )
    parser.add_argument(
        "script",
        help="Path to the script file, or '-' to read from stdin.",
    )
    parser.add_argument(
        "--mask",
        default=None,
        help=(
            "Optional text file with one row per line ('#' or '1' marks land). "
            "Defaults to an all-land grid."
        ),
    )
    parser.add_argument(
        "--grid-size",
        type=int,
        default=GRID_SIZE,
        help="Grid size used when no mask file is given.",
    )
    parser.add_argument(
        "--tile-width",
        type=float,
        default=TILE_WIDTH,
        help="World width of one tile, used for reported positions.",
    )
    parser.add_argument(
        "--search-radius",
        type=int,
        default=None,
        help="Rings searched for a free tile (defaults to half the grid size).",
    )
    parser.add_argument(
        "--radius-ceiling",
        type=int,
        default=None,
        help="Largest search radius any placement may use (defaults to the grid size).",
    )
    parser.add_argument(
        "--json",
        default=None,
        help="Optional path where the full report is written as JSON.",
    )
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = _parse_args(argv)

    try:
        session = CitySession(
            _load_mask(args.mask),
            grid_size=args.grid_size,
            tile_width=args.tile_width,
            search_radius=args.search_radius,
            radius_ceiling=args.radius_ceiling,
        )
    except ValueError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
    report = session.run(_read_text(args.script))
    print(format_report(report))

    if args.json:
        path = export_report(report, args.json, session=session)
        print(f"Wrote report: {path}")

    return 0 if report.clean else 1


if __name__ == "__main__":
    sys.exit(main())
