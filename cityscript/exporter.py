import json
from dataclasses import asdict, is_dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict

from cityscript.ir import (
    Diagnostic,
    Err,
    ExecutionResult,
    NormalizedCall,
    Ok,
    PlacementResult,
    ScriptReport,
)
from cityscript.session import CitySession


def report_to_dict(report: ScriptReport) -> Dict[str, Any]:
    """Serialize a :class:`ScriptReport` into a JSON-ready payload."""
    return {
        "normalized_code": list(report.normalized_code),
        "diagnostics": [_diagnostic_to_dict(d) for d in report.diagnostics],
        "results": [result_to_dict(result) for result in report.results],
        "success_count": report.success_count,
        "failure_count": report.failure_count,
    }


def session_to_dict(session: CitySession) -> Dict[str, Any]:
    """Serialize the current grid state of a session."""
    return {
        "grid_size": session.mask.size,
        "tile_width": session.layout.tile_width,
        "mask": session.mask.to_rows(),
        "reserved": [list(cell) for cell in sorted(session.occupancy.reserved)],
        "placements": [_placement_to_dict(p) for p in session.placements],
    }


def export_report(
    report: ScriptReport,
    output_path: str | Path,
    session: CitySession | None = None,
) -> Path:
    """Write a report (and optionally the session grid) as UTF-8 JSON."""
    payload = report_to_dict(report)
    if session is not None:
        payload["session"] = session_to_dict(session)
    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")
    return path


def _call_to_dict(call: NormalizedCall) -> Dict[str, Any]:
    return {
        "operation": call.operation,
        "args": list(call.args),
        "original": call.original_text,
        "line": call.source_line,
    }


def _diagnostic_to_dict(diagnostic: Diagnostic) -> Dict[str, Any]:
    return {
        "line": diagnostic.source_line,
        "kind": diagnostic.kind.value,
        "message": diagnostic.message,
    }


def result_to_dict(result: ExecutionResult) -> Dict[str, Any]:
    payload: Dict[str, Any] = {"ok": result.ok, "call": _call_to_dict(result.call)}
    outcome = result.outcome
    if isinstance(outcome, Ok):
        payload["value"] = _value_to_json(outcome.value)
    elif isinstance(outcome, Err):
        payload["error"] = outcome.message
    else:
        raise AssertionError("Unknown outcome type")
    return payload


def _placement_to_dict(placement: PlacementResult) -> Dict[str, Any]:
    return {
        "row": placement.row,
        "col": placement.col,
        "type": placement.kind.value,
        "name": placement.name,
        "floors": placement.floors,
        "direction": placement.direction,
        "position": list(placement.position),
    }


def _value_to_json(value: Any) -> Any:
    if isinstance(value, PlacementResult):
        return _placement_to_dict(value)
    if isinstance(value, Enum):
        return value.value
    if is_dataclass(value) and not isinstance(value, type):
        return _value_to_json(asdict(value))
    if isinstance(value, dict):
        return {str(k): _value_to_json(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_value_to_json(v) for v in value]
    return value
