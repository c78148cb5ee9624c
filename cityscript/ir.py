from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, NamedTuple, Optional, Tuple, Union

from cityscript.values import Value


@dataclass(frozen=True)
class OperationSignature:
    name: str
    parameters: Tuple[str, ...] = ()
    defaults: Tuple[Value, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "parameters", tuple(self.parameters))
        object.__setattr__(self, "defaults", tuple(self.defaults))
        if len(self.parameters) != len(self.defaults):
            raise ValueError(
                f"Operation '{self.name}' declares {len(self.parameters)} parameters "
                f"but {len(self.defaults)} defaults."
            )
        if len(set(self.parameters)) != len(self.parameters):
            raise ValueError(f"Operation '{self.name}' has duplicate parameter names.")


@dataclass(frozen=True)
class RawCall:
    head: str
    args_text: str
    source_line: int
    original_text: str


@dataclass
class ParsedArgs:
    positional: List[Value] = field(default_factory=list)
    keyword: Dict[str, Value] = field(default_factory=dict)


@dataclass(frozen=True)
class NormalizedCall:
    operation: str
    args: Tuple[Value, ...]
    original_text: str
    source_line: int


class DiagnosticKind(Enum):
    SYNTAX = "syntax"
    UNKNOWN_OPERATION = "unknown_operation"


@dataclass(frozen=True)
class Diagnostic:
    source_line: int
    message: str
    kind: DiagnosticKind


# Execution outcomes

@dataclass(frozen=True)
class Ok:
    value: object = None


@dataclass(frozen=True)
class Err:
    message: str


Outcome = Union[Ok, Err]


@dataclass(frozen=True)
class ExecutionResult:
    call: NormalizedCall
    outcome: Outcome

    @property
    def ok(self) -> bool:
        return isinstance(self.outcome, Ok)


class GridCell(NamedTuple):
    row: int
    col: int


class OperationKind(Enum):
    HOUSE = "house"
    PARK = "park"
    POOL = "pool"
    LIBRARY = "library"
    SCHOOL = "school"
    HOSPITAL = "hospital"
    SHOP = "shop"
    ROAD = "road"
    POWER_TOWER = "power_tower"
    FOUNTAIN = "fountain"
    APARTMENT = "apartment"


@dataclass(frozen=True)
class PlacementResult:
    row: int
    col: int
    kind: OperationKind
    name: str = ""
    floors: Optional[int] = None
    direction: Optional[str] = None
    position: Tuple[float, float, float] = (0.0, 0.0, 0.0)

    @property
    def cell(self) -> GridCell:
        return GridCell(self.row, self.col)


@dataclass(frozen=True)
class TranspileResult:
    calls: List[NormalizedCall]
    diagnostics: List[Diagnostic]
    normalized_code: List[str]


@dataclass(frozen=True)
class ExecutionBatch:
    results: List[ExecutionResult]
    success_count: int


@dataclass(frozen=True)
class ScriptReport:
    normalized_code: List[str]
    diagnostics: List[Diagnostic]
    results: List[ExecutionResult]
    success_count: int

    @property
    def failure_count(self) -> int:
        return len(self.results) - self.success_count

    @property
    def clean(self) -> bool:
        return not self.diagnostics and self.failure_count == 0
