from typing import Optional

from cityscript.city_library import CityLibrary, build_city_registry
from cityscript.constants import GRID_SIZE, TILE_WIDTH
from cityscript.engine import ExecutionEngine
from cityscript.errors import UnknownOperationError
from cityscript.grid import GridOccupancy, TileLayout, ValidityMask
from cityscript.ir import ExecutionResult, NormalizedCall, ParsedArgs, ScriptReport
from cityscript.parser import ScriptTranspiler, render_call, resolve_arguments
from cityscript.registry import OperationRegistry
from cityscript.values import Value


class CitySession:
    """One scripting session: a mask, its occupancy and the bound operations.

    Occupancy survives between :meth:`run` calls on the same session; create a
    new session (or run ``clear_all()``) to start from an empty grid.
    """

    def __init__(
        self,
        mask: Optional[ValidityMask] = None,
        *,
        grid_size: int = GRID_SIZE,
        tile_width: float = TILE_WIDTH,
        search_radius: Optional[int] = None,
        radius_ceiling: Optional[int] = None,
    ):
        self.mask = mask if mask is not None else ValidityMask.all_land(grid_size)
        self.occupancy = GridOccupancy(
            self.mask,
            search_radius=search_radius,
            radius_ceiling=radius_ceiling,
        )
        self.layout = TileLayout(grid_size=self.mask.size, tile_width=tile_width)
        self.library = CityLibrary(self.occupancy, self.layout)
        self.registry: OperationRegistry = build_city_registry(self.library)
        self.transpiler = ScriptTranspiler(self.registry.signatures)
        self.engine = ExecutionEngine(self.registry)

    @property
    def placements(self):
        return list(self.library.placements)

    def run(self, script: str) -> ScriptReport:
        """Transpile and execute a whole script, never stopping early."""
        transpiled = self.transpiler.transpile(script)
        batch = self.engine.execute(transpiled.calls)
        return ScriptReport(
            normalized_code=transpiled.normalized_code,
            diagnostics=transpiled.diagnostics,
            results=batch.results,
            success_count=batch.success_count,
        )

    def call(self, operation: str, **kwargs: Value) -> ExecutionResult:
        """Execute one operation from keyword arguments.

        Raises:
            UnknownOperationError: If ``operation`` is not registered.
        """
        signature = self.registry.signature(operation)
        if signature is None:
            raise UnknownOperationError(operation)
        args = tuple(resolve_arguments(ParsedArgs(keyword=dict(kwargs)), signature))
        call = NormalizedCall(
            operation=operation,
            args=args,
            original_text=render_call(operation, args, signature),
            source_line=0,
        )
        return self.engine.execute_one(call)
