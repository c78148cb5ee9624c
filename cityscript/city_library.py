"""Placement operations available to city scripts.

Every ``build_*`` operation reserves exactly one grid cell and returns a
:class:`~cityscript.ir.PlacementResult`. Geometry is not built here; the
result carries the cell and world position so a renderer can draw it.
"""

import warnings
from typing import List, Optional

from cityscript.constants import (
    APARTMENT_MAX_FLOORS,
    APARTMENT_MIN_FLOORS,
    CITY_SIGNATURES,
    HOUSE_MIN_FLOORS,
    OPERATION_KINDS,
    ROAD_DIRECTIONS,
)
from cityscript.errors import (
    CellUnavailableError,
    InvalidArgumentError,
    NoFreeCellError,
    format_script_diagnostic,
)
from cityscript.grid import GridOccupancy, TileLayout
from cityscript.ir import GridCell, OperationKind, PlacementResult
from cityscript.registry import OperationRegistry
from cityscript.values import Value, as_int, as_optional_int, as_str


class CityLibrary:
    def __init__(self, occupancy: GridOccupancy, layout: Optional[TileLayout] = None):
        self.occupancy = occupancy
        self.layout = layout or TileLayout(grid_size=occupancy.size)
        self.placements: List[PlacementResult] = []

    def build_house(self, row: Value = None, col: Value = None, floors: Value = 1, name: Value = ""):
        floors = max(HOUSE_MIN_FLOORS, as_int(floors, "floors"))
        return self._place(OperationKind.HOUSE, row, col, name=name, floors=floors)

    def build_park(self, row: Value = None, col: Value = None, name: Value = ""):
        return self._place(OperationKind.PARK, row, col, name=name)

    def build_pool(self, row: Value = None, col: Value = None, name: Value = ""):
        return self._place(OperationKind.POOL, row, col, name=name)

    def build_library(self, row: Value = None, col: Value = None, name: Value = ""):
        return self._place(OperationKind.LIBRARY, row, col, name=name)

    def build_school(self, row: Value = None, col: Value = None, name: Value = ""):
        return self._place(OperationKind.SCHOOL, row, col, name=name)

    def build_hospital(self, row: Value = None, col: Value = None, name: Value = ""):
        return self._place(OperationKind.HOSPITAL, row, col, name=name)

    def build_shop(self, row: Value = None, col: Value = None, name: Value = ""):
        return self._place(OperationKind.SHOP, row, col, name=name)

    def build_power_tower(self, row: Value = None, col: Value = None):
        return self._place(OperationKind.POWER_TOWER, row, col)

    def build_fountain(self, row: Value = None, col: Value = None, name: Value = ""):
        return self._place(OperationKind.FOUNTAIN, row, col, name=name)

    def build_apartment(
        self,
        row: Value = None,
        col: Value = None,
        floors: Value = 4,
        name: Value = "",
    ):
        requested = as_int(floors, "floors")
        clamped = min(max(requested, APARTMENT_MIN_FLOORS), APARTMENT_MAX_FLOORS)
        if clamped != requested:
            warnings.warn(
                format_script_diagnostic(
                    f"Apartment floors {requested} outside "
                    f"{APARTMENT_MIN_FLOORS}..{APARTMENT_MAX_FLOORS}; using {clamped}."
                ),
                stacklevel=2,
            )
        return self._place(OperationKind.APARTMENT, row, col, name=name, floors=clamped)

    def build_road(self, row: Value = 20, col: Value = 20, direction: Value = "h"):
        """Lay a road tile exactly at ``(row, col)``; roads never relocate."""
        row = as_int(row, "row")
        col = as_int(col, "col")
        direction = as_str(direction, "direction")
        if direction not in ROAD_DIRECTIONS:
            raise InvalidArgumentError(
                f"Road direction must be one of {', '.join(ROAD_DIRECTIONS)}, "
                f"got '{direction}'."
            )
        if not self.occupancy.mask.is_land(row, col):
            raise CellUnavailableError(f"Tile ({row}, {col}) is not land.")
        if self.occupancy.is_reserved((row, col)):
            raise CellUnavailableError(f"Tile ({row}, {col}) is already occupied.")
        cell = self.occupancy.reserve((row, col))
        return self._record(cell, OperationKind.ROAD, direction=direction)

    def clear_all(self) -> int:
        """Remove every placement and release the whole grid."""
        removed = len(self.placements)
        self.placements.clear()
        self.occupancy.reset()
        return removed

    def _place(
        self,
        kind: OperationKind,
        row: Value,
        col: Value,
        *,
        name: Value = "",
        floors: Optional[int] = None,
    ) -> PlacementResult:
        row = as_optional_int(row, "row")
        col = as_optional_int(col, "col")
        name = as_str(name, "name")

        cell: Optional[GridCell] = None
        if row is not None and col is not None and self.occupancy.is_free((row, col)):
            cell = GridCell(row, col)
        else:
            center = self.occupancy.center
            cell = self.occupancy.find_free_cell(
                center.row if row is None else row,
                center.col if col is None else col,
            )
        if cell is None:
            raise NoFreeCellError(f"No free tile for {kind.value}.")

        self.occupancy.reserve(cell)
        return self._record(cell, kind, name=name, floors=floors)

    def _record(self, cell: GridCell, kind: OperationKind, **attributes) -> PlacementResult:
        placement = PlacementResult(
            row=cell.row,
            col=cell.col,
            kind=kind,
            position=self.layout.world_position(cell.row, cell.col),
            **attributes,
        )
        self.placements.append(placement)
        return placement


def build_city_registry(library: CityLibrary) -> OperationRegistry:
    """Register every city operation with handlers bound to ``library``."""
    registry = OperationRegistry()
    for name, signature in CITY_SIGNATURES.items():
        if name != "clear_all" and name not in OPERATION_KINDS:
            raise AssertionError(f"Operation '{name}' has no placement kind.")
        registry.register(signature, getattr(library, name))
    return registry
