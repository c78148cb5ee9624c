import math
import warnings
from dataclasses import dataclass
from typing import FrozenSet, Iterable, Iterator, Optional, Sequence, Set, Tuple

from cityscript.constants import ELEVATION_FALLOFF, ELEVATION_SCALE, GRID_SIZE, TILE_WIDTH
from cityscript.errors import CellUnavailableError, format_script_diagnostic
from cityscript.ir import GridCell

LAND_CHARS = "#1"


class ValidityMask:
    """Read-only square grid of buildable (land) cells."""

    def __init__(self, rows: Sequence[Sequence[bool]]):
        cells = tuple(tuple(bool(value) for value in row) for row in rows)
        if not cells:
            raise ValueError("Validity mask must have at least one row.")
        size = len(cells)
        for index, row in enumerate(cells):
            if len(row) != size:
                raise ValueError(
                    f"Validity mask must be square: row {index} has {len(row)} "
                    f"cells, expected {size}."
                )
        self._cells = cells

    @classmethod
    def all_land(cls, size: int = GRID_SIZE) -> "ValidityMask":
        if size <= 0:
            raise ValueError("Grid size must be positive.")
        return cls([[True] * size for _ in range(size)])

    @classmethod
    def from_rows(cls, rows: Iterable[str], land_chars: str = LAND_CHARS) -> "ValidityMask":
        """Build a mask from text rows, one character per cell.

        Example:
            >>> ValidityMask.from_rows(["#.", "##"]).is_land(0, 1)
            False
        """
        return cls([[ch in land_chars for ch in row] for row in rows])

    @classmethod
    def from_text(cls, text: str, land_chars: str = LAND_CHARS) -> "ValidityMask":
        rows = [line.strip() for line in text.splitlines() if line.strip()]
        return cls.from_rows(rows, land_chars)

    @property
    def size(self) -> int:
        return len(self._cells)

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.size and 0 <= col < self.size

    def is_land(self, row: int, col: int) -> bool:
        return self.in_bounds(row, col) and self._cells[row][col]

    def land_count(self) -> int:
        return sum(sum(row) for row in self._cells)

    def to_rows(self, land: str = "#", water: str = ".") -> list[str]:
        return ["".join(land if cell else water for cell in row) for row in self._cells]


@dataclass(frozen=True)
class TileLayout:
    """Maps grid cells to world-space tile centres for the renderer."""

    grid_size: int = GRID_SIZE
    tile_width: float = TILE_WIDTH

    @property
    def offset(self) -> float:
        return self.grid_size * self.tile_width / 2 - self.tile_width / 2

    def position(self, row: int, col: int) -> Tuple[float, float]:
        return (col * self.tile_width - self.offset, row * self.tile_width - self.offset)

    def elevation(self, row: int, col: int) -> float:
        # Island profile: highest at the centre, flat beyond ~77% of the radius.
        span = max(self.grid_size - 1, 1)
        nx = (col / span) * 2 - 1
        nz = (row / span) * 2 - 1
        height = max(0.0, 1 - math.hypot(nx, nz) * ELEVATION_FALLOFF)
        return height * height * ELEVATION_SCALE

    def world_position(self, row: int, col: int) -> Tuple[float, float, float]:
        x, z = self.position(row, col)
        return (x, self.elevation(row, col), z)


def iter_ring(center_row: int, center_col: int, distance: int) -> Iterator[GridCell]:
    """Yield the cells at exactly Chebyshev ``distance`` from the centre.

    Order is row-major: ``dr`` from -d to +d, then ``dc`` from -d to +d.
    """
    for dr in range(-distance, distance + 1):
        for dc in range(-distance, distance + 1):
            if abs(dr) != distance and abs(dc) != distance:
                continue
            yield GridCell(center_row + dr, center_col + dc)


class GridOccupancy:
    """Tracks reserved cells on top of a :class:`ValidityMask`.

    Reservations only grow until :meth:`reset`; no single cell is ever
    released. Not thread-safe: callers that run placements concurrently must
    serialize every ``is_free``/``reserve``/``find_free_cell`` call.
    """

    def __init__(
        self,
        mask: ValidityMask,
        *,
        search_radius: Optional[int] = None,
        radius_ceiling: Optional[int] = None,
    ):
        self.mask = mask
        self.radius_ceiling = mask.size if radius_ceiling is None else radius_ceiling
        if search_radius is None:
            search_radius = min(mask.size // 2, self.radius_ceiling)
        self.search_radius = search_radius
        if self.radius_ceiling < 0:
            raise ValueError("radius_ceiling must be non-negative.")
        if self.search_radius < 0:
            raise ValueError("search_radius must be non-negative.")
        if self.search_radius > self.radius_ceiling:
            raise ValueError(
                f"search_radius {self.search_radius} exceeds radius_ceiling "
                f"{self.radius_ceiling}."
            )
        self._reserved: Set[GridCell] = set()

    @property
    def size(self) -> int:
        return self.mask.size

    @property
    def center(self) -> GridCell:
        return GridCell(self.size // 2, self.size // 2)

    @property
    def reserved(self) -> FrozenSet[GridCell]:
        return frozenset(self._reserved)

    def is_reserved(self, cell: Tuple[int, int]) -> bool:
        return GridCell(*cell) in self._reserved

    def is_free(self, cell: Tuple[int, int]) -> bool:
        row, col = cell
        return self.mask.is_land(row, col) and GridCell(row, col) not in self._reserved

    def reserve(self, cell: Tuple[int, int]) -> GridCell:
        """Reserve a cell that the caller has already checked with ``is_free``.

        Raises:
            CellUnavailableError: If the cell is off-grid, not land or taken.
        """
        cell = GridCell(*cell)
        if not self.is_free(cell):
            raise CellUnavailableError(
                f"Tile ({cell.row}, {cell.col}) is not free for building."
            )
        self._reserved.add(cell)
        return cell

    def find_free_cell(
        self,
        preferred_row: int,
        preferred_col: int,
        max_radius: Optional[int] = None,
    ) -> Optional[GridCell]:
        """Return the nearest free cell by expanding square rings, or ``None``.

        Ring ``d`` holds the cells at Chebyshev distance exactly ``d`` from the
        preferred cell. The first free cell found wins, so the result depends
        only on the mask, the reservations and the arguments.
        """
        radius = self.search_radius if max_radius is None else max_radius
        if radius < 0:
            raise ValueError("max_radius must be non-negative.")
        if radius > self.radius_ceiling:
            warnings.warn(
                format_script_diagnostic(
                    f"Search radius {radius} exceeds the ceiling of "
                    f"{self.radius_ceiling}; searching {self.radius_ceiling} rings."
                ),
                stacklevel=2,
            )
            radius = self.radius_ceiling

        for distance in range(radius + 1):
            for cell in iter_ring(preferred_row, preferred_col, distance):
                if self.is_free(cell):
                    return cell
        return None

    def reset(self) -> None:
        self._reserved.clear()

    def __contains__(self, cell: object) -> bool:
        return cell in self._reserved

    def __len__(self) -> int:
        return len(self._reserved)
