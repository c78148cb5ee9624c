import pytest

from cityscript.errors import CellUnavailableError
from cityscript.grid import GridOccupancy, TileLayout, ValidityMask, iter_ring
from cityscript.ir import GridCell


def test_validity_mask_from_rows_reads_land_characters():
    mask = ValidityMask.from_rows(["#.1", "...", "1#."])
    assert mask.size == 3
    assert mask.is_land(0, 0)
    assert not mask.is_land(0, 1)
    assert mask.is_land(0, 2)
    assert mask.land_count() == 4
    assert mask.to_rows() == ["#.#", "...", "##."]


def test_validity_mask_from_text_skips_blank_lines():
    mask = ValidityMask.from_text("\n##\n#.\n\n")
    assert mask.size == 2
    assert not mask.is_land(1, 1)


def test_validity_mask_is_false_out_of_bounds():
    mask = ValidityMask.all_land(4)
    assert not mask.is_land(-1, 0)
    assert not mask.is_land(0, 4)
    assert mask.is_land(3, 3)


def test_validity_mask_must_be_square():
    with pytest.raises(ValueError, match="must be square"):
        ValidityMask.from_rows(["##", "#"])
    with pytest.raises(ValueError, match="at least one row"):
        ValidityMask([])


def test_reserve_makes_cell_busy_until_reset():
    occupancy = GridOccupancy(ValidityMask.all_land(10))
    assert occupancy.is_free((2, 3))

    occupancy.reserve((2, 3))
    assert not occupancy.is_free((2, 3))
    assert GridCell(2, 3) in occupancy
    assert len(occupancy) == 1

    occupancy.reset()
    assert occupancy.is_free((2, 3))
    assert len(occupancy) == 0


def test_reserve_rejects_taken_water_and_off_grid_cells():
    occupancy = GridOccupancy(ValidityMask.from_rows(["#.", "##"]))
    occupancy.reserve((0, 0))
    with pytest.raises(CellUnavailableError, match="not free"):
        occupancy.reserve((0, 0))
    with pytest.raises(CellUnavailableError):
        occupancy.reserve((0, 1))
    with pytest.raises(CellUnavailableError):
        occupancy.reserve((5, 5))
    assert occupancy.reserved == frozenset({GridCell(0, 0)})


def test_distinct_reservations_never_share_a_cell():
    occupancy = GridOccupancy(ValidityMask.all_land(6))
    placed = []
    for _ in range(36):
        cell = occupancy.find_free_cell(3, 3)
        occupancy.reserve(cell)
        placed.append(cell)
    assert len(set(placed)) == 36
    assert occupancy.find_free_cell(3, 3) is None


def test_reset_keeps_the_mask():
    mask = ValidityMask.from_rows(["#.", "##"])
    occupancy = GridOccupancy(mask)
    occupancy.reserve((1, 1))
    occupancy.reset()
    assert occupancy.mask is mask
    assert not occupancy.is_free((0, 1))


def test_iter_ring_scans_boundary_in_row_major_order():
    assert list(iter_ring(0, 0, 0)) == [(0, 0)]
    assert list(iter_ring(0, 0, 1)) == [
        (-1, -1),
        (-1, 0),
        (-1, 1),
        (0, -1),
        (0, 1),
        (1, -1),
        (1, 0),
        (1, 1),
    ]
    assert len(list(iter_ring(5, 5, 3))) == 24


def test_find_free_cell_prefers_the_requested_cell():
    occupancy = GridOccupancy(ValidityMask.all_land(10))
    assert occupancy.find_free_cell(5, 5) == (5, 5)


def test_find_free_cell_returns_first_free_cell_of_nearest_ring():
    occupancy = GridOccupancy(ValidityMask.all_land(10))
    occupancy.reserve((5, 5))
    assert occupancy.find_free_cell(5, 5) == (4, 4)
    occupancy.reserve((4, 4))
    assert occupancy.find_free_cell(5, 5) == (4, 5)


def test_find_free_cell_is_deterministic():
    occupancy = GridOccupancy(ValidityMask.from_rows(["#..#", "....", ".##.", "#..#"]))
    occupancy.reserve((2, 2))
    first = occupancy.find_free_cell(1, 1)
    assert all(occupancy.find_free_cell(1, 1) == first for _ in range(5))
    assert first == (0, 0)


def test_find_free_cell_skips_water_and_off_grid_cells():
    occupancy = GridOccupancy(ValidityMask.from_rows(["..", "#."]))
    assert occupancy.find_free_cell(0, 0, max_radius=1) == (1, 0)


def test_find_free_cell_reports_exhaustion_with_none():
    occupancy = GridOccupancy(ValidityMask.from_rows(["#..", "...", "..."]))
    assert occupancy.find_free_cell(2, 2, max_radius=1) is None
    assert occupancy.find_free_cell(2, 2, max_radius=2) == (0, 0)


def test_find_free_cell_clamps_radius_to_ceiling():
    occupancy = GridOccupancy(ValidityMask.all_land(3))
    with pytest.warns(UserWarning, match="exceeds the ceiling"):
        assert occupancy.find_free_cell(10, 10, max_radius=50) is None


def test_find_free_cell_rejects_negative_radius():
    occupancy = GridOccupancy(ValidityMask.all_land(3))
    with pytest.raises(ValueError, match="non-negative"):
        occupancy.find_free_cell(1, 1, max_radius=-1)


def test_occupancy_defaults_search_radius_to_half_the_grid():
    occupancy = GridOccupancy(ValidityMask.all_land(40))
    assert occupancy.search_radius == 20
    assert occupancy.radius_ceiling == 40
    assert occupancy.center == (20, 20)


def test_occupancy_rejects_search_radius_above_ceiling():
    with pytest.raises(ValueError, match="exceeds radius_ceiling"):
        GridOccupancy(ValidityMask.all_land(4), search_radius=5, radius_ceiling=4)


def test_tile_layout_positions_and_elevation():
    layout = TileLayout(grid_size=40, tile_width=10)
    assert layout.offset == 195
    assert layout.position(0, 0) == (-195, -195)
    assert layout.position(2, 1) == (-185, -175)
    assert layout.elevation(0, 0) == 0.0

    small = TileLayout(grid_size=3, tile_width=10)
    assert small.elevation(1, 1) == pytest.approx(3.5)
    assert small.world_position(1, 1) == (0.0, pytest.approx(3.5), 0.0)


def test_occupancy_default_search_radius_respects_a_smaller_ceiling():
    occupancy = GridOccupancy(ValidityMask.all_land(40), radius_ceiling=5)
    assert occupancy.search_radius == 5
    assert GridOccupancy(ValidityMask.all_land(40), radius_ceiling=30).search_radius == 20
