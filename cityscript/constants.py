from typing import Dict, Tuple

from cityscript.ir import OperationKind, OperationSignature

GRID_SIZE = 40
TILE_WIDTH = 10.0

# Radial elevation profile of the island tiles.
ELEVATION_FALLOFF = 1.3
ELEVATION_SCALE = 3.5

ROAD_DIRECTIONS = ("h", "v")
HOUSE_MIN_FLOORS = 1
APARTMENT_MIN_FLOORS = 2
APARTMENT_MAX_FLOORS = 10


def _sig(name: str, *pairs: Tuple[str, object]) -> OperationSignature:
    return OperationSignature(
        name=name,
        parameters=tuple(param for param, _ in pairs),
        defaults=tuple(default for _, default in pairs),
    )


CITY_SIGNATURES: Dict[str, OperationSignature] = {
    sig.name: sig
    for sig in (
        _sig("build_house", ("row", None), ("col", None), ("floors", 1), ("name", "")),
        _sig("build_park", ("row", None), ("col", None), ("name", "")),
        _sig("build_pool", ("row", None), ("col", None), ("name", "")),
        _sig("build_library", ("row", None), ("col", None), ("name", "")),
        _sig("build_school", ("row", None), ("col", None), ("name", "")),
        _sig("build_hospital", ("row", None), ("col", None), ("name", "")),
        _sig("build_shop", ("row", None), ("col", None), ("name", "")),
        _sig("build_road", ("row", 20), ("col", 20), ("direction", "h")),
        _sig("build_power_tower", ("row", None), ("col", None)),
        _sig("build_fountain", ("row", None), ("col", None), ("name", "")),
        _sig(
            "build_apartment",
            ("row", None),
            ("col", None),
            ("floors", 4),
            ("name", ""),
        ),
        _sig("clear_all"),
    )
}

OPERATION_KINDS: Dict[str, OperationKind] = {
    "build_house": OperationKind.HOUSE,
    "build_park": OperationKind.PARK,
    "build_pool": OperationKind.POOL,
    "build_library": OperationKind.LIBRARY,
    "build_school": OperationKind.SCHOOL,
    "build_hospital": OperationKind.HOSPITAL,
    "build_shop": OperationKind.SHOP,
    "build_road": OperationKind.ROAD,
    "build_power_tower": OperationKind.POWER_TOWER,
    "build_fountain": OperationKind.FOUNTAIN,
    "build_apartment": OperationKind.APARTMENT,
}

__all__ = [
    "GRID_SIZE",
    "TILE_WIDTH",
    "ELEVATION_FALLOFF",
    "ELEVATION_SCALE",
    "ROAD_DIRECTIONS",
    "HOUSE_MIN_FLOORS",
    "APARTMENT_MIN_FLOORS",
    "APARTMENT_MAX_FLOORS",
    "CITY_SIGNATURES",
    "OPERATION_KINDS",
]
