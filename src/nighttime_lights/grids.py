from enum import Enum

from nighttime_lights.coordinate_system import CoordinateSystem, translate_geometry
from nighttime_lights.types.geo import Coordinate


class Grids(str, Enum):
    INDIA = "india"
    MUMBAI = "mumbai"


# VIIRS monthly composite tile covering India
INDIA_COORDINATE_SYSTEM = CoordinateSystem(
    top_left=Coordinate(37.5, 67.91666),
    bottom_right=Coordinate(4.166, 97.5),
    height=8000,
    width=7100,
)

MUMBAI_COORDINATE_SYSTEM = translate_geometry(
    INDIA_COORDINATE_SYSTEM,
    Coordinate(19.49907, 72.721252),
    Coordinate(18.849475, 73.074187),
)

_COORDINATE_SYSTEMS = {
    Grids.INDIA: INDIA_COORDINATE_SYSTEM,
    Grids.MUMBAI: MUMBAI_COORDINATE_SYSTEM,
}


def get_coordinate_system(grid: Grids | str) -> CoordinateSystem:
    return _COORDINATE_SYSTEMS[Grids(grid)]
