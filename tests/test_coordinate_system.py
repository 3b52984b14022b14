import pytest
from pydantic import ValidationError

from nighttime_lights.coordinate_system import (
    CoordinateSystem,
    column_to_long,
    lat_to_row,
    long_to_column,
    row_to_lat,
    translate_geometry,
)
from nighttime_lights.errors import ConfigurationError
from nighttime_lights.grids import INDIA_COORDINATE_SYSTEM, MUMBAI_COORDINATE_SYSTEM
from nighttime_lights.types.geo import Coordinate

SQUARE = CoordinateSystem(Coordinate(10, 0), Coordinate(0, 10), 100, 100)
SANTIAGO = CoordinateSystem(Coordinate(-33.2, -71.8), Coordinate(-34.1, -70.1), 37, 211)

SYSTEMS = {
    "square": SQUARE,
    "india": INDIA_COORDINATE_SYSTEM,
    "mumbai": MUMBAI_COORDINATE_SYSTEM,
    "santiago": SANTIAGO,
}


def test_corners_map_to_grid_edges():
    assert lat_to_row(SQUARE, 10) == 0
    assert lat_to_row(SQUARE, 0) == 100
    assert long_to_column(SQUARE, 0) == 0
    assert long_to_column(SQUARE, 10) == 100


def test_inverse_conversions():
    assert row_to_lat(SQUARE, 0) == pytest.approx(10)
    assert row_to_lat(SQUARE, 50) == pytest.approx(5)
    assert column_to_long(SQUARE, 25) == pytest.approx(2.5)
    assert column_to_long(SQUARE, 100) == pytest.approx(10)


def test_out_of_extent_coordinates_are_not_clamped():
    assert lat_to_row(SQUARE, 11) == -10
    assert long_to_column(SQUARE, 12) == 120


@pytest.mark.parametrize("system", SYSTEMS.values(), ids=SYSTEMS.keys())
def test_row_round_trip(system: CoordinateSystem):
    for row in range(system.height):
        assert lat_to_row(system, row_to_lat(system, row)) == row


@pytest.mark.parametrize("system", SYSTEMS.values(), ids=SYSTEMS.keys())
def test_column_round_trip(system: CoordinateSystem):
    for column in range(system.width):
        assert long_to_column(system, column_to_long(system, column)) == column


@pytest.mark.parametrize("system", SYSTEMS.values(), ids=SYSTEMS.keys())
def test_translate_to_own_corners_is_identity(system: CoordinateSystem):
    translated = translate_geometry(system, system.top_left, system.bottom_right)
    assert translated.height == system.height
    assert translated.width == system.width
    assert translated == system


def test_translated_grid_is_offset_from_parent():
    sub = translate_geometry(SQUARE, Coordinate(8, 2), Coordinate(3, 7))
    assert sub.shape == (50, 50)
    for latitude in [8, 7.5, 5, 4.2, 3]:
        assert lat_to_row(sub, latitude) == lat_to_row(SQUARE, latitude) - 20
    for longitude in [2, 3.3, 6, 7]:
        assert long_to_column(sub, longitude) == long_to_column(SQUARE, longitude) - 20


def test_translate_is_independent_of_parent():
    sub = translate_geometry(SQUARE, Coordinate(8, 2), Coordinate(3, 7))
    assert sub is not SQUARE
    assert SQUARE.shape == (100, 100)


def test_mumbai_grid_aligns_with_india():
    india = INDIA_COORDINATE_SYSTEM
    mumbai = MUMBAI_COORDINATE_SYSTEM
    top_row = lat_to_row(india, mumbai.top_left.latitude)
    bottom_row = lat_to_row(india, mumbai.bottom_right.latitude)
    left_column = long_to_column(india, mumbai.top_left.longitude)
    right_column = long_to_column(india, mumbai.bottom_right.longitude)
    assert mumbai.height == bottom_row - top_row
    assert mumbai.width == right_column - left_column
    assert mumbai.height > 0
    assert mumbai.width > 0


def test_transform_maps_pixel_corners_to_coordinates():
    x, y = SQUARE.transform * (0, 0)
    assert (x, y) == pytest.approx((0, 10))
    x, y = SQUARE.transform * (100, 100)
    assert (x, y) == pytest.approx((10, 0))


@pytest.mark.parametrize(
    "top_left,bottom_right",
    [
        (Coordinate(10, 0), Coordinate(10, 10)),
        (Coordinate(10, 5), Coordinate(0, 5)),
    ],
)
def test_degenerate_corners_raise(top_left, bottom_right):
    with pytest.raises(ConfigurationError):
        CoordinateSystem(top_left, bottom_right, 10, 10)


@pytest.mark.parametrize("height,width", [(0, 10), (10, 0), (-5, 10)])
def test_non_positive_dimensions_raise(height, width):
    with pytest.raises(ConfigurationError):
        CoordinateSystem(Coordinate(10, 0), Coordinate(0, 10), height, width)


def test_translate_to_collapsed_region_raises():
    with pytest.raises(ConfigurationError):
        translate_geometry(SQUARE, Coordinate(5, 2), Coordinate(5.01, 7))


def test_coordinate_bounds_are_validated():
    with pytest.raises(ValidationError):
        Coordinate(91, 0)
    with pytest.raises(ValidationError):
        Coordinate(0, -181)


def test_coordinate_system_is_immutable():
    with pytest.raises(AttributeError):
        SQUARE.height = 5
