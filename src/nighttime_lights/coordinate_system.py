"""Mapping between geographic coordinates and raster pixel indices.

A coordinate system is defined by the coordinates of the top-left and
bottom-right corners of an image together with its height and width in
pixels. Rows grow southwards and columns grow eastwards, so the mapping is
an axis-aligned affine transform:

    row    = (lat - top_left.lat) * height / (bottom_right.lat - top_left.lat)
    column = (lon - top_left.lon) * width  / (bottom_right.lon - top_left.lon)

Pixel indices are rounded to the nearest integer (half to even). Indices
outside ``[0, height)`` or ``[0, width)`` are returned as-is when the
coordinate lies outside the extent; callers that index arrays must clamp.
"""

from pydantic.dataclasses import dataclass
from rasterio.transform import Affine, from_bounds

from nighttime_lights.errors.geometry_errors import (
    DegenerateExtentError,
    NonPositiveDimensionError,
)
from nighttime_lights.types.geo import Coordinate


@dataclass(frozen=True)
class CoordinateSystem:
    """Affine mapping between (latitude, longitude) and (row, column).

    Attributes:
        top_left: Coordinate of the top-left corner of the image.
        bottom_right: Coordinate of the bottom-right corner of the image.
        height: Number of rows of the image.
        width: Number of columns of the image.

    Examples:
        >>> top_left = Coordinate(37.5, 67.91666)
        >>> bottom_right = Coordinate(4.166, 97.5)
        >>> india = CoordinateSystem(top_left, bottom_right, 8000, 7100)
        >>> lat_to_row(india, 19.6)
        4296
    """

    top_left: Coordinate
    bottom_right: Coordinate
    height: int
    width: int

    def __post_init__(self):
        if self.top_left.latitude == self.bottom_right.latitude:
            raise DegenerateExtentError("latitude", self.top_left.latitude)
        if self.top_left.longitude == self.bottom_right.longitude:
            raise DegenerateExtentError("longitude", self.top_left.longitude)
        if self.height <= 0 or self.width <= 0:
            raise NonPositiveDimensionError(self.height, self.width)

    @property
    def shape(self) -> tuple[int, int]:
        return (self.height, self.width)

    @property
    def transform(self) -> Affine:
        """The affine transform mapping (column, row) to (longitude, latitude)."""
        return from_bounds(
            west=self.top_left.longitude,
            south=self.bottom_right.latitude,
            east=self.bottom_right.longitude,
            north=self.top_left.latitude,
            width=self.width,
            height=self.height,
        )


def lat_to_row(system: CoordinateSystem, latitude: float) -> int:
    top_left = system.top_left.latitude
    bottom_right = system.bottom_right.latitude
    row = (latitude - top_left) * system.height / (bottom_right - top_left)
    return int(round(row))


def long_to_column(system: CoordinateSystem, longitude: float) -> int:
    top_left = system.top_left.longitude
    bottom_right = system.bottom_right.longitude
    column = (longitude - top_left) * system.width / (bottom_right - top_left)
    return int(round(column))


def row_to_lat(system: CoordinateSystem, row: float) -> float:
    top_left = system.top_left.latitude
    bottom_right = system.bottom_right.latitude
    return row * (bottom_right - top_left) / system.height + top_left


def column_to_long(system: CoordinateSystem, column: float) -> float:
    top_left = system.top_left.longitude
    bottom_right = system.bottom_right.longitude
    return column * (bottom_right - top_left) / system.width + top_left


def translate_geometry(
    system: CoordinateSystem,
    top_left: Coordinate,
    bottom_right: Coordinate,
) -> CoordinateSystem:
    """Derive the coordinate system of a sub-region of ``system``.

    The new corners are located on the pixel grid of ``system`` and the
    distance between them in rows and columns becomes the size of the new
    system, so a raster cropped to the same corners lines up pixel for pixel
    with the result.

    Args:
        system: The coordinate system to derive from.
        top_left: Top-left corner of the sub-region.
        bottom_right: Bottom-right corner of the sub-region.

    Returns:
        A new, independent coordinate system.

    Raises:
        ConfigurationError: If the sub-region collapses to zero rows or columns.
    """
    top_left_row = lat_to_row(system, top_left.latitude)
    bottom_right_row = lat_to_row(system, bottom_right.latitude)
    top_left_col = long_to_column(system, top_left.longitude)
    bottom_right_col = long_to_column(system, bottom_right.longitude)

    return CoordinateSystem(
        top_left=top_left,
        bottom_right=bottom_right,
        height=abs(bottom_right_row - top_left_row),
        width=abs(bottom_right_col - top_left_col),
    )
