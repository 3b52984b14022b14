"""Binary region masks aligned to a coordinate system's pixel grid."""

from typing import Any

import numpy as np
from rasterio.features import rasterize

from nighttime_lights.coordinate_system import (
    CoordinateSystem,
    lat_to_row,
    long_to_column,
)
from nighttime_lights.errors import DimensionMismatchError
from nighttime_lights.types.geo import Coordinate


def as_geometry(region: Any) -> Any:
    if hasattr(region, "__geo_interface__"):
        return region
    # GeoJSON features and region-table rows carry their polygon in "geometry"
    if isinstance(region, dict):
        return region.get("geometry", region)
    geometry = getattr(region, "geometry", None)
    if geometry is None:
        raise TypeError(
            "Expected a geometry or a row with a 'geometry' field, "
            f"got {type(region).__name__}"
        )
    return geometry


def polygon_mask(
    system: CoordinateSystem, region: Any, all_touched: bool = False
) -> np.ndarray:
    """Rasterize a polygon into a mask on the pixel grid of ``system``.

    Args:
        system: Coordinate system of the raster the mask will be applied to.
        region: A shapely geometry, a GeoJSON-like mapping, or a region-table
            row with a ``geometry`` field.
        all_touched: Select every pixel the polygon touches instead of only
            the pixels whose centre lies inside it.

    Returns:
        A ``uint8`` array of shape ``(system.height, system.width)`` holding 1
        inside the polygon and 0 elsewhere.
    """
    geometry = as_geometry(region)
    return rasterize(
        [(geometry, 1)],
        out_shape=system.shape,
        transform=system.transform,
        fill=0,
        all_touched=all_touched,
        dtype="uint8",
    )


def rectangle_mask(
    system: CoordinateSystem, top_left: Coordinate, bottom_right: Coordinate
) -> np.ndarray:
    """Mask selecting the pixels between two corners, clamped to the grid."""
    rows = sorted(
        (
            lat_to_row(system, top_left.latitude),
            lat_to_row(system, bottom_right.latitude),
        )
    )
    columns = sorted(
        (
            long_to_column(system, top_left.longitude),
            long_to_column(system, bottom_right.longitude),
        )
    )
    row_start, row_stop = np.clip(rows, 0, system.height)
    col_start, col_stop = np.clip(columns, 0, system.width)

    mask = np.zeros(system.shape, dtype=np.uint8)
    mask[row_start:row_stop, col_start:col_stop] = 1
    return mask


def validate_mask(mask: np.ndarray, shape: tuple[int, ...]) -> None:
    if mask.ndim != 2 or tuple(mask.shape) != tuple(shape):
        raise DimensionMismatchError(
            tuple(shape),
            tuple(mask.shape),
            details="The mask must cover the raster pixel for pixel.",
        )
