"""Masked reductions of radiance and coverage rasters.

"Aggregate" always means the sum of the masked pixels, never their mean.
Divide by ``mask.sum()`` to obtain an average over a region.
"""

from typing import Any

import numpy as np
import pandas as pd
import xarray as xr
from scipy import sparse

from nighttime_lights.coordinate_system import CoordinateSystem
from nighttime_lights.errors import DimensionMismatchError, KeyCollisionError
from nighttime_lights.logging import get_logger
from nighttime_lights.mask import polygon_mask, validate_mask

logger = get_logger(__name__)

TIME_DIM = "time"

ArrayLike = np.ndarray | xr.DataArray


def _cube_to_array(cube: ArrayLike) -> np.ndarray:
    """Return the cube as a (rows, columns, time) numpy array."""
    if isinstance(cube, xr.DataArray) and TIME_DIM in cube.dims:
        cube = cube.transpose(..., TIME_DIM)
    array = np.asarray(cube)
    if array.ndim != 3:
        raise DimensionMismatchError(
            (3,),
            (array.ndim,),
            details="A datacube must have two spatial axes and a time axis.",
        )
    return array


def _spatial_shape(cube: ArrayLike) -> tuple[int, int]:
    if isinstance(cube, xr.DataArray) and TIME_DIM in cube.dims:
        return tuple(cube.transpose(..., TIME_DIM).shape[:2])
    return tuple(np.shape(cube)[:2])


def _time_index(cube: ArrayLike, length: int) -> pd.Index:
    if isinstance(cube, xr.DataArray) and TIME_DIM in cube.coords:
        return cube.indexes[TIME_DIM]
    return pd.RangeIndex(length)


def aggregate(image: ArrayLike, mask: ArrayLike) -> Any:
    """Sum of the pixels of ``image`` selected by ``mask``.

    The image is copied before it is multiplied with the mask, so the input is
    never modified. Missing pixels (NaN) contribute nothing.

    Args:
        image: 2-D raster.
        mask: 2-D array of 0/1 values with the same shape as ``image``.

    Returns:
        The masked sum as a Python scalar.

    Raises:
        DimensionMismatchError: If image and mask shapes differ.

    Examples:
        >>> aggregate(np.ones((2, 2)), np.array([[1, 0], [0, 1]]))
        2.0
    """
    image = np.array(image, copy=True)
    mask = np.asarray(mask)
    validate_mask(mask, image.shape)

    image[np.isnan(image)] = 0
    masked_image = image * mask
    return masked_image.sum().item()


def _sparse_cube(cube: ArrayLike) -> list[sparse.csr_matrix]:
    """Normalize the cube to float32 and hold each time slice as a CSR matrix."""
    datacube = _cube_to_array(cube).astype(np.float32, copy=True)
    datacube[np.isnan(datacube)] = 0
    return [
        sparse.csr_matrix(datacube[:, :, t]) for t in range(datacube.shape[2])
    ]


def _apply_mask(slices: list[sparse.csr_matrix], mask: np.ndarray) -> np.ndarray:
    sparse_mask = sparse.csr_matrix(mask.astype(np.float32))
    lights = np.empty(len(slices), dtype=np.float64)
    for t, time_slice in enumerate(slices):
        lights[t] = time_slice.multiply(sparse_mask).sum(dtype=np.float64)
    return lights


def aggregate_timeseries(cube: ArrayLike, mask: ArrayLike) -> np.ndarray:
    """Aggregate every time slice of ``cube`` over ``mask``.

    The cube is normalized to ``float32`` and each slice is held as a sparse
    matrix, since nighttime radiance and region masks are mostly zero. Sums
    are accumulated in ``float64``.

    Args:
        cube: 3-D array with time as the last axis, or a DataArray with a
            ``time`` dimension.
        mask: 2-D array of 0/1 values matching the spatial shape of the cube.

    Returns:
        One aggregate per time step, in the order of the cube's time axis.

    Raises:
        DimensionMismatchError: If the cube is not 3-D or the mask does not
            match its spatial shape.
    """
    slices = _sparse_cube(cube)
    mask = np.asarray(mask)
    validate_mask(mask, _spatial_shape(cube))
    return _apply_mask(slices, mask)


def aggregate_dataframe(
    coordinate_system: CoordinateSystem,
    cube: ArrayLike,
    region_table: pd.DataFrame,
    attribute: str,
) -> pd.DataFrame:
    """Compute the aggregate time series of ``cube`` for every region.

    Args:
        coordinate_system: Coordinate system of the cube's spatial grid.
        cube: Datacube as accepted by :func:`aggregate_timeseries`.
        region_table: Table with one row per region and a ``geometry`` column,
            typically loaded with :func:`nighttime_lights.regions.load_shapefile`.
        attribute: Column whose values label the output columns.

    Returns:
        A DataFrame with one column per region, in table order, indexed by the
        cube's time coordinate when it has one.

    Raises:
        DimensionMismatchError: If the cube does not lie on ``coordinate_system``.
        KeyCollisionError: If two regions share the same ``attribute`` value.
        KeyError: If ``attribute`` is not a column of ``region_table``.

    Examples:
        >>> districts = load_shapefile("assets/mumbai_map/mumbai_districts.shp")
        >>> aggregate_dataframe(MUMBAI_COORDINATE_SYSTEM, rad, districts, "District")
    """
    if attribute not in region_table.columns:
        raise KeyError(f"Column '{attribute}' not found in region table")

    slices = _sparse_cube(cube)
    if _spatial_shape(cube) != coordinate_system.shape:
        raise DimensionMismatchError(
            coordinate_system.shape,
            _spatial_shape(cube),
            details="The datacube does not lie on the given coordinate system.",
        )

    columns: dict[Any, np.ndarray] = {}
    for _, row in region_table.iterrows():
        key = row[attribute]
        if key in columns:
            raise KeyCollisionError(key, attribute)

        logger.debug(f"Aggregating region {key}")
        mask = polygon_mask(coordinate_system, row)
        columns[key] = _apply_mask(slices, mask)

    index = _time_index(cube, len(slices))
    return pd.DataFrame(columns, index=index)
