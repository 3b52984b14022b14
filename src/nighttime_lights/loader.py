"""Loading monthly radiance and coverage rasters into datacubes.

Loading is a pipeline of three steps over a :class:`RasterSource`: every file
is opened (lazily), cropped to a bounding box or a geometry, and the cropped
rasters are stacked along a ``time`` dimension in date order.
"""

from abc import ABC, abstractmethod
from contextlib import nullcontext
from datetime import date
from pathlib import Path
from typing import Any, Sequence

import numpy as np
import pandas as pd
import rioxarray
import xarray as xr
from dask.diagnostics import ProgressBar
from pydantic import validate_call
from rasterio.windows import from_bounds
from shapely.geometry import mapping

from nighttime_lights.aggregate import TIME_DIM
from nighttime_lights.discovery import sort_files_by_date
from nighttime_lights.errors import DataNotFoundError, DimensionMismatchError
from nighttime_lights.logging import get_logger
from nighttime_lights.mask import as_geometry
from nighttime_lights.settings.nightlights_settings import NightlightsSettings
from nighttime_lights.types.geo import INDIA_BOUNDS, BoundingBox

logger = get_logger(__name__)

# Monthly VIIRS composites are available from April 2012
DEFAULT_START_DATE = date(2012, 4, 1)
DEFAULT_END_DATE = date(2023, 1, 1)


class RasterSource(ABC):
    """Capability to open and crop single-band rasters."""

    @abstractmethod
    def open(self, path: Path) -> xr.DataArray:
        """Open a raster as a 2-D DataArray with ``y`` and ``x`` dimensions."""

    @abstractmethod
    def crop_to_bounds(
        self, raster: xr.DataArray, bounds: BoundingBox
    ) -> xr.DataArray:
        pass

    @abstractmethod
    def crop_to_geometry(self, raster: xr.DataArray, geometry: Any) -> xr.DataArray:
        pass


class RioxarraySource(RasterSource):
    """Reads GeoTIFFs lazily through rioxarray, backed by dask arrays."""

    def __init__(self, chunks: int | dict[str, int] | str | bool = "auto"):
        self._chunks = chunks

    def open(self, path: Path) -> xr.DataArray:
        raster = rioxarray.open_rasterio(path, chunks=self._chunks, masked=True)
        if "band" in raster.dims:
            raster = raster.squeeze("band", drop=True)
        return raster

    def crop_to_bounds(
        self, raster: xr.DataArray, bounds: BoundingBox
    ) -> xr.DataArray:
        """Select the pixels from the top-left corner up to the bottom-right one.

        Each edge of ``bounds`` is rounded to the nearest pixel boundary and the
        range is half-open, so the crop has as many rows and columns as
        :func:`nighttime_lights.coordinate_system.translate_geometry` gives the
        same corners on the raster's grid.
        """
        window = from_bounds(
            bounds.lon_min,
            bounds.lat_min,
            bounds.lon_max,
            bounds.lat_max,
            transform=raster.rio.transform(),
        )
        rows = sorted(
            (round(window.row_off), round(window.row_off + window.height))
        )
        columns = sorted(
            (round(window.col_off), round(window.col_off + window.width))
        )
        row_start, row_stop = np.clip(rows, 0, raster.sizes["y"])
        col_start, col_stop = np.clip(columns, 0, raster.sizes["x"])
        return raster.isel(
            y=slice(int(row_start), int(row_stop)),
            x=slice(int(col_start), int(col_stop)),
        )

    def crop_to_geometry(self, raster: xr.DataArray, geometry: Any) -> xr.DataArray:
        shape = as_geometry(geometry)
        geojson = shape if isinstance(shape, dict) else mapping(shape)
        return raster.rio.clip([geojson], drop=True)


def stack_by_time(
    rasters: Sequence[xr.DataArray], timestamps: Sequence[date]
) -> xr.DataArray:
    if len(rasters) == 0:
        raise DataNotFoundError("No rasters to stack")
    if len(rasters) != len(timestamps):
        raise DimensionMismatchError(
            (len(timestamps),),
            (len(rasters),),
            details="Every raster needs exactly one timestamp.",
        )

    time = pd.DatetimeIndex(pd.to_datetime(list(timestamps)), name=TIME_DIM)
    return xr.concat(list(rasters), dim=time)


def load_datacube(
    files: Sequence[tuple[Path, date]],
    source: RasterSource,
    bounds: BoundingBox | None = None,
    geometry: Any = None,
) -> xr.DataArray:
    """Open, crop and stack ``files`` into a ``(time, y, x)`` datacube."""
    rasters = []
    for path, _ in files:
        raster = source.open(path)
        if geometry is not None:
            raster = source.crop_to_geometry(raster, geometry)
        elif bounds is not None:
            raster = source.crop_to_bounds(raster, bounds)
        rasters.append(raster)

    return stack_by_time(rasters, [file_date for _, file_date in files])


def _resolve(
    settings: NightlightsSettings | None, source: RasterSource | None
) -> tuple[NightlightsSettings, RasterSource]:
    if settings is None:
        settings = NightlightsSettings()
    if source is None:
        source = RioxarraySource(chunks=settings.chunks)
    return settings, source


@validate_call(config=dict(arbitrary_types_allowed=True))
def read_nightlights(
    day: date,
    settings: NightlightsSettings | None = None,
    source: RasterSource | None = None,
) -> tuple[xr.DataArray, xr.DataArray]:
    """Load the radiance and coverage rasters of a single month.

    Args:
        day: Start date of the composite period, e.g. ``date(2015, 1, 1)``.
        settings: Where to find the rasters. Defaults to environment settings.
        source: How to open the rasters. Defaults to a lazy rioxarray reader.

    Returns:
        The radiance raster and the coverage raster.

    Raises:
        DataNotFoundError: If either directory has no raster for ``day``.
    """
    settings, source = _resolve(settings, source)

    rad_files = sort_files_by_date(settings.rad_path, day, day)
    if not rad_files:
        raise DataNotFoundError(
            f"No radiance raster for {day}", details=f"Searched {settings.rad_path}"
        )
    cf_files = sort_files_by_date(settings.cf_path, day, day)
    if not cf_files:
        raise DataNotFoundError(
            f"No coverage raster for {day}", details=f"Searched {settings.cf_path}"
        )

    logger.info(f"Loading rasters for {day}")
    return source.open(rad_files[0][0]), source.open(cf_files[0][0])


@validate_call(config=dict(arbitrary_types_allowed=True))
def read_nightlights_datacube(
    start_date: date = DEFAULT_START_DATE,
    end_date: date = DEFAULT_END_DATE,
    bounds: BoundingBox | None = None,
    geometry: Any = None,
    settings: NightlightsSettings | None = None,
    source: RasterSource | None = None,
    compute: bool = False,
    print_progress: bool | None = None,
) -> tuple[xr.DataArray, xr.DataArray]:
    """Load radiance and coverage datacubes for a date range.

    Rasters are cropped to ``geometry`` when one is given and to ``bounds``
    otherwise, defaulting to the extent of India.

    Args:
        start_date: First month to load (inclusive).
        end_date: Last month to load (inclusive).
        bounds: Rectangle to crop to.
        geometry: Polygon to crop to, e.g. a row of a shapefile.
        settings: Where to find the rasters. Defaults to environment settings.
        source: How to open the rasters. Defaults to a lazy rioxarray reader.
        compute: Whether to load the data into memory before returning.
        print_progress: Whether to display a progress bar while computing.
            If None, uses the settings' default.

    Returns:
        The radiance datacube and the coverage datacube, each with dimensions
        ``(time, y, x)`` and ascending time.

    Raises:
        ValueError: If both ``bounds`` and ``geometry`` are given.
        DataNotFoundError: If no raster falls within the date range.
        DimensionMismatchError: If radiance and coverage months differ.

    Examples:
        >>> rad, cf = read_nightlights_datacube(
        ...     date(2015, 1, 1),
        ...     date(2020, 12, 1),
        ...     bounds=BoundingBox(65.39, 75.39, 5.34, 15.34),
        ... )
    """
    if bounds is not None and geometry is not None:
        raise ValueError("Specify either bounds or geometry, not both")
    if bounds is None and geometry is None:
        bounds = INDIA_BOUNDS

    settings, source = _resolve(settings, source)

    rad_files = sort_files_by_date(settings.rad_path, start_date, end_date)
    cf_files = sort_files_by_date(settings.cf_path, start_date, end_date)
    if not rad_files:
        raise DataNotFoundError(
            f"No radiance rasters between {start_date} and {end_date}",
            details=f"Searched {settings.rad_path}",
        )

    rad_dates = [file_date for _, file_date in rad_files]
    cf_dates = [file_date for _, file_date in cf_files]
    if rad_dates != cf_dates:
        missing = sorted(set(rad_dates).symmetric_difference(cf_dates))
        raise DimensionMismatchError(
            (len(rad_dates),),
            (len(cf_dates),),
            details=f"Radiance and coverage rasters differ for {missing}",
        )

    logger.info(
        f"Loading {len(rad_files)} months of radiance and coverage "
        f"from {start_date} to {end_date}"
    )
    rad_datacube = load_datacube(rad_files, source, bounds=bounds, geometry=geometry)
    cf_datacube = load_datacube(cf_files, source, bounds=bounds, geometry=geometry)

    if not compute:
        return rad_datacube, cf_datacube
    return _compute(rad_datacube, cf_datacube, settings, print_progress)


def _compute(
    rad_datacube: xr.DataArray,
    cf_datacube: xr.DataArray,
    settings: NightlightsSettings,
    print_progress: bool | None,
) -> tuple[xr.DataArray, xr.DataArray]:
    size_gb = (rad_datacube.nbytes + cf_datacube.nbytes) / 1e9
    logger.info(f"Loading datacubes of size {size_gb:.2f}GB")

    show_progress = settings.should_print_progress(print_progress)
    with ProgressBar() if show_progress else nullcontext():
        return rad_datacube.compute(), cf_datacube.compute()
