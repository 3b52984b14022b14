"""Utility functions for nighttime lights tests."""

from datetime import date
from pathlib import Path
from typing import Any

import numpy as np
import rasterio
import xarray as xr

from nighttime_lights.coordinate_system import CoordinateSystem
from nighttime_lights.discovery import extract_date
from nighttime_lights.loader import RasterSource
from nighttime_lights.mask import as_geometry
from nighttime_lights.types.geo import BoundingBox


def raster_filename(month: date) -> str:
    """VIIRS-style monthly composite filename for ``month``."""
    start = month.strftime("%Y%m%d")
    end = month.replace(day=28).strftime("%Y%m%d")
    return f"SVDNB_npp_{start}-{end}_75N060E_vcmcfg_v10_c201501.avg_rade9h.tif"


def create_raster_files(folder: Path, months: list[date]) -> list[Path]:
    """Create empty raster files in ``folder`` for each month."""
    folder.mkdir(parents=True, exist_ok=True)
    paths = []
    for month in months:
        path = folder / raster_filename(month)
        path.touch()
        paths.append(path)
    return paths


def create_raster(
    value: float,
    latitudes: np.ndarray,
    longitudes: np.ndarray,
) -> xr.DataArray:
    """Constant 2-D raster with pixel-centre coordinates."""
    return xr.DataArray(
        np.full((len(latitudes), len(longitudes)), value, dtype=np.float32),
        dims=("y", "x"),
        coords={"y": latitudes, "x": longitudes},
    )


class InMemoryRasterSource(RasterSource):
    """Raster source that fabricates rasters instead of reading files.

    Radiance rasters are filled with the month number of the file, coverage
    rasters (files in a folder named ``cf``) with ten times that value.
    """

    def __init__(
        self,
        latitudes: np.ndarray | None = None,
        longitudes: np.ndarray | None = None,
    ):
        # One-degree pixels between 10N-21N and 70E-81E
        self.latitudes = (
            latitudes if latitudes is not None else np.arange(20.5, 10.0, -1.0)
        )
        self.longitudes = (
            longitudes if longitudes is not None else np.arange(70.5, 81.0, 1.0)
        )
        self.opened: list[Path] = []
        self.bounds_crops: list[BoundingBox] = []
        self.geometry_crops: list[Any] = []

    def open(self, path: Path) -> xr.DataArray:
        self.opened.append(path)
        value = extract_date(path.name).month
        if path.parent.name == "cf":
            value *= 10
        return create_raster(value, self.latitudes, self.longitudes)

    def crop_to_bounds(
        self, raster: xr.DataArray, bounds: BoundingBox
    ) -> xr.DataArray:
        self.bounds_crops.append(bounds)
        return raster.sel(
            x=slice(bounds.lon_min, bounds.lon_max),
            y=slice(bounds.lat_max, bounds.lat_min),
        )

    def crop_to_geometry(self, raster: xr.DataArray, geometry: Any) -> xr.DataArray:
        self.geometry_crops.append(geometry)
        lon_min, lat_min, lon_max, lat_max = as_geometry(geometry).bounds
        return raster.sel(x=slice(lon_min, lon_max), y=slice(lat_max, lat_min))


def write_geotiff(path: Path, system: CoordinateSystem, value: float) -> Path:
    """Write a constant single-band GeoTIFF laid out on ``system``."""
    with rasterio.open(
        path,
        "w",
        driver="GTiff",
        height=system.height,
        width=system.width,
        count=1,
        dtype="float32",
        crs="EPSG:4326",
        transform=system.transform,
    ) as dst:
        dst.write(np.full((1, *system.shape), value, dtype=np.float32))
    return path
