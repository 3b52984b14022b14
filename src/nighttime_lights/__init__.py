"""Aggregation of satellite nighttime lights over regions and time."""

from nighttime_lights.aggregate import (
    aggregate,
    aggregate_dataframe,
    aggregate_timeseries,
)
from nighttime_lights.coordinate_system import (
    CoordinateSystem,
    column_to_long,
    lat_to_row,
    long_to_column,
    row_to_lat,
    translate_geometry,
)
from nighttime_lights.grids import (
    INDIA_COORDINATE_SYSTEM,
    MUMBAI_COORDINATE_SYSTEM,
    Grids,
    get_coordinate_system,
)
from nighttime_lights.types.geo import BoundingBox, Coordinate

__version__ = "0.1.0"


def __getattr__(name):
    """Lazy import to avoid pulling in raster and vector I/O when not needed."""
    if name in ("read_nightlights", "read_nightlights_datacube"):
        from nighttime_lights import loader

        return getattr(loader, name)
    if name == "load_shapefile":
        from nighttime_lights.regions import load_shapefile

        return load_shapefile
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "Coordinate",
    "BoundingBox",
    "CoordinateSystem",
    "lat_to_row",
    "long_to_column",
    "row_to_lat",
    "column_to_long",
    "translate_geometry",
    "Grids",
    "INDIA_COORDINATE_SYSTEM",
    "MUMBAI_COORDINATE_SYSTEM",
    "get_coordinate_system",
    "aggregate",
    "aggregate_timeseries",
    "aggregate_dataframe",
    "read_nightlights",
    "read_nightlights_datacube",
    "load_shapefile",
]
