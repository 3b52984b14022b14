from pathlib import Path

import geopandas as gpd
from pydantic import validate_call

from nighttime_lights.errors import DataNotFoundError
from nighttime_lights.logging import get_logger

logger = get_logger(__name__)


@validate_call
def load_shapefile(path: Path) -> gpd.GeoDataFrame:
    """Load a region table with one row per polygon.

    Args:
        path: Path to a shapefile, or any other vector format readable by
            geopandas.

    Returns:
        A GeoDataFrame with a ``geometry`` column and the file's attributes.

    Raises:
        DataNotFoundError: If ``path`` does not exist.
    """
    if not path.exists():
        raise DataNotFoundError(f"Shapefile {path} does not exist")

    regions = gpd.read_file(path)
    logger.info(f"Loaded {len(regions)} regions from {path}")
    return regions
