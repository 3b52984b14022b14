from pydantic import Field
from pydantic.dataclasses import dataclass

from nighttime_lights.errors import ConfigurationError


@dataclass(frozen=True)
class Coordinate:
    """Geographic coordinate representing a point on Earth's surface.

    Attributes:
        latitude: Latitude in decimal degrees (range: -90 to 90).
        longitude: Longitude in decimal degrees (range: -180 to 180).
    """

    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)


@dataclass(frozen=True)
class BoundingBox:
    """Rectangular extent in decimal degrees used to crop rasters.

    Attributes:
        lon_min: Western edge.
        lon_max: Eastern edge.
        lat_min: Southern edge.
        lat_max: Northern edge.
    """

    lon_min: float = Field(..., ge=-180, le=180)
    lon_max: float = Field(..., ge=-180, le=180)
    lat_min: float = Field(..., ge=-90, le=90)
    lat_max: float = Field(..., ge=-90, le=90)

    def __post_init__(self):
        if self.lon_min >= self.lon_max:
            raise ConfigurationError(
                f"lon_min ({self.lon_min}) must be smaller than "
                f"lon_max ({self.lon_max})"
            )
        if self.lat_min >= self.lat_max:
            raise ConfigurationError(
                f"lat_min ({self.lat_min}) must be smaller than "
                f"lat_max ({self.lat_max})"
            )

    @property
    def top_left(self) -> Coordinate:
        return Coordinate(latitude=self.lat_max, longitude=self.lon_min)

    @property
    def bottom_right(self) -> Coordinate:
        return Coordinate(latitude=self.lat_min, longitude=self.lon_max)


INDIA_BOUNDS = BoundingBox(lon_min=65.39, lon_max=99.94, lat_min=5.34, lat_max=39.27)
