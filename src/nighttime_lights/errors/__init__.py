from nighttime_lights.errors.data_errors import (
    DataNotFoundError,
    DimensionMismatchError,
    KeyCollisionError,
)
from nighttime_lights.errors.geometry_errors import ConfigurationError
from nighttime_lights.errors.nightlights_error import NightlightsError

__all__ = [
    "NightlightsError",
    "ConfigurationError",
    "DimensionMismatchError",
    "DataNotFoundError",
    "KeyCollisionError",
]
