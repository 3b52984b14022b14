from nighttime_lights.errors.nightlights_error import NightlightsError


class ConfigurationError(NightlightsError):
    def __init__(self, message: str, details: str | None = None):
        super().__init__(message, details=details)


class DegenerateExtentError(ConfigurationError):
    def __init__(self, axis: str, value: float):
        super().__init__(
            f"Degenerate extent: both corners share {axis} {value}",
            details="Top-left and bottom-right corners must differ on both axes.",
        )
        self.axis = axis
        self.value = value


class NonPositiveDimensionError(ConfigurationError):
    def __init__(self, height: int, width: int):
        super().__init__(
            f"Grid dimensions must be positive, got height={height}, width={width}"
        )
        self.height = height
        self.width = width
