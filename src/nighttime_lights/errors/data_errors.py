from nighttime_lights.errors.nightlights_error import NightlightsError


class DimensionMismatchError(NightlightsError):
    def __init__(
        self,
        expected: tuple[int, ...],
        actual: tuple[int, ...],
        details: str | None = None,
    ):
        super().__init__(
            f"Dimension mismatch: expected {expected}, got {actual}",
            details=details,
        )
        self.expected = expected
        self.actual = actual


class DataNotFoundError(NightlightsError):
    def __init__(self, message: str, details: str | None = None):
        super().__init__(message, details=details)


class KeyCollisionError(NightlightsError):
    def __init__(self, key: object, attribute: str):
        super().__init__(
            f"Duplicate region label {key!r} in column '{attribute}'",
            details="Each region must have a unique label to become a column.",
        )
        self.key = key
        self.attribute = attribute
