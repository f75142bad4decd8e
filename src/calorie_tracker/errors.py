"""Error types raised by the calorie tracker."""


class CalorieTrackerError(Exception):
    """Base class for application errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ConfigurationError(CalorieTrackerError):
    """Required configuration, such as API credentials, is missing."""


class ApiError(CalorieTrackerError):
    """A remote provider returned an error or an unusable response.

    ``status_code`` is ``None`` when the request never produced an HTTP response
    (connection failures, timeouts) or when the body could not be parsed.
    """

    def __init__(
        self, message: str, status_code: int | None = None, body: str = ""
    ) -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(message)


class ValidationError(CalorieTrackerError):
    """Caller input was rejected before reaching storage or the calculator."""

    def __init__(self, message: str, field: str | None = None) -> None:
        self.field = field
        super().__init__(message)


class StorageReadError(CalorieTrackerError):
    """A stored collection could not be read or decoded."""


class StorageWriteError(CalorieTrackerError):
    """A collection could not be written to the key-value store."""
