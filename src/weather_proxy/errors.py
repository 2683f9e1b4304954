"""Errors surfaced to API callers."""


class ServiceError(Exception):
    """Base class for errors rendered as JSON error responses."""

    status_code: int = 500
    message: str = "Internal server error"
    solution: str | None = None

    def __init__(self, message: str | None = None) -> None:
        if message is not None:
            self.message = message
        super().__init__(self.message)


class ConfigurationError(ServiceError):
    """Raised when the upstream API key is not configured."""

    status_code = 500
    message = "Server configuration error"


class LocationRequiredError(ServiceError):
    """Raised when a request names neither a city nor a coordinate pair."""

    status_code = 400
    message = "Provide city or coordinates"


class InvalidCoordinatesError(ServiceError):
    """Raised when latitude or longitude is not a number in range."""

    status_code = 400
    message = "Invalid coordinates"


class InvalidRequestError(ServiceError):
    """Raised when request parameters fail validation."""

    status_code = 400
    message = "Invalid request parameters"


class UpstreamAuthError(ServiceError):
    """Raised when the upstream provider rejects the API key."""

    status_code = 401
    message = "Invalid API Key"
    solution = "Update OPENWEATHER_API_KEY in .env file"


class UpstreamNotFoundError(ServiceError):
    """Raised when the upstream provider does not know the location."""

    status_code = 404
    message = "Location not found"


class UpstreamUnavailableError(ServiceError):
    """Raised for any other upstream failure."""

    status_code = 500
    message = "Weather service unavailable"
