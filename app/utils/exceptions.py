from typing import Any


class WeatherAPIError(Exception):
    """Base exception for weather API related errors"""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.status_code = 500
        self.error_code = "WEATHER_API_ERROR"


class ValidationError(WeatherAPIError):
    """Exception raised when request input is malformed"""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message, details)
        self.status_code = 400
        self.error_code = "VALIDATION_ERROR"


class ConfigurationError(WeatherAPIError):
    """Exception raised when configuration is invalid"""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message, details)
        self.error_code = "CONFIGURATION_ERROR"


class NotFoundError(WeatherAPIError):
    """Exception raised when a location or resource does not exist"""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message, details)
        self.status_code = 404
        self.error_code = "NOT_FOUND"


class InvalidCoordinatesError(WeatherAPIError):
    """Exception raised when the provider rejects a coordinate pair"""

    def __init__(self, lat: float, lon: float):
        super().__init__("Invalid coordinates provided", {"lat": lat, "lon": lon})
        self.status_code = 400
        self.error_code = "INVALID_COORDINATES"


class UnauthorizedError(WeatherAPIError):
    """Exception raised when the provider rejects the configured API key"""

    def __init__(self, upstream_message: str | None = None):
        reason = upstream_message or "Invalid API key"
        super().__init__(
            f"OpenWeatherMap API error: {reason}. "
            "Please verify your API key is valid and activated."
        )
        self.status_code = 401
        self.error_code = "UNAUTHORIZED"
        self.upstream_message = upstream_message


class UpstreamError(WeatherAPIError):
    """Exception raised for any other failure reported by the provider"""

    def __init__(self, upstream_status: int | None, message: str):
        super().__init__(message, {"upstream_status": upstream_status})
        self.error_code = "UPSTREAM_ERROR"
        self.upstream_status = upstream_status


class ExternalAPIError(Exception):
    """Raised by the weather client when the provider call does not succeed.

    The dispatch service translates it into one of the client-facing errors
    above; it is never returned to callers directly.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        response_body: str | None = None,
        upstream_message: str | None = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.response_body = response_body
        self.upstream_message = upstream_message
