# ABOUTME: Exception taxonomy for location resolution and forecast retrieval.
# ABOUTME: Each error carries the user-facing message shown in the session state.


class WeatherError(Exception):
    """Base class for failures that surface to the user as a single message."""

    default_message = "Something went wrong. Please try again."

    def __init__(self, message: str | None = None):
        super().__init__(message or self.default_message)

    @property
    def user_message(self) -> str:
        return str(self)


class InputInvalid(WeatherError, ValueError):
    """Search text was empty after trimming."""

    default_message = "Enter a city name to search."


class NotFound(WeatherError):
    """Forward geocoding returned zero results."""

    default_message = "City not found. Try another name."


class ServiceUnavailable(WeatherError):
    """Transport failure or non-success status from a weather or geocoding service."""

    default_message = "Could not find that place. Please try again."


class IncompleteResponse(WeatherError):
    """Forecast response lacked the current_weather section."""

    default_message = "Failed to fetch weather. Please try again."


class LocationUnavailable(WeatherError):
    """Platform geolocation was denied or timed out."""

    default_message = "Could not get your location."
