# ABOUTME: Runtime settings for the weather widget, read from the environment.
# ABOUTME: Loads a .env file first so local overrides work without exporting variables.

import os

from dotenv import load_dotenv
from pydantic import BaseModel

from weather_now.models import UnitSystem

GEOCODING_URL = "https://geocoding-api.open-meteo.com/v1/search"
REVERSE_GEOCODING_URL = "https://geocoding-api.open-meteo.com/v1/reverse"
FORECAST_URL = "https://api.open-meteo.com/v1/forecast"


class Settings(BaseModel):
    """Endpoints and tunables shared by the resolver, coordinator, and web adapter."""

    forecast_url: str = FORECAST_URL
    geocoding_url: str = GEOCODING_URL
    reverse_geocoding_url: str = REVERSE_GEOCODING_URL
    language: str = "en"
    forecast_days: int = 7
    geolocation_timeout: float = 8.0
    default_unit: UnitSystem = UnitSystem.METRIC
    log_level: str = "INFO"


def load_settings() -> Settings:
    """Build Settings from environment variables, falling back to defaults."""
    load_dotenv()
    env = {
        "forecast_url": os.environ.get("WEATHER_FORECAST_URL"),
        "geocoding_url": os.environ.get("WEATHER_GEOCODING_URL"),
        "reverse_geocoding_url": os.environ.get("WEATHER_REVERSE_GEOCODING_URL"),
        "language": os.environ.get("WEATHER_LANGUAGE"),
        "forecast_days": os.environ.get("WEATHER_FORECAST_DAYS"),
        "geolocation_timeout": os.environ.get("WEATHER_GEOLOCATION_TIMEOUT"),
        "default_unit": os.environ.get("WEATHER_DEFAULT_UNIT"),
        "log_level": os.environ.get("LOG_LEVEL"),
    }
    return Settings(**{k: v for k, v in env.items() if v})
