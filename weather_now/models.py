# ABOUTME: Pydantic BaseModels for locations, forecast data, and the widget session state.
# ABOUTME: Defines structured types for Open-Meteo API data used throughout the app.

from datetime import date
from enum import Enum

from pydantic import BaseModel, ConfigDict


class UnitSystem(str, Enum):
    """Temperature unit system selected for the session."""

    METRIC = "metric"
    IMPERIAL = "imperial"

    @property
    def api_value(self) -> str:
        """Unit string understood by the Open-Meteo temperature_unit parameter."""
        return "celsius" if self is UnitSystem.METRIC else "fahrenheit"


class Coordinates(BaseModel):
    """A latitude/longitude pair from geolocation or geocoding."""

    model_config = ConfigDict(frozen=True)

    latitude: float
    longitude: float


class ResolvedLocation(BaseModel):
    """Coordinates together with a human-readable place label."""

    model_config = ConfigDict(frozen=True)

    coordinates: Coordinates
    label: str


class GeocodingResult(BaseModel):
    """One result entry from the Open-Meteo geocoding endpoints."""

    latitude: float
    longitude: float
    name: str
    admin1: str | None = None
    country: str | None = None


class GeocodingResponse(BaseModel):
    """Body of a geocoding response; a missing results key means no match."""

    results: list[GeocodingResult] | None = None


class CurrentWeatherPayload(BaseModel):
    """Raw current_weather block as returned by the forecast endpoint."""

    temperature: float
    weathercode: int
    is_day: int = 1
    windspeed: float
    winddirection: float | None = None
    time: str


class DailyPayload(BaseModel):
    """Raw column-oriented daily block; every column is index-aligned with time."""

    time: list[date] = []
    weathercode: list[int | None] = []
    temperature_2m_max: list[float | None] = []
    temperature_2m_min: list[float | None] = []
    sunrise: list[str | None] = []
    sunset: list[str | None] = []


class ForecastPayload(BaseModel):
    """Top-level forecast body; blocks are validated separately so a missing one is detectable."""

    latitude: float | None = None
    longitude: float | None = None
    timezone: str | None = None
    current_weather: dict | None = None
    daily: dict | None = None


class FetchKey(BaseModel):
    """Identity of a forecast request; two requests with equal keys are redundant."""

    model_config = ConfigDict(frozen=True)

    latitude: float
    longitude: float
    unit: UnitSystem

    @classmethod
    def for_request(cls, coordinates: Coordinates, unit: UnitSystem) -> "FetchKey":
        return cls(latitude=coordinates.latitude, longitude=coordinates.longitude, unit=unit)


class CurrentConditions(BaseModel):
    """Current weather block from the Open-Meteo forecast endpoint."""

    temperature_value: float
    temperature_unit: str
    weather_code: int
    is_day: bool
    wind_speed_kmh: float
    wind_direction_degrees: float | None = None
    observation_time: str


class DailyForecast(BaseModel):
    """One day of the daily forecast block."""

    date: date
    weather_code: int | None = None
    temp_max: float | None = None
    temp_min: float | None = None
    sunrise: str | None = None
    sunset: str | None = None


class ForecastResponse(BaseModel):
    """Parsed response from the Open-Meteo forecast endpoint."""

    latitude: float
    longitude: float
    timezone: str
    current: CurrentConditions | None = None
    daily: list[DailyForecast] = []


class WeatherMeta(BaseModel):
    """Condition code and day/night flag published for theming."""

    code: int
    is_day: int


class FetchPhase(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"


class SessionState(BaseModel):
    """Snapshot of everything the presentation layer renders.

    Snapshots are immutable; the coordinator publishes a new one on every transition.
    """

    model_config = ConfigDict(frozen=True)

    phase: FetchPhase = FetchPhase.IDLE
    coordinates: Coordinates | None = None
    location: ResolvedLocation | None = None
    display_name: str = ""
    fetch_key: FetchKey | None = None
    unit: UnitSystem = UnitSystem.METRIC
    conditions: CurrentConditions | None = None
    daily_forecast: list[DailyForecast] | None = None
    loading: bool = False
    error: str = ""
