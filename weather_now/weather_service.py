# ABOUTME: Service layer for Open-Meteo API calls and response parsing.
# ABOUTME: Handles forward/reverse geocoding, the forecast request, and label formatting.
import httpx

from weather_now.config import Settings
from weather_now.models import (
    Coordinates,
    CurrentConditions,
    CurrentWeatherPayload,
    DailyForecast,
    DailyPayload,
    ForecastPayload,
    ForecastResponse,
    GeocodingResponse,
    GeocodingResult,
    UnitSystem,
)

DAILY_PARAMS = "temperature_2m_max,temperature_2m_min,weathercode,sunrise,sunset"

LABEL_SEPARATOR = ",\n"


async def geocode(client: httpx.AsyncClient, settings: Settings, name: str) -> GeocodingResult | None:
    """Geocode a place name to its best match using the Open-Meteo search API."""
    resp = await client.get(
        settings.geocoding_url,
        params={"name": name, "count": 1, "language": settings.language},
    )
    resp.raise_for_status()
    return _first_result(resp.json())


async def reverse_geocode(
    client: httpx.AsyncClient, settings: Settings, coordinates: Coordinates
) -> GeocodingResult | None:
    """Look up the place nearest to a coordinate pair."""
    resp = await client.get(
        settings.reverse_geocoding_url,
        params={
            "latitude": coordinates.latitude,
            "longitude": coordinates.longitude,
            "count": 1,
            "language": settings.language,
        },
    )
    resp.raise_for_status()
    return _first_result(resp.json())


async def get_forecast(
    client: httpx.AsyncClient,
    settings: Settings,
    coordinates: Coordinates,
    unit: UnitSystem,
) -> ForecastResponse:
    """Fetch current weather and the daily forecast from the Open-Meteo forecast API.

    Raises pydantic.ValidationError when the body does not have the expected shape.
    """
    resp = await client.get(
        settings.forecast_url,
        params={
            "latitude": coordinates.latitude,
            "longitude": coordinates.longitude,
            "current_weather": True,
            "daily": DAILY_PARAMS,
            "temperature_unit": unit.api_value,
            "timezone": "auto",
            "forecast_days": settings.forecast_days,
        },
    )
    resp.raise_for_status()
    payload = ForecastPayload.model_validate(resp.json())

    return ForecastResponse(
        latitude=coordinates.latitude if payload.latitude is None else payload.latitude,
        longitude=coordinates.longitude if payload.longitude is None else payload.longitude,
        timezone=payload.timezone or "auto",
        current=parse_current_weather(payload.current_weather, unit),
        daily=parse_daily_data(payload.daily or {}),
    )


def parse_current_weather(raw: dict | None, unit: UnitSystem) -> CurrentConditions | None:
    """Map the current_weather block onto CurrentConditions, or None when it is absent."""
    if not raw:
        return None
    block = CurrentWeatherPayload.model_validate(raw)
    return CurrentConditions(
        temperature_value=block.temperature,
        temperature_unit=unit.api_value,
        weather_code=block.weathercode,
        is_day=bool(block.is_day),
        wind_speed_kmh=block.windspeed,
        wind_direction_degrees=block.winddirection,
        observation_time=block.time,
    )


def parse_daily_data(raw: dict) -> list[DailyForecast]:
    """Parse Open-Meteo column-oriented daily data into row-oriented DailyForecast objects."""
    block = DailyPayload.model_validate(raw)

    result = []
    for i, d in enumerate(block.time):
        result.append(
            DailyForecast(
                date=d,
                weather_code=_get_at(block.weathercode, i),
                temp_max=_get_at(block.temperature_2m_max, i),
                temp_min=_get_at(block.temperature_2m_min, i),
                sunrise=_get_at(block.sunrise, i),
                sunset=_get_at(block.sunset, i),
            )
        )
    return result


def format_location_label(result: GeocodingResult) -> str:
    """Build "place, region, country", skipping a region that repeats the place name."""
    parts = [result.name]
    if result.admin1 and result.admin1 != result.name:
        parts.append(result.admin1)
    if result.country:
        parts.append(result.country)
    return LABEL_SEPARATOR.join(p for p in parts if p)


def _first_result(data) -> GeocodingResult | None:
    results = GeocodingResponse.model_validate(data).results
    if not results:
        return None
    return results[0]


def _get_at(column: list, index: int):
    """Safely get value at index from a column, returning None past its end."""
    if index >= len(column):
        return None
    return column[index]
