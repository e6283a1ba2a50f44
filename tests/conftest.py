# ABOUTME: Shared test fixtures for the weather widget test suite.
# ABOUTME: Provides canned Open-Meteo payloads and mock HTTP client builders.

from unittest.mock import AsyncMock

import httpx
import pytest

from weather_now.config import Settings
from weather_now.deps import WeatherDeps

CHENNAI_GEOCODE = {
    "results": [
        {
            "latitude": 13.08784,
            "longitude": 80.27847,
            "name": "Chennai",
            "admin1": "Tamil Nadu",
            "country": "India",
        }
    ]
}


def forecast_payload(temperature: float = 31.4, weathercode: int = 2, is_day: int = 1) -> dict:
    """A minimal Open-Meteo forecast body with current weather and seven days."""
    days = [f"2025-05-{d:02d}" for d in range(1, 8)]
    return {
        "latitude": 13.08,
        "longitude": 80.27,
        "timezone": "Asia/Kolkata",
        "current_weather": {
            "temperature": temperature,
            "weathercode": weathercode,
            "is_day": is_day,
            "windspeed": 14.2,
            "winddirection": 135.0,
            "time": "2025-05-01T10:00",
        },
        "daily": {
            "time": days,
            "weathercode": [0, 1, 2, 3, 45, 61, 95],
            "temperature_2m_max": [34.0, 34.5, 35.0, 35.5, 36.0, 36.5, 37.0],
            "temperature_2m_min": [27.0, 27.1, 27.2, 27.3, 27.4, 27.5, 27.6],
            "sunrise": [f"{d}T05:50" for d in days],
            "sunset": [f"{d}T18:30" for d in days],
        },
    }


def json_response(json_data: dict, status_code: int = 200) -> httpx.Response:
    return httpx.Response(status_code=status_code, json=json_data, request=httpx.Request("GET", "https://test"))


def mock_client(*responses) -> AsyncMock:
    """Mock httpx.AsyncClient whose get() returns (or raises) the given items in order."""
    mock = AsyncMock(spec=httpx.AsyncClient)
    mock.get.side_effect = list(responses)
    return mock


def make_deps(client, **settings) -> WeatherDeps:
    return WeatherDeps(http_client=client, settings=Settings(**settings))


@pytest.fixture
def settings() -> Settings:
    return Settings()


def sequenced_client(*steps) -> AsyncMock:
    """Mock httpx.AsyncClient whose get() replies in order.

    A step may be a response, an exception to raise, or an (asyncio.Event, step)
    pair that waits for the event before replying.
    """
    queue = iter(steps)
    mock = AsyncMock(spec=httpx.AsyncClient)

    async def fake_get(*args, **kwargs):
        step = next(queue)
        if isinstance(step, tuple):
            gate, step = step
            await gate.wait()
        if isinstance(step, Exception):
            raise step
        return step

    mock.get.side_effect = fake_get
    return mock
