# ABOUTME: Contract tests for Pydantic models used for locations, forecasts, and session state.
# ABOUTME: Validates value semantics, immutability, and defaults.

from datetime import date

import pytest
from pydantic import ValidationError

from weather_now.models import (
    Coordinates,
    CurrentConditions,
    DailyForecast,
    FetchKey,
    FetchPhase,
    SessionState,
    UnitSystem,
)


class TestUnitSystem:
    def test_maps_to_api_unit_strings(self):
        """UnitSystem translates to the Open-Meteo temperature_unit values.

        Implementation: Reads api_value for both members.
        Passing implies: metric requests Celsius and imperial requests Fahrenheit.
        """
        assert UnitSystem.METRIC.api_value == "celsius"
        assert UnitSystem.IMPERIAL.api_value == "fahrenheit"

    def test_parses_from_string(self):
        assert UnitSystem("imperial") is UnitSystem.IMPERIAL


class TestCoordinates:
    def test_is_immutable(self):
        """Coordinates cannot be changed in place.

        Implementation: Attempts to assign latitude on a frozen model.
        Passing implies: A new location always means a new Coordinates value.
        """
        coords = Coordinates(latitude=13.08, longitude=80.27)
        with pytest.raises(ValidationError):
            coords.latitude = 0.0


class TestFetchKey:
    def test_equal_by_value(self):
        """FetchKeys built from equal inputs compare equal.

        Implementation: Builds two keys from separate Coordinates instances.
        Passing implies: Deduplication compares values, not object identity.
        """
        a = FetchKey.for_request(Coordinates(latitude=13.08, longitude=80.27), UnitSystem.METRIC)
        b = FetchKey.for_request(Coordinates(latitude=13.08, longitude=80.27), UnitSystem.METRIC)
        assert a == b
        assert a is not b

    def test_unit_is_part_of_identity(self):
        coords = Coordinates(latitude=13.08, longitude=80.27)
        assert FetchKey.for_request(coords, UnitSystem.METRIC) != FetchKey.for_request(coords, UnitSystem.IMPERIAL)


class TestCurrentConditions:
    def test_wind_direction_is_optional(self):
        conditions = CurrentConditions(
            temperature_value=20.0,
            temperature_unit="celsius",
            weather_code=0,
            is_day=True,
            wind_speed_kmh=5.0,
            observation_time="2025-05-01T10:00",
        )
        assert conditions.wind_direction_degrees is None


class TestDailyForecast:
    def test_optional_fields_default_to_none(self):
        """DailyForecast only requires the date.

        Implementation: Constructs DailyForecast with only the date.
        Passing implies: All optional fields default to None.
        """
        day = DailyForecast(date=date(2025, 6, 1))
        assert day.temp_max is None
        assert day.sunrise is None
        assert day.weather_code is None


class TestSessionState:
    def test_starts_idle_and_empty(self):
        """A fresh SessionState is idle with nothing to display.

        Implementation: Constructs SessionState with defaults.
        Passing implies: The pre-first-fetch state has no data, no error, and no loading flag.
        """
        state = SessionState()
        assert state.phase is FetchPhase.IDLE
        assert state.conditions is None
        assert state.daily_forecast is None
        assert state.display_name == ""
        assert state.error == ""
        assert state.loading is False

    def test_model_copy_produces_new_snapshot(self):
        state = SessionState()
        loading = state.model_copy(update={"loading": True})
        assert loading.loading is True
        assert state.loading is False
