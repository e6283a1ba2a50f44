# ABOUTME: Owns the forecast fetch lifecycle and the session state it publishes.
# ABOUTME: Suppresses redundant requests by FetchKey and discards superseded responses.

import logging
from collections.abc import Callable

import httpx

from weather_now.deps import WeatherDeps
from weather_now.errors import IncompleteResponse, ServiceUnavailable, WeatherError
from weather_now.models import (
    Coordinates,
    FetchKey,
    FetchPhase,
    ForecastResponse,
    ResolvedLocation,
    SessionState,
    UnitSystem,
    WeatherMeta,
)
from weather_now.weather_service import get_forecast

logger = logging.getLogger(__name__)

FETCH_FAILED_MESSAGE = "Failed to fetch weather. Please try again."

StateListener = Callable[[SessionState], None]
MetaListener = Callable[[WeatherMeta], None]


class WeatherFetchCoordinator:
    """State machine for forecast retrieval: idle -> loading -> ready | failed.

    All transitions go through ``_transition``, which replaces the immutable
    SessionState snapshot and notifies subscribers. Only one fetch is meaningful
    at a time: every non-redundant ``fetch`` takes a new sequence number, and a
    completion that is not the latest issued is dropped without touching state.
    """

    def __init__(self, deps: WeatherDeps, on_meta: MetaListener | None = None):
        self.deps = deps
        self.on_meta = on_meta
        self.last_meta: WeatherMeta | None = None
        self._state = SessionState(unit=deps.settings.default_unit)
        self._listeners: list[StateListener] = []
        self._completed_key: FetchKey | None = None
        self._pending_key: FetchKey | None = None
        self._pending_coordinates: Coordinates | None = None
        self._pending_label: str | None = None
        self._sequence = 0

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def completed_key(self) -> FetchKey | None:
        return self._completed_key

    @property
    def in_flight(self) -> bool:
        return self._pending_key is not None

    @property
    def target_coordinates(self) -> Coordinates | None:
        """Coordinates of the fetch in flight, else of the last successful fetch."""
        if self._pending_coordinates is not None:
            return self._pending_coordinates
        return self._state.coordinates

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Register a state listener; returns a callable that removes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def is_redundant(self, key: FetchKey) -> bool:
        """True when issuing a request for ``key`` would not change what ends up displayed."""
        if self._pending_key is not None:
            return key == self._pending_key
        return key == self._completed_key

    async def fetch(self, coordinates: Coordinates, unit: UnitSystem, label: str | None = None) -> None:
        """Fetch conditions and forecast for ``coordinates`` and publish the outcome.

        The loading transition happens before the first await, so subscribers see it
        immediately. Failures keep previously fetched data and set ``error``; the
        published coordinates always belong to the last successful fetch.
        An unlabelled fetch that supersedes one for the same coordinates inherits its label.
        """
        key = FetchKey.for_request(coordinates, unit)
        if self.is_redundant(key):
            logger.debug("Skipping redundant fetch for %s", key)
            return
        if label is None and coordinates == self._pending_coordinates:
            label = self._pending_label

        self._sequence += 1
        sequence = self._sequence
        self._pending_key = key
        self._pending_coordinates = coordinates
        self._pending_label = label
        self._transition(phase=FetchPhase.LOADING, loading=True, error="", unit=unit)

        try:
            response = await self._request_forecast(coordinates, unit)
        except WeatherError as e:
            if self._is_superseded(sequence):
                logger.debug("Discarding failure of superseded fetch %d for %s", sequence, key)
                return
            logger.warning("Forecast fetch failed for %s: %s", key, e.__cause__ or e)
            self._clear_pending()
            self._transition(phase=FetchPhase.FAILED, loading=False, error=e.user_message)
            return

        if self._is_superseded(sequence):
            logger.debug("Discarding superseded fetch %d for %s", sequence, key)
            return

        self._clear_pending()
        self._completed_key = key
        changes = {
            "phase": FetchPhase.READY,
            "loading": False,
            "error": "",
            "coordinates": coordinates,
            "fetch_key": key,
            "conditions": response.current,
            "daily_forecast": response.daily,
        }
        if label:
            changes["display_name"] = label
            changes["location"] = ResolvedLocation(coordinates=coordinates, label=label)
        self._transition(**changes)
        self._emit_meta(response)

    def select_unit(self, unit: UnitSystem) -> None:
        """Record the unit chosen for the session without fetching."""
        if unit != self._state.unit:
            self._transition(unit=unit)

    def begin_lookup(self) -> None:
        """Enter loading while a location is being resolved ahead of a fetch."""
        self._transition(phase=FetchPhase.LOADING, loading=True, error="")

    def end_lookup(self) -> None:
        """Leave loading after a lookup, unless a fetch is still outstanding."""
        if self._pending_key is None and self._state.loading:
            phase = FetchPhase.READY if self._state.conditions is not None else FetchPhase.IDLE
            self._transition(phase=phase, loading=False)

    def fail(self, error: WeatherError) -> None:
        """Surface a lookup or geolocation failure; fetched data is kept."""
        logger.warning("Surfacing error: %s", error.user_message)
        self._transition(phase=FetchPhase.FAILED, loading=self.in_flight, error=error.user_message)

    async def _request_forecast(self, coordinates: Coordinates, unit: UnitSystem) -> ForecastResponse:
        try:
            response = await get_forecast(self.deps.http_client, self.deps.settings, coordinates, unit)
        except (httpx.HTTPError, ValueError) as e:
            raise ServiceUnavailable(FETCH_FAILED_MESSAGE) from e
        if response.current is None:
            raise IncompleteResponse(FETCH_FAILED_MESSAGE)
        return response

    def _clear_pending(self) -> None:
        self._pending_key = None
        self._pending_coordinates = None
        self._pending_label = None

    def _is_superseded(self, sequence: int) -> bool:
        return sequence != self._sequence

    def _emit_meta(self, response: ForecastResponse) -> None:
        current = response.current
        self.last_meta = WeatherMeta(code=current.weather_code, is_day=int(current.is_day))
        if self.on_meta is not None:
            self.on_meta(self.last_meta)

    def _transition(self, **changes) -> None:
        self._state = self._state.model_copy(update=changes)
        for listener in list(self._listeners):
            listener(self._state)
