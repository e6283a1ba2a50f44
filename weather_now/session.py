# ABOUTME: Presentation-facing entry points: search, use current location, and unit toggle.
# ABOUTME: Composes the location resolver, the geolocation wait, and the fetch coordinator.

import logging

from weather_now.coordinator import MetaListener, WeatherFetchCoordinator
from weather_now.deps import WeatherDeps
from weather_now.errors import InputInvalid, LocationUnavailable, WeatherError
from weather_now.geolocation import Geolocator, locate
from weather_now.models import SessionState, UnitSystem, WeatherMeta
from weather_now.resolver import LocationResolver

logger = logging.getLogger(__name__)

LIVE_LOCATION_LABEL = "Live location"


class WeatherSession:
    """One widget session.

    Operations never raise for service failures; the outcome is read from ``state``.
    Only ``search_by_name`` raises, with InputInvalid, for blank text.
    """

    def __init__(self, deps: WeatherDeps, on_meta: MetaListener | None = None):
        self.deps = deps
        self.resolver = LocationResolver(deps)
        self.coordinator = WeatherFetchCoordinator(deps, on_meta=on_meta)

    @property
    def state(self) -> SessionState:
        return self.coordinator.state

    @property
    def meta(self) -> WeatherMeta | None:
        return self.coordinator.last_meta

    @property
    def unit(self) -> UnitSystem:
        return self.coordinator.state.unit

    async def search_by_name(self, text: str) -> None:
        query = text.strip()
        if not query:
            raise InputInvalid()

        self.coordinator.begin_lookup()
        try:
            location = await self.resolver.forward_lookup(query)
        except WeatherError as e:
            self.coordinator.fail(e)
            return
        await self.coordinator.fetch(location.coordinates, self.unit, label=location.label)
        self.coordinator.end_lookup()

    async def use_current_location(self, geolocator: Geolocator) -> None:
        try:
            coordinates = await locate(geolocator, timeout=self.deps.settings.geolocation_timeout)
        except LocationUnavailable as e:
            self.coordinator.fail(e)
            return

        label = await self.resolver.reverse_lookup(coordinates) or LIVE_LOCATION_LABEL
        await self.coordinator.fetch(coordinates, self.unit, label=label)

    async def set_unit(self, unit: UnitSystem) -> None:
        """Switch units and re-fetch the shown (or still loading) place, keeping its name."""
        self.coordinator.select_unit(unit)
        coordinates = self.coordinator.target_coordinates
        if coordinates is None:
            logger.debug("Unit set to %s with no location yet; nothing to fetch", unit.value)
            return
        await self.coordinator.fetch(coordinates, unit)
