# ABOUTME: Turns a place name or raw coordinates into a labelled location.
# ABOUTME: Forward lookups fail loudly; reverse lookups degrade to None.

import logging

import httpx

from weather_now.deps import WeatherDeps
from weather_now.errors import NotFound, ServiceUnavailable
from weather_now.models import Coordinates, ResolvedLocation
from weather_now.weather_service import format_location_label, geocode, reverse_geocode

logger = logging.getLogger(__name__)


class LocationResolver:
    """Resolves user or platform input into a ResolvedLocation."""

    def __init__(self, deps: WeatherDeps):
        self.deps = deps

    async def forward_lookup(self, name: str) -> ResolvedLocation:
        """Resolve a place name to its first geocoding match.

        Raises:
            NotFound: the geocoding service returned no results.
            ServiceUnavailable: the request failed or returned a non-success status.
        """
        try:
            result = await geocode(self.deps.http_client, self.deps.settings, name)
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("Geocoding failed for %r: %s", name, e)
            raise ServiceUnavailable() from e
        if result is None:
            raise NotFound()

        return ResolvedLocation(
            coordinates=Coordinates(latitude=result.latitude, longitude=result.longitude),
            label=format_location_label(result),
        )

    async def reverse_lookup(self, coordinates: Coordinates) -> str | None:
        """Best-effort label for a coordinate pair; None on any failure or empty result."""
        try:
            result = await reverse_geocode(self.deps.http_client, self.deps.settings, coordinates)
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("Reverse geocoding failed for %s: %s", coordinates, e)
            return None
        if result is None:
            return None
        return format_location_label(result)
