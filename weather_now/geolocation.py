# ABOUTME: Platform geolocation seam: a Geolocator protocol plus a bounded wait around it.
# ABOUTME: Denials and timeouts both become LocationUnavailable.

import asyncio
import logging
from typing import Protocol

from weather_now.errors import LocationUnavailable
from weather_now.models import Coordinates

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 8.0


class Geolocator(Protocol):
    async def current_position(self) -> Coordinates:
        """Return the device position, or raise LocationUnavailable when denied."""
        ...


class ReportedPosition:
    """Geolocator backed by a position (or a refusal) that a client already reported."""

    def __init__(self, coordinates: Coordinates | None = None, error: str | None = None):
        self.coordinates = coordinates
        self.error = error

    async def current_position(self) -> Coordinates:
        if self.coordinates is None:
            logger.info("Client reported no position: %s", self.error or "unknown reason")
            raise LocationUnavailable()
        return self.coordinates


async def locate(geolocator: Geolocator, timeout: float = DEFAULT_TIMEOUT) -> Coordinates:
    """Ask ``geolocator`` for a position, giving up after ``timeout`` seconds."""
    try:
        return await asyncio.wait_for(geolocator.current_position(), timeout=timeout)
    except asyncio.TimeoutError as e:
        logger.warning("Geolocation timed out after %.1fs", timeout)
        raise LocationUnavailable() from e
