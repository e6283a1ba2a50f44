# ABOUTME: ASGI web entry point exposing the weather widget session as JSON endpoints.
# ABOUTME: Builds a Starlette app routing search, current-location, and unit-toggle requests to one WeatherSession.

import logging
from contextlib import asynccontextmanager

from pydantic import BaseModel, ValidationError, model_validator
from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Route

from weather_now.config import Settings, load_settings
from weather_now.deps import WeatherDeps, create_http_client
from weather_now.errors import InputInvalid
from weather_now.geolocation import ReportedPosition
from weather_now.models import Coordinates, UnitSystem
from weather_now.session import WeatherSession

logger = logging.getLogger(__name__)


class SearchRequest(BaseModel):
    query: str = ""


class LocationReport(BaseModel):
    """Position reported by the browser, or the reason it could not get one."""

    latitude: float | None = None
    longitude: float | None = None
    error: str | None = None

    @model_validator(mode="after")
    def _position_or_error(self) -> "LocationReport":
        if not self.error and (self.latitude is None or self.longitude is None):
            raise ValueError("latitude and longitude are required unless error is given")
        return self

    def to_geolocator(self) -> ReportedPosition:
        if self.error:
            return ReportedPosition(error=self.error)
        return ReportedPosition(Coordinates(latitude=self.latitude, longitude=self.longitude))


class UnitRequest(BaseModel):
    unit: UnitSystem


def snapshot(session: WeatherSession) -> dict:
    meta = session.meta
    return {
        "state": session.state.model_dump(mode="json"),
        "meta": meta.model_dump() if meta is not None else None,
    }


async def get_state(request: Request) -> JSONResponse:
    return JSONResponse(snapshot(request.app.state.session))


async def search(request: Request) -> JSONResponse:
    body = SearchRequest.model_validate_json(await request.body())
    session = request.app.state.session
    await session.search_by_name(body.query)
    return JSONResponse(snapshot(session))


async def report_location(request: Request) -> JSONResponse:
    body = LocationReport.model_validate_json(await request.body())
    session = request.app.state.session
    await session.use_current_location(body.to_geolocator())
    return JSONResponse(snapshot(session))


async def set_unit(request: Request) -> JSONResponse:
    body = UnitRequest.model_validate_json(await request.body())
    session = request.app.state.session
    await session.set_unit(body.unit)
    return JSONResponse(snapshot(session))


async def validation_error(request: Request, exc: ValidationError) -> JSONResponse:
    logger.info("Rejected %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse({"detail": exc.errors(include_url=False, include_context=False)}, status_code=422)


async def invalid_input(request: Request, exc: InputInvalid) -> JSONResponse:
    return JSONResponse({"detail": exc.user_message}, status_code=422)


def create_app(settings: Settings | None = None, http_client=None) -> Starlette:
    """Wire settings, HTTP client, and session into a Starlette app.

    The HTTP client is closed when the app shuts down.
    """
    settings = settings or load_settings()
    logging.basicConfig(level=settings.log_level)
    deps = WeatherDeps(http_client=http_client or create_http_client(), settings=settings)
    session = WeatherSession(deps)

    @asynccontextmanager
    async def lifespan(app: Starlette):
        logger.info("Weather widget started")
        yield
        await deps.http_client.aclose()
        logger.info("Weather widget stopped, HTTP client closed")

    app = Starlette(
        routes=[
            Route("/api/state", get_state, methods=["GET"]),
            Route("/api/search", search, methods=["POST"]),
            Route("/api/location", report_location, methods=["POST"]),
            Route("/api/unit", set_unit, methods=["POST"]),
        ],
        exception_handlers={ValidationError: validation_error, InputInvalid: invalid_input},
        lifespan=lifespan,
    )
    app.state.session = session
    return app


app = create_app()
