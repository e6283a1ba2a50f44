# ABOUTME: Dependency container for the resolver and coordinator using Pydantic BaseModel.
# ABOUTME: Holds the httpx.AsyncClient and settings used to call the weather APIs.

import httpx
from pydantic import BaseModel, ConfigDict, Field

from weather_now.config import Settings


class WeatherDeps(BaseModel):
    """Dependencies shared by the location resolver and the fetch coordinator."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    http_client: httpx.AsyncClient
    settings: Settings = Field(default_factory=Settings)


def create_http_client() -> httpx.AsyncClient:
    """Create a plain httpx client.

    Requests are best-effort: no retry transport, and httpx's default timeout applies.
    """
    return httpx.AsyncClient(headers={"accept": "application/json"})
