"""Request handlers for the weather endpoints.

Each factory closes over the :class:`WeatherStore` it is given, so the
handlers carry no module-level state and can be mounted on any app.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import UTC, datetime

from aiohttp import web
from aiohttp.typedefs import Handler
from pydantic import ValidationError

from pyweather._constants import CONTENT_TYPE_JSON, URL_PARAM_CITY
from pyweather.models.weather import Weather, WeatherUpdate
from pyweather.state.store import WeatherStore

_logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(UTC)


def _city_param(request: web.Request) -> str:
    city = request.match_info.get(URL_PARAM_CITY, "")
    if not city:
        raise web.HTTPBadRequest(text="City parameter is required")
    return city


def _json_response(weather: Weather) -> web.Response:
    return web.Response(text=weather.model_dump_json(), content_type=CONTENT_TYPE_JSON)


def get_weather_handler(store: WeatherStore) -> Handler:
    """Build the ``GET /api/v1/weather/{city}`` handler."""

    async def handle_get_weather(request: web.Request) -> web.StreamResponse:
        city = _city_param(request)

        weather = store.get(city)
        if weather is None:
            _logger.debug("No weather stored for %s", city)
            raise web.HTTPNotFound(text=f"Weather for city '{city}' not found")

        return _json_response(weather)

    return handle_get_weather


def update_weather_handler(
    store: WeatherStore,
    *,
    clock: Callable[[], datetime] = _utcnow,
) -> Handler:
    """Build the ``PUT /api/v1/weather/{city}`` handler.

    The path parameter overrides any ``city`` in the body and ``updated_at``
    is always stamped from *clock*.
    """

    async def handle_update_weather(request: web.Request) -> web.StreamResponse:
        city = _city_param(request)

        body = await request.read()
        try:
            update = WeatherUpdate.model_validate_json(body)
        except ValidationError as exc:
            _logger.debug("Rejected update for %s: %s", city, exc.errors(include_url=False))
            raise web.HTTPBadRequest(text="Invalid request body") from None

        weather = update.to_record(city, clock())
        store.put(weather)

        return _json_response(weather)

    return handle_update_weather
