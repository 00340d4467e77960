"""High-level async client for the weather API."""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Any
from urllib.parse import quote

import aiohttp
from pydantic import ValidationError

from pyweather._constants import WEATHER_PATH
from pyweather._transport import HttpTransport, Transport
from pyweather.config import WeatherConfig
from pyweather.exceptions import WeatherDecodeError, WeatherError, WeatherTransportError
from pyweather.models.weather import Weather, WeatherUpdate

_logger = logging.getLogger(__name__)


def _weather_endpoint(city: str) -> str:
    return WEATHER_PATH.format(city=quote(city, safe=""))


def _parse_weather(body: dict[str, Any], endpoint: str) -> Weather:
    try:
        return Weather.model_validate(body)
    except ValidationError as exc:
        raise WeatherDecodeError(
            f"Invalid weather payload from {endpoint}: {exc.error_count()} error(s)",
            status_code=HTTPStatus.OK,
            endpoint=endpoint,
        ) from exc


class WeatherClient:
    """Async client for the weather API.

    Usage::

        async with WeatherClient(config) as client:
            weather = await client.get_weather("Moscow")
            updated = await client.update_weather("Moscow", 21.5)

    A missing city is a normal outcome on reads (``None``) but an error
    on writes.
    """

    def __init__(
        self,
        config: WeatherConfig | None = None,
        *,
        session: aiohttp.ClientSession | None = None,
        transport: Transport | None = None,
    ) -> None:
        self._config = config if config is not None else WeatherConfig()
        self._external_session = session is not None
        self._http_session = session
        self._transport: Transport | None = transport

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> WeatherClient:
        if self._transport is None:
            if self._http_session is None:
                self._http_session = aiohttp.ClientSession(
                    timeout=aiohttp.ClientTimeout(total=self._config.request_timeout),
                )
            self._transport = HttpTransport(self._config.resolved_base_url, self._http_session)
        return self

    async def __aexit__(self, *exc: Any) -> None:
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None
            self._transport = None

    def _require_transport(self) -> Transport:
        if self._transport is None:
            raise WeatherError("Client not initialized. Use 'async with WeatherClient(...) as client:'")
        return self._transport

    # ------------------------------------------------------------------
    # API
    # ------------------------------------------------------------------

    async def get_weather(self, city: str) -> Weather | None:
        """Fetch the weather for *city*.

        Returns ``None`` when the server has no record for the city.
        """
        transport = self._require_transport()
        endpoint = _weather_endpoint(city)
        try:
            body = await transport.request_json("GET", endpoint)
        except WeatherTransportError as exc:
            if exc.status_code == HTTPStatus.NOT_FOUND:
                _logger.debug("No weather on server for %s", city)
                return None
            raise
        return _parse_weather(body, endpoint)

    async def update_weather(self, city: str, temperature: float) -> Weather:
        """Replace the weather for *city* and return the stored record.

        Any non-200 answer, including 404, raises
        :class:`WeatherTransportError`.
        """
        transport = self._require_transport()
        endpoint = _weather_endpoint(city)
        payload = WeatherUpdate(temperature=temperature).model_dump(mode="json", exclude_none=True)
        body = await transport.request_json("PUT", endpoint, payload)
        return _parse_weather(body, endpoint)
