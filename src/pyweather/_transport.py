"""JSON-over-HTTP transport for the weather API client."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any, Protocol

import aiohttp

from pyweather._constants import CONTENT_TYPE_JSON
from pyweather.exceptions import WeatherDecodeError, WeatherTransportError

_logger = logging.getLogger(__name__)


class Transport(Protocol):
    """Structural transport interface used by :class:`WeatherClient`.

    Having a protocol here makes it easy to pass test doubles while
    keeping the production implementation (`HttpTransport`) concrete.
    """

    async def request_json(
        self,
        method: str,
        endpoint: str,
        payload: Mapping[str, Any] | None = None,
    ) -> dict[str, Any]:
        ...


class HttpTransport:
    """Send JSON requests and decode JSON object responses."""

    def __init__(self, base_url: str, http_session: aiohttp.ClientSession) -> None:
        self._base_url = base_url.rstrip("/")
        self._http = http_session

    async def request_json(
        self,
        method: str,
        endpoint: str,
        payload: Mapping[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Send *payload* to *endpoint* and return the decoded JSON object.

        Raises
        ------
        WeatherTransportError
            On network failure, timeout, or any status other than 200.
            ``status_code`` is set when the server answered.
        WeatherDecodeError
            When a 200 response body is not a JSON object.
        """
        url = f"{self._base_url}{endpoint}"
        headers: dict[str, str] = {"accept": CONTENT_TYPE_JSON}
        data: str | None = None
        if payload is not None:
            data = json.dumps(payload, separators=(",", ":"))
            headers["content-type"] = CONTENT_TYPE_JSON

        _logger.debug("%s %s", method, url)

        try:
            async with self._http.request(method, url, data=data, headers=headers) as resp:
                text = await resp.text()
                if resp.status != 200:
                    raise WeatherTransportError(
                        f"HTTP {resp.status} from {method} {endpoint}: {text.strip()[:200]}",
                        status_code=resp.status,
                        endpoint=endpoint,
                    )
        except WeatherTransportError:
            raise
        except aiohttp.ClientError as exc:
            raise WeatherTransportError(
                f"Request to {endpoint} failed: {exc}",
                endpoint=endpoint,
            ) from exc
        except TimeoutError as exc:
            raise WeatherTransportError(
                f"Request to {endpoint} timed out",
                endpoint=endpoint,
            ) from exc

        try:
            body = json.loads(text)
        except json.JSONDecodeError as exc:
            raise WeatherDecodeError(
                f"Invalid JSON from {endpoint}: {text[:200]}",
                status_code=200,
                endpoint=endpoint,
            ) from exc

        if not isinstance(body, dict):
            raise WeatherDecodeError(
                f"Expected a JSON object from {endpoint}, got {type(body).__name__}",
                status_code=200,
                endpoint=endpoint,
            )
        return body
