"""Server and client configuration for pyweather."""

from __future__ import annotations

import dataclasses
import os
from collections.abc import Mapping
from typing import Any

from pyweather._constants import (
    DEFAULT_HANDLER_TIMEOUT,
    DEFAULT_HOST,
    DEFAULT_PORT,
    DEFAULT_REQUEST_TIMEOUT,
    DEFAULT_SHUTDOWN_TIMEOUT,
)
from pyweather.exceptions import WeatherConfigError


def _env_number(env: Mapping[str, str], key: str, cast: type[int] | type[float]) -> int | float | None:
    value = env.get(key)
    if value is None:
        return None
    try:
        return cast(value.strip())
    except ValueError as exc:
        raise WeatherConfigError(f"{key} must be a number, got {value!r}") from exc


@dataclasses.dataclass(frozen=True)
class WeatherConfig:
    """Configuration shared by the server and the client.

    Parameters
    ----------
    host : str
        Interface the server binds to.
    port : int
        TCP port the server listens on.
    base_url : str or None
        Server URL used by the client.  ``None`` derives it from
        ``host`` and ``port``.
    request_timeout : float
        Total client request timeout in seconds.
    handler_timeout : float
        Per-request timeout enforced by the server middleware.
    shutdown_timeout : float
        Seconds the server waits for in-flight requests on shutdown.
    """

    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    base_url: str | None = None
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    handler_timeout: float = DEFAULT_HANDLER_TIMEOUT
    shutdown_timeout: float = DEFAULT_SHUTDOWN_TIMEOUT

    @property
    def resolved_base_url(self) -> str:
        """Client base URL without a trailing slash."""
        if self.base_url:
            return self.base_url.rstrip("/")
        return f"http://{self.host}:{self.port}"

    @classmethod
    def from_env(cls, **overrides: Any) -> WeatherConfig:
        """Create configuration from ``WEATHER_*`` environment variables.

        Explicit keyword arguments override environment values.

        Raises
        ------
        WeatherConfigError
            If a numeric variable cannot be parsed.
        """
        env = os.environ
        config_kwargs: dict[str, Any] = {}

        host = env.get("WEATHER_HOST")
        if host is not None:
            config_kwargs["host"] = host
        base_url = env.get("WEATHER_BASE_URL")
        if base_url is not None:
            config_kwargs["base_url"] = base_url

        _ENV_NUMERIC_MAP: dict[str, tuple[str, type[int] | type[float]]] = {
            "WEATHER_PORT": ("port", int),
            "WEATHER_REQUEST_TIMEOUT": ("request_timeout", float),
            "WEATHER_HANDLER_TIMEOUT": ("handler_timeout", float),
            "WEATHER_SHUTDOWN_TIMEOUT": ("shutdown_timeout", float),
        }
        for env_key, (field_name, cast) in _ENV_NUMERIC_MAP.items():
            if field_name in overrides:
                continue
            value = _env_number(env, env_key, cast)
            if value is not None:
                config_kwargs[field_name] = value

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
