"""Custom exception hierarchy for pyweather."""

from __future__ import annotations


class WeatherError(Exception):
    """Base exception for all pyweather errors."""


class WeatherConfigError(WeatherError):
    """Invalid or missing configuration."""


class WeatherTransportError(WeatherError):
    """HTTP-level failure (network, timeout, unexpected status)."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        endpoint: str = "",
    ) -> None:
        self.status_code = status_code
        self.endpoint = endpoint
        super().__init__(message)


class WeatherDecodeError(WeatherTransportError):
    """Response body is not valid JSON or not a weather object."""
