"""Weather record and update payload models."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from pyweather.models._base import WeatherBaseModel


class Weather(WeatherBaseModel):
    """Weather reading for a single city.

    Parameters
    ----------
    city : str
        City name, the store key.
    temperature : float
        Temperature in Celsius.
    updated_at : datetime
        Server time of the last update.
    """

    city: str
    temperature: float = Field(allow_inf_nan=False, strict=True)
    updated_at: datetime


class WeatherUpdate(WeatherBaseModel):
    """Body of an update request.

    ``city`` is accepted for symmetry with :class:`Weather` but the path
    parameter always wins.  Any ``updated_at`` sent by the caller is
    dropped.
    """

    city: str | None = None
    temperature: float = Field(default=0.0, allow_inf_nan=False, strict=True)

    def to_record(self, city: str, updated_at: datetime) -> Weather:
        """Build the record to persist under *city*."""
        return Weather(city=city, temperature=self.temperature, updated_at=updated_at)
