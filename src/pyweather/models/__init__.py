"""Data models for the weather API."""

from pyweather.models._base import WeatherBaseModel
from pyweather.models.weather import Weather, WeatherUpdate

__all__ = [
    "Weather",
    "WeatherBaseModel",
    "WeatherUpdate",
]
