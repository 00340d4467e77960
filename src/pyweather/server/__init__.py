"""HTTP server for the weather API."""

from pyweather.server.app import CONFIG_KEY, STORE_KEY, create_app, run_server
from pyweather.server.handlers import get_weather_handler, update_weather_handler

__all__ = [
    "CONFIG_KEY",
    "STORE_KEY",
    "create_app",
    "get_weather_handler",
    "run_server",
    "update_weather_handler",
]
