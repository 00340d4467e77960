"""pyweather - In-memory weather service with an async HTTP client."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pyweather")
except PackageNotFoundError:
    __version__ = "0+local"
from pyweather.client import WeatherClient
from pyweather.config import WeatherConfig
from pyweather.exceptions import (
    WeatherConfigError,
    WeatherDecodeError,
    WeatherError,
    WeatherTransportError,
)
from pyweather.models import Weather, WeatherUpdate
from pyweather.server import create_app, run_server
from pyweather.state import ReadWriteLock, WeatherStore

__all__ = [
    "__version__",
    "ReadWriteLock",
    "Weather",
    "WeatherClient",
    "WeatherConfig",
    "WeatherConfigError",
    "WeatherDecodeError",
    "WeatherError",
    "WeatherStore",
    "WeatherTransportError",
    "WeatherUpdate",
    "create_app",
    "run_server",
]
