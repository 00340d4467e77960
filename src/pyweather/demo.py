"""Client harness that walks the weather API end to end."""

from __future__ import annotations

import logging
import random

from pyweather._constants import DEFAULT_CITY, DEMO_MAX_TEMP, DEMO_MIN_TEMP
from pyweather.client import WeatherClient
from pyweather.exceptions import WeatherError
from pyweather.models.weather import Weather

_logger = logging.getLogger(__name__)


def random_temperature(rng: random.Random | None = None) -> float:
    """Return a temperature in the demo range."""
    source = rng if rng is not None else random
    return source.uniform(DEMO_MIN_TEMP, DEMO_MAX_TEMP)


async def run_demo(
    client: WeatherClient,
    city: str = DEFAULT_CITY,
    *,
    rng: random.Random | None = None,
) -> Weather:
    """Read, update, and re-read the weather for *city*.

    Returns the record read back after the update.

    Raises
    ------
    WeatherError
        If the server fails a request or the update is not visible
        afterwards.
    """
    _logger.info("=== Testing Weather API ===")

    _logger.info("Getting weather info for %s", city)
    weather = await client.get_weather(city)
    _logger.info("Weather data for %s: %s", city, weather)

    temperature = random_temperature(rng)
    _logger.info("Updating weather data for %s to %.2f", city, temperature)
    updated = await client.update_weather(city, temperature)
    _logger.info("Weather data updated: %s", updated)

    _logger.info("Getting updated weather data for %s", city)
    weather = await client.get_weather(city)
    if weather is None:
        raise WeatherError(f"Weather data does not exist after update: city {city}")

    _logger.info("Weather data: %s", weather)
    _logger.info("Testing finished successfully")
    return weather
