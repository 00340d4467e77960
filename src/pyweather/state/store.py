"""Concurrent in-memory weather store.

This is the only component that touches the city map.  Records are
frozen models, so readers get the stored instance itself and an update
always swaps in a new record rather than editing the old one.
"""

from __future__ import annotations

import logging

from pyweather.models.weather import Weather
from pyweather.state.lock import ReadWriteLock

_logger = logging.getLogger(__name__)


class WeatherStore:
    """Thread-safe mapping from city name to its latest :class:`Weather`.

    One store-wide :class:`ReadWriteLock` guards the map: lookups run in
    parallel, an upsert excludes every other call until it completes.
    The store lives as long as the process and never evicts.
    """

    def __init__(self) -> None:
        self._lock = ReadWriteLock()
        self._weathers: dict[str, Weather] = {}

    def get(self, city: str) -> Weather | None:
        """Return the record for *city*, or ``None`` when it was never written."""
        with self._lock.read_locked():
            return self._weathers.get(city)

    def put(self, weather: Weather) -> None:
        """Insert or replace the record keyed by ``weather.city``."""
        with self._lock.write_locked():
            self._weathers[weather.city] = weather
        _logger.debug("Stored weather for %s: %.2f", weather.city, weather.temperature)

    def __contains__(self, city: object) -> bool:
        with self._lock.read_locked():
            return city in self._weathers

    def __len__(self) -> int:
        with self._lock.read_locked():
            return len(self._weathers)
