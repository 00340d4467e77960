"""State/store layer.

This package owns the only shared mutable state in the service: the
per-city weather map and the lock that guards it.
"""

from pyweather.state.lock import ReadWriteLock
from pyweather.state.store import WeatherStore

__all__ = ["ReadWriteLock", "WeatherStore"]
