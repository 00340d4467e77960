"""Base model for pyweather wire payloads.

Every payload model inherits from :class:`WeatherBaseModel` which
provides:

* ``frozen=True`` so a decoded record can be shared between the store
  and concurrent readers without defensive copies.
* ``extra="ignore"`` so unknown keys in request and response bodies are
  dropped instead of rejected.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class WeatherBaseModel(BaseModel):
    """Base for pyweather payload models."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
    )
