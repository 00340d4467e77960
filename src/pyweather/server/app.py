"""Application wiring and process lifecycle for the weather server."""

from __future__ import annotations

import logging

from aiohttp import web

from pyweather._constants import API_PREFIX, WEATHER_PATH
from pyweather.config import WeatherConfig
from pyweather.server.handlers import get_weather_handler, update_weather_handler
from pyweather.server.middleware import recovery_middleware, timeout_middleware
from pyweather.state.store import WeatherStore

_logger = logging.getLogger(__name__)

STORE_KEY = web.AppKey("store", WeatherStore)
CONFIG_KEY = web.AppKey("config", WeatherConfig)


async def _on_startup(app: web.Application) -> None:
    config = app[CONFIG_KEY]
    _logger.info("HTTP server started on %s:%s", config.host, config.port)


async def _on_shutdown(app: web.Application) -> None:
    _logger.info("Shutting server down...")


async def _on_cleanup(app: web.Application) -> None:
    _logger.info("Server stopped (%d cities in memory discarded)", len(app[STORE_KEY]))


def create_app(
    store: WeatherStore | None = None,
    *,
    config: WeatherConfig | None = None,
) -> web.Application:
    """Build the aiohttp application serving the weather API.

    Parameters
    ----------
    store : WeatherStore or None
        Store shared by all handlers.  A fresh empty store is created when
        omitted.
    config : WeatherConfig or None
        Server settings; defaults are used when omitted.
    """
    if config is None:
        config = WeatherConfig()
    if store is None:
        store = WeatherStore()

    app = web.Application(
        middlewares=[
            recovery_middleware,
            timeout_middleware(config.handler_timeout),
        ]
    )
    app[STORE_KEY] = store
    app[CONFIG_KEY] = config

    get_handler = get_weather_handler(store)
    update_handler = update_weather_handler(store)

    app.router.add_get(WEATHER_PATH, get_handler)
    app.router.add_put(WEATHER_PATH, update_handler)
    # Empty city segment: answer 400 from the handlers rather than a router 404.
    app.router.add_get(API_PREFIX + "/", get_handler)
    app.router.add_put(API_PREFIX + "/", update_handler)

    app.on_startup.append(_on_startup)
    app.on_shutdown.append(_on_shutdown)
    app.on_cleanup.append(_on_cleanup)
    return app


def run_server(config: WeatherConfig | None = None) -> None:
    """Serve until SIGINT/SIGTERM, then shut down gracefully."""
    if config is None:
        config = WeatherConfig.from_env()
    app = create_app(config=config)
    web.run_app(
        app,
        host=config.host,
        port=config.port,
        shutdown_timeout=config.shutdown_timeout,
        print=None,
    )
