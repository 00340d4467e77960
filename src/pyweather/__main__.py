"""Command-line entry point.

Usage
-----
::

    python -m pyweather serve --port 8080
    python -m pyweather demo --city Moscow

Settings not given on the command line come from ``WEATHER_*``
environment variables (see :meth:`WeatherConfig.from_env`).
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from typing import Any

from pyweather._constants import DEFAULT_CITY
from pyweather.client import WeatherClient
from pyweather.config import WeatherConfig
from pyweather.demo import run_demo
from pyweather.exceptions import WeatherError
from pyweather.server.app import run_server

_logger = logging.getLogger("pyweather")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="pyweather", description="In-memory weather service")
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: INFO)",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    serve = sub.add_parser("serve", help="Run the HTTP server")
    serve.add_argument("--host", help="Bind address")
    serve.add_argument("--port", type=int, help="Listen port")

    demo = sub.add_parser("demo", help="Exercise a running server")
    demo.add_argument("--base-url", help="Server URL (default: derived from host/port)")
    demo.add_argument("--city", default=DEFAULT_CITY, help=f"City to read and update (default: {DEFAULT_CITY})")
    return parser


def _overrides(args: argparse.Namespace, *names: str) -> dict[str, Any]:
    return {name: getattr(args, name) for name in names if getattr(args, name) is not None}


async def _demo(config: WeatherConfig, city: str) -> None:
    async with WeatherClient(config) as client:
        await run_demo(client, city)


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        if args.command == "serve":
            run_server(WeatherConfig.from_env(**_overrides(args, "host", "port")))
        else:
            asyncio.run(_demo(WeatherConfig.from_env(**_overrides(args, "base_url")), args.city))
    except WeatherError as exc:
        _logger.error("%s", exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
