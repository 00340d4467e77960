from __future__ import annotations

import asyncio
import contextlib
from collections.abc import AsyncIterator
from datetime import UTC, datetime

import pytest
from aiohttp import test_utils, web

from pyweather.config import WeatherConfig
from pyweather.models.weather import Weather
from pyweather.server.app import CONFIG_KEY, STORE_KEY, create_app
from pyweather.server.handlers import get_weather_handler, update_weather_handler
from pyweather.server.middleware import recovery_middleware, timeout_middleware
from pyweather.state.store import WeatherStore

_FIXED = datetime(2026, 1, 1, 12, 0, tzinfo=UTC)


@contextlib.asynccontextmanager
async def _serve(app: web.Application) -> AsyncIterator[test_utils.TestClient]:
    async with test_utils.TestClient(test_utils.TestServer(app)) as client:
        yield client


def _fixed_clock_app(store: WeatherStore) -> web.Application:
    app = web.Application()
    app.router.add_get("/api/v1/weather/{city}", get_weather_handler(store))
    app.router.add_put("/api/v1/weather/{city}", update_weather_handler(store, clock=lambda: _FIXED))
    return app


# ------------------------------------------------------------------
# End-to-end scenario
# ------------------------------------------------------------------


@pytest.mark.asyncio
async def test_get_update_get_scenario() -> None:
    store = WeatherStore()
    async with _serve(create_app(store)) as client:
        resp = await client.get("/api/v1/weather/Moscow")
        assert resp.status == 404

        before = datetime.now(UTC)
        resp = await client.put("/api/v1/weather/Moscow", json={"temperature": 21.5})
        assert resp.status == 200
        assert resp.content_type == "application/json"
        updated = Weather.model_validate(await resp.json())
        assert updated.city == "Moscow"
        assert updated.temperature == 21.5
        assert updated.updated_at >= before

        resp = await client.get("/api/v1/weather/Moscow")
        assert resp.status == 200
        assert Weather.model_validate(await resp.json()) == updated

    assert store.get("Moscow") == updated


def test_create_app_exposes_store_and_config() -> None:
    store = WeatherStore()
    config = WeatherConfig(port=9999)
    app = create_app(store, config=config)
    assert app[STORE_KEY] is store
    assert app[CONFIG_KEY] is config


def test_create_app_keeps_an_empty_injected_store() -> None:
    store = WeatherStore()
    assert create_app(store)[STORE_KEY] is store


# ------------------------------------------------------------------
# Get handler
# ------------------------------------------------------------------


@pytest.mark.asyncio
async def test_get_unknown_city_is_404() -> None:
    async with _serve(create_app()) as client:
        resp = await client.get("/api/v1/weather/Atlantis")
        assert resp.status == 404
        assert "Atlantis" in await resp.text()


@pytest.mark.asyncio
async def test_get_empty_city_is_400() -> None:
    async with _serve(create_app()) as client:
        resp = await client.get("/api/v1/weather/")
        assert resp.status == 400
        assert await resp.text() == "City parameter is required"


@pytest.mark.asyncio
async def test_get_returns_stored_json() -> None:
    store = WeatherStore()
    store.put(Weather(city="Oslo", temperature=-4.25, updated_at=_FIXED))
    async with _serve(create_app(store)) as client:
        resp = await client.get("/api/v1/weather/Oslo")
        assert resp.status == 200
        assert await resp.json() == {
            "city": "Oslo",
            "temperature": -4.25,
            "updated_at": "2026-01-01T12:00:00Z",
        }


@pytest.mark.asyncio
async def test_get_decodes_escaped_city() -> None:
    store = WeatherStore()
    store.put(Weather(city="New York", temperature=10.0, updated_at=_FIXED))
    async with _serve(create_app(store)) as client:
        resp = await client.get("/api/v1/weather/New%20York")
        assert resp.status == 200
        assert (await resp.json())["city"] == "New York"


# ------------------------------------------------------------------
# Update handler
# ------------------------------------------------------------------


@pytest.mark.asyncio
async def test_update_empty_city_is_400() -> None:
    store = WeatherStore()
    async with _serve(create_app(store)) as client:
        resp = await client.put("/api/v1/weather/", json={"temperature": 1.0})
        assert resp.status == 400
    assert len(store) == 0


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "body",
    [
        b"",
        b"{not json",
        b"[1, 2]",
        b'"text"',
        b'{"temperature": "hot"}',
        b'{"temperature": "21.5"}',
        b'{"temperature": true}',
        b'{"temperature": NaN}',
    ],
)
async def test_update_malformed_body_is_400(body: bytes) -> None:
    store = WeatherStore()
    async with _serve(create_app(store)) as client:
        resp = await client.put(
            "/api/v1/weather/Moscow",
            data=body,
            headers={"content-type": "application/json"},
        )
        assert resp.status == 400
        assert await resp.text() == "Invalid request body"
    assert store.get("Moscow") is None


@pytest.mark.asyncio
async def test_update_path_city_overrides_body_city() -> None:
    store = WeatherStore()
    async with _serve(_fixed_clock_app(store)) as client:
        resp = await client.put("/api/v1/weather/Moscow", json={"city": "Paris", "temperature": 3.0})
        assert resp.status == 200
        assert (await resp.json())["city"] == "Moscow"
    assert store.get("Paris") is None
    assert store.get("Moscow") is not None


@pytest.mark.asyncio
async def test_update_ignores_client_timestamp() -> None:
    store = WeatherStore()
    async with _serve(_fixed_clock_app(store)) as client:
        resp = await client.put(
            "/api/v1/weather/Moscow",
            json={"temperature": 3.0, "updated_at": "1999-01-01T00:00:00Z"},
        )
        assert resp.status == 200
        assert (await resp.json())["updated_at"] == "2026-01-01T12:00:00Z"
    assert store.get("Moscow") == Weather(city="Moscow", temperature=3.0, updated_at=_FIXED)


@pytest.mark.asyncio
async def test_update_without_temperature_stores_zero() -> None:
    store = WeatherStore()
    async with _serve(_fixed_clock_app(store)) as client:
        resp = await client.put("/api/v1/weather/Moscow", json={})
        assert resp.status == 200
        assert (await resp.json())["temperature"] == 0.0


@pytest.mark.asyncio
async def test_update_replaces_previous_record() -> None:
    store = WeatherStore()
    async with _serve(create_app(store)) as client:
        await client.put("/api/v1/weather/Moscow", json={"temperature": 1.0})
        await client.put("/api/v1/weather/Moscow", json={"temperature": 2.0})
        resp = await client.get("/api/v1/weather/Moscow")
        assert (await resp.json())["temperature"] == 2.0
    assert len(store) == 1


@pytest.mark.asyncio
async def test_concurrent_updates_all_land() -> None:
    store = WeatherStore()
    cities = [f"city-{i}" for i in range(25)]
    async with _serve(create_app(store)) as client:

        async def put(i: int, city: str) -> int:
            resp = await client.put(f"/api/v1/weather/{city}", json={"temperature": float(i)})
            return resp.status

        statuses = await asyncio.gather(*(put(i, c) for i, c in enumerate(cities)))
        assert statuses == [200] * len(cities)
    assert len(store) == len(cities)


# ------------------------------------------------------------------
# Middleware
# ------------------------------------------------------------------


@pytest.mark.asyncio
async def test_recovery_middleware_turns_errors_into_500(caplog: pytest.LogCaptureFixture) -> None:
    async def broken(request: web.Request) -> web.Response:
        raise RuntimeError("boom")

    app = web.Application(middlewares=[recovery_middleware])
    app.router.add_get("/broken", broken)

    async with _serve(app) as client:
        resp = await client.get("/broken")
        assert resp.status == 500

    assert any("Unhandled error" in r.getMessage() for r in caplog.records)


@pytest.mark.asyncio
async def test_recovery_middleware_passes_http_errors_through() -> None:
    async def missing(request: web.Request) -> web.Response:
        raise web.HTTPNotFound(text="nope")

    app = web.Application(middlewares=[recovery_middleware])
    app.router.add_get("/missing", missing)

    async with _serve(app) as client:
        resp = await client.get("/missing")
        assert resp.status == 404
        assert await resp.text() == "nope"


@pytest.mark.asyncio
async def test_timeout_middleware_answers_504() -> None:
    async def slow(request: web.Request) -> web.Response:
        await asyncio.sleep(5)
        return web.Response(text="late")

    app = web.Application(middlewares=[recovery_middleware, timeout_middleware(0.05)])
    app.router.add_get("/slow", slow)

    async with _serve(app) as client:
        resp = await client.get("/slow")
        assert resp.status == 504


@pytest.mark.asyncio
async def test_timeout_middleware_lets_fast_handlers_finish() -> None:
    async def fast(request: web.Request) -> web.Response:
        return web.Response(text="ok")

    app = web.Application(middlewares=[timeout_middleware(1.0)])
    app.router.add_get("/fast", fast)

    async with _serve(app) as client:
        resp = await client.get("/fast")
        assert resp.status == 200
        assert await resp.text() == "ok"


@pytest.mark.asyncio
async def test_update_accepts_integer_temperature() -> None:
    store = WeatherStore()
    async with _serve(_fixed_clock_app(store)) as client:
        resp = await client.put("/api/v1/weather/Moscow", data=b'{"temperature": 21}')
        assert resp.status == 200
        assert (await resp.json())["temperature"] == 21.0


@pytest.mark.asyncio
async def test_handler_timeout_error_is_not_a_request_timeout() -> None:
    async def flaky(request: web.Request) -> web.Response:
        raise TimeoutError("upstream")

    app = web.Application(middlewares=[recovery_middleware, timeout_middleware(1.0)])
    app.router.add_get("/flaky", flaky)

    async with _serve(app) as client:
        resp = await client.get("/flaky")
        assert resp.status == 500
