from __future__ import annotations

import asyncio
import json
import logging

import httpx

from services.self_test import SelfTestPoster, build_synthetic_reading


def test_synthetic_reading_shape() -> None:
    reading = build_synthetic_reading("Test Terminal")

    assert set(reading) == {"timestamp", "terminal", "sensor", "value"}
    assert reading["terminal"] == "Test Terminal"
    assert reading["sensor"] == "temperature"
    assert reading["timestamp"] > 0
    assert 0.0 <= reading["value"] < 1.0


def test_send_once_posts_reading() -> None:
    captured: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        captured.append(request)
        return httpx.Response(200, json={"message": "received", "value": 0.5})

    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    poster = SelfTestPoster(url="http://collector/value", terminal="Bench", client=client)

    async def scenario() -> httpx.Response | None:
        try:
            return await poster.send_once()
        finally:
            await poster.stop()

    response = asyncio.run(scenario())

    assert response is not None and response.status_code == 200
    assert len(captured) == 1
    assert captured[0].method == "POST"
    assert str(captured[0].url) == "http://collector/value"
    body = json.loads(captured[0].content)
    assert body["terminal"] == "Bench"
    assert body["sensor"] == "temperature"


def test_send_once_survives_transport_errors() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    poster = SelfTestPoster(url="http://collector/value", terminal="Bench", client=client)

    async def scenario() -> httpx.Response | None:
        try:
            return await poster.send_once()
        finally:
            await poster.stop()

    assert asyncio.run(scenario()) is None


def test_background_loop_sends_until_stopped() -> None:
    calls = 0

    def handler(request: httpx.Request) -> httpx.Response:
        nonlocal calls
        calls += 1
        return httpx.Response(200, json={"message": "received", "value": 0.5})

    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    poster = SelfTestPoster(
        url="http://collector/value", terminal="Bench", interval=0.01, client=client
    )

    async def scenario() -> None:
        poster.start()
        await asyncio.sleep(0.1)
        await poster.stop()

    asyncio.run(scenario())

    assert calls >= 2


def test_rejected_reading_is_logged_as_warning(caplog) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(400, json={"error": "value: cannot be blank."})

    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    poster = SelfTestPoster(url="http://collector/value", terminal="Bench", client=client)

    async def scenario() -> httpx.Response | None:
        try:
            return await poster.send_once()
        finally:
            await poster.stop()

    with caplog.at_level(logging.DEBUG, logger="services.self_test"):
        response = asyncio.run(scenario())

    assert response is not None and response.status_code == 400
    warnings = [record for record in caplog.records if record.levelno == logging.WARNING]
    assert len(warnings) == 1
    assert warnings[0].getMessage() == "Synthetic reading rejected"
    assert warnings[0].error == "value: cannot be blank."
    assert not [record for record in caplog.records if record.getMessage() == "Synthetic reading sent"]
