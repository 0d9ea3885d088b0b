"""Tests for padelapi.services.health."""

from __future__ import annotations

import httpx
import pytest

from padelapi.services import check_api_health, endpoints

pytestmark = pytest.mark.asyncio


def _answer(status: int, payload, calls: list[httpx.Request]):
    def _handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(status, json=payload)

    return _handler


class TestCheckApiHealth:
    async def test_healthy(self, make_client) -> None:
        calls: list[httpx.Request] = []
        async with make_client(_answer(200, {"status": "healthy"}, calls)) as client:
            assert await check_api_health(client) is True
        assert calls[0].method == "GET"
        assert calls[0].url.path == endpoints.HEALTH

    @pytest.mark.parametrize("payload", [{"status": "degraded"}, {}, ["healthy"], "healthy"])
    async def test_other_bodies_are_unhealthy(self, make_client, payload) -> None:
        async with make_client(_answer(200, payload, [])) as client:
            assert await check_api_health(client) is False

    async def test_unavailable_returns_false_and_warns(
        self, make_client, recording_sleep, verbose_output, capfd
    ) -> None:
        calls: list[httpx.Request] = []
        handler = _answer(503, {"message": "maintenance"}, calls)
        async with make_client(handler) as client:
            assert await check_api_health(client) is False
        assert len(calls) == 3
        assert len(recording_sleep.delays) == 2
        err = capfd.readouterr().err
        assert (
            "Warning: API health check failed: "
            "Service temporarily unavailable. Please try again later."
        ) in err
        assert "[debug]" in err

    async def test_network_failure_returns_false(self, make_client) -> None:
        def _refuse(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        async with make_client(_refuse, max_attempts=1) as client:
            assert await check_api_health(client) is False
