"""Tests for padelapi.services.batch.run_batch."""

from __future__ import annotations

import asyncio

import pytest

from padelapi.exceptions import NotFoundError
from padelapi.services import run_batch

pytestmark = pytest.mark.asyncio


def _value(value, delay: float = 0.0):
    async def _operation():
        await asyncio.sleep(delay)
        return value

    return _operation


def _failure(exc: BaseException, delay: float = 0.0):
    async def _operation():
        await asyncio.sleep(delay)
        raise exc

    return _operation


class TestRunBatch:
    async def test_results_in_input_order(self) -> None:
        results = await run_batch([_value("slow", 0.05), _value("fast", 0.0)])
        assert [r.data for r in results] == ["slow", "fast"]
        assert all(r.success for r in results)

    async def test_failures_recorded_with_message(self) -> None:
        results = await run_batch(
            [_value(1), _failure(NotFoundError("HTTP 404", status_code=404)), _value(3)]
        )
        assert [r.success for r in results] == [True, False, True]
        assert results[1].error == "Resource not found."
        assert results[1].data is None

    async def test_sequential(self) -> None:
        order: list[int] = []

        def _op(n: int):
            async def _operation():
                order.append(n)
                await asyncio.sleep(0)
                return n

            return _operation

        results = await run_batch([_op(1), _op(2), _op(3)], concurrent=False)
        assert order == [1, 2, 3]
        assert [r.data for r in results] == [1, 2, 3]

    async def test_concurrency_is_bounded(self) -> None:
        state = {"active": 0, "peak": 0}

        async def _operation():
            state["active"] += 1
            state["peak"] = max(state["peak"], state["active"])
            await asyncio.sleep(0.01)
            state["active"] -= 1
            return True

        await run_batch([_operation] * 10, max_concurrency=3)
        assert state["peak"] == 3

    async def test_fail_fast_raises(self) -> None:
        with pytest.raises(NotFoundError):
            await run_batch(
                [_value(1, 0.5), _failure(NotFoundError("HTTP 404", status_code=404))],
                fail_fast=True,
            )

    async def test_fail_fast_sequential_stops(self) -> None:
        ran: list[str] = []

        async def _later():
            ran.append("later")

        with pytest.raises(ValueError):
            await run_batch([_failure(ValueError("bad")), _later], concurrent=False, fail_fast=True)
        assert ran == []

    async def test_empty(self) -> None:
        assert await run_batch([]) == []

    async def test_invalid_concurrency(self) -> None:
        with pytest.raises(ValueError, match="max_concurrency"):
            await run_batch([_value(1)], max_concurrency=0)
