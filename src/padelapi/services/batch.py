"""Run several API operations sequentially or with bounded concurrency."""

from __future__ import annotations

import asyncio
from typing import Any, Awaitable, Callable, Sequence

from padelapi.models import BatchResult
from padelapi.services.messages import describe_error

Operation = Callable[[], Awaitable[Any]]


async def run_batch(
    operations: Sequence[Operation],
    *,
    concurrent: bool = True,
    max_concurrency: int = 5,
    fail_fast: bool = False,
) -> list[BatchResult]:
    """Execute zero-argument coroutine functions and collect their outcomes.

    Args:
        operations: Callables returning awaitables, e.g.
            ``lambda: users.get_user("42")``.
        concurrent: Run up to *max_concurrency* operations at once.  When
            ``False`` they run one after another.
        max_concurrency: Upper bound on operations in flight.
        fail_fast: Re-raise the first error instead of recording it.  In
            concurrent mode the remaining operations are cancelled.

    Returns:
        One :class:`~padelapi.models.BatchResult` per operation, in the
        order the operations were given.  Failed entries carry the
        :func:`~padelapi.services.messages.describe_error` message.
    """
    if max_concurrency < 1:
        raise ValueError("max_concurrency must be at least 1")

    async def _run_one(operation: Operation) -> BatchResult:
        try:
            data = await operation()
        except Exception as exc:
            if fail_fast:
                raise
            return BatchResult(success=False, error=describe_error(exc))
        return BatchResult(success=True, data=data)

    if not concurrent:
        return [await _run_one(op) for op in operations]

    semaphore = asyncio.Semaphore(max_concurrency)

    async def _limited(operation: Operation) -> BatchResult:
        async with semaphore:
            return await _run_one(operation)

    tasks = [asyncio.ensure_future(_limited(op)) for op in operations]
    try:
        return list(await asyncio.gather(*tasks))
    except BaseException:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise
