"""Fail-fast fan-out over concurrent awaitables.

Results come back in argument order. On the first failure the remaining
tasks are cancelled and collected before the error propagates, so no
sibling keeps running or leaves an unretrieved exception behind.
"""

from __future__ import annotations

import asyncio
from typing import Any, Awaitable


async def gather_or_cancel(*awaitables: Awaitable[Any]) -> list[Any]:
    """Await awaitables concurrently, cancelling the rest on the first failure.

    Args:
        awaitables: Coroutines or futures to run together.

    Returns:
        Results in argument order.
    """
    tasks = [asyncio.ensure_future(awaitable) for awaitable in awaitables]
    try:
        return list(await asyncio.gather(*tasks))
    except BaseException:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise
