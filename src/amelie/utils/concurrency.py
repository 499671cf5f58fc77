from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Iterable
from typing import TypeVar

T = TypeVar("T")


async def gather_ordered(awaitables: Iterable[Awaitable[T]]) -> list[T]:
    """Run awaitables concurrently and return results in submission order.

    The first failure cancels the remaining tasks and is re-raised as the
    original exception rather than an ExceptionGroup.
    """

    tasks: list[asyncio.Task[T]] = []
    failure: Exception | None = None
    try:
        async with asyncio.TaskGroup() as group:
            for awaitable in awaitables:
                tasks.append(group.create_task(_as_coroutine(awaitable)))
    except ExceptionGroup as exc_group:
        failure = exc_group.exceptions[0]
    if failure is not None:
        raise failure
    return [task.result() for task in tasks]


async def _as_coroutine(awaitable: Awaitable[T]) -> T:
    return await awaitable
