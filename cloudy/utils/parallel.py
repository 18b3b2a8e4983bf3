# Copyright (c) 2025-2026 OptimNow. All Rights Reserved.
# Licensed under the Apache License, Version 2.0.
# See LICENSE file in the project root for full license information.

"""Parallel map with an all-complete join and per-task error capture.

``gather_all`` launches one asyncio task per key, waits for every one of
them regardless of individual failures, and reports each key's result or
exception separately. A failing task never cancels its siblings.

Example:
    outcomes = await gather_all(["us-east-1", "eu-west-1"], aggregate_region)
    resources = [o.value for o in outcomes if o.succeeded]
    errors = [o.error for o in outcomes if not o.succeeded]
"""

import asyncio
from dataclasses import dataclass
from typing import Awaitable, Callable, Generic, Iterable, TypeVar

K = TypeVar("K")
T = TypeVar("T")


@dataclass
class TaskOutcome(Generic[K, T]):
    """Result of one unit of work launched by ``gather_all``.

    Attributes:
        key: The input the worker was called with
        value: Worker return value, None if the worker raised
        error: Exception raised by the worker, None on success
    """

    key: K
    value: T | None = None
    error: BaseException | None = None

    @property
    def succeeded(self) -> bool:
        return self.error is None


async def gather_all(
    keys: Iterable[K],
    worker: Callable[[K], Awaitable[T]],
    max_concurrency: int | None = None,
) -> list[TaskOutcome[K, T]]:
    """
    Run ``worker`` for every key concurrently and wait for all of them.

    Args:
        keys: Inputs, one task is launched per key
        worker: Coroutine function called with each key
        max_concurrency: Optional cap on tasks running at once. Every task
                         still runs; the cap only delays some of them.

    Returns:
        One TaskOutcome per key, in input order

    Raises:
        asyncio.CancelledError: If the calling task itself is cancelled
    """
    keys = list(keys)
    semaphore = asyncio.Semaphore(max_concurrency) if max_concurrency else None

    async def run(key: K) -> T:
        if semaphore is None:
            return await worker(key)
        async with semaphore:
            return await worker(key)

    # return_exceptions=True turns the join into an all-complete barrier
    results = await asyncio.gather(*(run(key) for key in keys), return_exceptions=True)

    outcomes: list[TaskOutcome[K, T]] = []
    for key, result in zip(keys, results):
        if isinstance(result, (KeyboardInterrupt, SystemExit)):
            raise result
        if isinstance(result, BaseException):
            outcomes.append(TaskOutcome(key=key, error=result))
        else:
            outcomes.append(TaskOutcome(key=key, value=result))
    return outcomes
