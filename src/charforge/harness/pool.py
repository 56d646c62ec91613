"""Fixed-size asyncio worker pool.

Workers pull the next index from a shared cursor until the items run out.
Results keep input order.
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, TypeVar

from charforge.observability.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Sequence

log = get_logger(__name__)

T = TypeVar("T")
Item = TypeVar("Item")


async def run_worker_pool(
    items: Sequence[Item],
    worker_fn: Callable[[Item], Awaitable[T]],
    concurrency: int = 3,
) -> list[T]:
    """Run ``worker_fn`` over ``items`` with at most ``concurrency`` in flight.

    The cursor needs no lock: workers only yield at ``await``, and reading
    and advancing it happens between awaits. There is no cancellation; an
    exception from ``worker_fn`` propagates out of the gather.

    Args:
        items: Inputs to process.
        worker_fn: Async function applied to each item.
        concurrency: Number of workers (at least 1).

    Returns:
        Results in input order.
    """
    if not items:
        return []

    results: list[T | None] = [None] * len(items)
    cursor = 0

    async def _worker(worker_id: int) -> None:
        nonlocal cursor
        while cursor < len(items):
            index = cursor
            cursor += 1
            log.debug("pool_item_started", worker=worker_id, index=index)
            results[index] = await worker_fn(items[index])

    worker_count = min(max(1, concurrency), len(items))
    log.info("pool_started", items=len(items), workers=worker_count)
    await asyncio.gather(*(_worker(i) for i in range(worker_count)))
    log.info("pool_finished", items=len(items))

    return results  # type: ignore[return-value]
