"""
Helpers for periodic background tasks.

The eviction policy uses these to run the full-cache sweep on a fixed interval
and to cancel it when the manager shuts down.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, Union

logger = logging.getLogger(__name__)

TaskFn = Callable[[], Union[Awaitable[None], None]]


def startup(task_fn: TaskFn, interval: float) -> asyncio.Task:
    """
    Schedule ``task_fn`` to run periodically every ``interval`` seconds.

    The first run happens one ``interval`` after scheduling. ``task_fn`` may be
    a plain callable or return an awaitable. Exceptions raised by it are logged
    but do not stop the periodic execution. Must be called with a running
    event loop.

    Returns the created :class:`asyncio.Task` handle.
    """

    async def _periodic() -> None:
        await asyncio.sleep(interval)   # delay initial run
        while True:
            try:
                result = task_fn()
                if asyncio.iscoroutine(result):
                    await result
            except Exception as exc:
                logger.error("Periodic task failed: %s", exc)
            await asyncio.sleep(interval)

    return asyncio.get_running_loop().create_task(_periodic())


async def shutdown(task: asyncio.Task | None) -> None:
    """
    Cancel a task started with :func:`startup`.

    Tolerates ``None`` and awaits cancellation to finish silently.
    """

    if not task:
        return

    task.cancel()
    try:
        await task
    except asyncio.CancelledError:  # pragma: no cover - normal cancellation
        pass
