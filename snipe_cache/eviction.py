"""
Eviction settings and timers for the snapshot stores.

Two independent mechanisms remove cached snapshots:

* a per-entry TTL (``EvictionOptions.expires``) started whenever a channel
  entry is written, and
* a periodic sweep (``EvictionOptions.clear``) that empties every store on a
  fixed interval.

Either may fire first. ``EvictionOptions.enabled`` switches both off at once.

Overwrites restart the TTL: scheduling a key that already has a pending timer
cancels that timer first, so each ``(store, channel)`` pair owns at most one
timer and the deadline always belongs to the newest value.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Callable, Dict, Tuple

from . import maintenance
from .store import SnapshotStore

logger = logging.getLogger(__name__)

LOG_PREFIX = "[SNIPES] ::"
DEFAULT_CLEAR_INTERVAL = 3600.0


@dataclass(frozen=True)
class ClearOptions:
    """Periodic full-cache sweep settings (``interval`` in seconds)."""

    enabled: bool = True
    interval: float = DEFAULT_CLEAR_INTERVAL

    def __post_init__(self) -> None:
        if self.interval is None or self.interval <= 0:
            raise ValueError(f"clear interval must be > 0 seconds, got {self.interval!r}")


@dataclass(frozen=True)
class EvictionOptions:
    """
    When cached snapshots are dropped.

    :param enabled: Master switch; ``False`` disables TTL and sweep alike.
    :param expires: Seconds a channel entry lives after its last write, or ``None``.
    :param clear: Periodic sweep settings, or ``None``.
    :param logger: Log evictions and sweeps at INFO.
    """

    enabled: bool = True
    expires: float | None = None
    clear: ClearOptions | None = None
    logger: bool = False

    def __post_init__(self) -> None:
        if self.expires is not None and self.expires <= 0:
            raise ValueError(f"expires must be > 0 seconds or None, got {self.expires!r}")

    @property
    def ttl_active(self) -> bool:
        return bool(self.enabled and self.expires)

    @property
    def sweep_active(self) -> bool:
        return bool(self.enabled and self.clear and self.clear.enabled)


class EvictionPolicy:
    """Owns TTL timer handles and the sweep task for one manager."""

    def __init__(self, options: EvictionOptions) -> None:
        self.options = options
        self._timers: Dict[Tuple[int, int], Tuple[SnapshotStore, asyncio.TimerHandle]] = {}
        self._sweep_task: asyncio.Task | None = None

    # ------------------------------------------------------------------ #
    # Per-entry TTL
    # ------------------------------------------------------------------ #

    def schedule(self, store: SnapshotStore, channel_id: int) -> None:
        """(Re)start the TTL timer for ``channel_id`` in ``store``."""

        if not self.options.ttl_active:
            return

        key = (id(store), channel_id)
        pending = self._timers.pop(key, None)
        if pending is not None:
            pending[1].cancel()

        loop = asyncio.get_running_loop()
        handle = loop.call_later(self.options.expires, self._expire, store, channel_id)
        self._timers[key] = (store, handle)

    def pending(self, store: SnapshotStore, channel_id: int) -> bool:
        """Return ``True`` if a TTL timer is waiting for ``channel_id``."""

        return (id(store), channel_id) in self._timers

    def cancel_all(self) -> None:
        """Cancel every pending TTL timer (the entries are being cleared)."""

        for _, handle in self._timers.values():
            handle.cancel()
        self._timers.clear()

    def _expire(self, store: SnapshotStore, channel_id: int) -> None:
        self._timers.pop((id(store), channel_id), None)
        if not store.delete(channel_id):
            return
        self.log(
            "The snapshot of the channel %s has been deleted from the %s cache.",
            channel_id,
            store.name,
        )

    # ------------------------------------------------------------------ #
    # Periodic sweep
    # ------------------------------------------------------------------ #

    @property
    def sweep_running(self) -> bool:
        task = self._sweep_task
        if task is None or task.done():
            return False
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            return not task.get_loop().is_closed()
        # A task left behind on a closed loop never finishes; treat it as stopped.
        return task.get_loop() is loop

    def start_sweep(self, sweep: Callable[[], object]) -> bool:
        """
        Start the periodic sweep calling ``sweep`` every interval.

        Requires a running event loop. Returns ``True`` if a sweep task is
        running afterwards.
        """
        if not self.options.sweep_active:
            return False
        if not self.sweep_running:
            interval = self.options.clear.interval
            logger.debug("Starting snapshot sweep (interval=%ss)", interval)
            self._sweep_task = maintenance.startup(sweep, interval)
        return True

    # ------------------------------------------------------------------ #
    # Shutdown / logging
    # ------------------------------------------------------------------ #

    async def close(self) -> None:
        """Cancel pending TTL timers and the sweep task."""

        self.cancel_all()

        running = self.sweep_running
        task, self._sweep_task = self._sweep_task, None
        if running:
            await maintenance.shutdown(task)

    def log(self, message: str, *args) -> None:
        """Emit ``message`` at INFO when verbose logging is configured."""

        if self.options.logger:
            logger.info(f"{LOG_PREFIX} {message}", *args)


__all__ = ["ClearOptions", "EvictionOptions", "EvictionPolicy", "LOG_PREFIX"]
