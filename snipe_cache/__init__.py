"""
Snapshot cache for deleted and edited Discord messages.

Modules
=======

``projection``
    :func:`~snipe_cache.projection.project` and the immutable
    :class:`~snipe_cache.projection.Snapshot` it returns.
``store``
    :class:`~snipe_cache.store.SnapshotStore`, the channel-keyed registry.
``eviction``
    TTL timers and the periodic sweep, configured by
    :class:`~snipe_cache.eviction.EvictionOptions`.
``manager``
    :class:`~snipe_cache.manager.SnipesManager`, which subscribes to Discord
    events and fills the stores.
``config`` / ``clients`` / ``commands`` / ``event_hooks``
    Bot bootstrap: env configuration, the Discord client and text commands.
"""

from .eviction import ClearOptions, EvictionOptions
from .manager import DEFAULT_EMITTERS, EMITTERS, SnipesManager
from .projection import DEFAULT_PROPERTIES, Snapshot, project
from .store import SnapshotStore

__all__ = [
    "ClearOptions",
    "DEFAULT_EMITTERS",
    "DEFAULT_PROPERTIES",
    "EMITTERS",
    "EvictionOptions",
    "Snapshot",
    "SnapshotStore",
    "SnipesManager",
    "project",
]
