"""
In-memory snapshot stores keyed by channel id.

``SnapshotStore`` keeps at most one value per channel: a new insert simply
replaces the previous one. The manager owns three instances (deleted, updated
and bulk-deleted messages); the bulk store holds read-only mappings of
message id -> :class:`~snipe_cache.projection.Snapshot` that are assembled in
full before being inserted. Operations never raise for missing keys.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Dict, Iterable, ItemsView, KeysView, Mapping, Tuple

from .projection import Snapshot

BulkSnapshot = Mapping[int, Snapshot]

_MISSING = object()


class SnapshotStore:
    """Channel-keyed registry of the latest captured value."""

    def __init__(self, name: str) -> None:
        self.name = name
        self._records: Dict[int, Any] = {}

    def insert(self, channel_id: int, value: Any) -> None:
        """Store ``value`` for ``channel_id``, replacing any previous entry."""

        self._records[channel_id] = value

    def get(self, channel_id: int) -> Any | None:
        """Return the entry for ``channel_id`` or ``None``."""

        return self._records.get(channel_id)

    def delete(self, channel_id: int) -> bool:
        """Remove ``channel_id`` if present; return whether it was."""

        return self._records.pop(channel_id, _MISSING) is not _MISSING

    def clear(self) -> int:
        """Drop every entry and return how many were removed."""

        removed = len(self._records)
        self._records.clear()
        return removed

    @property
    def size(self) -> int:
        return len(self._records)

    def keys(self) -> KeysView[int]:
        return self._records.keys()

    def items(self) -> ItemsView[int, Any]:
        return self._records.items()

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, channel_id: object) -> bool:
        return channel_id in self._records

    def __repr__(self) -> str:
        return f"SnapshotStore(name={self.name!r}, size={len(self._records)})"


def freeze_bulk(entries: Iterable[Tuple[int, Snapshot]]) -> BulkSnapshot:
    """Build the read-only message id -> snapshot mapping for a bulk capture."""

    return MappingProxyType(dict(entries))


__all__ = ["BulkSnapshot", "SnapshotStore", "freeze_bulk"]
