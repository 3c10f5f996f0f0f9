"""Snipes manager: capture message snapshots from Discord events."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, Iterable, List, Sequence, Tuple

import discord

from .eviction import EvictionOptions, EvictionPolicy
from .projection import DEFAULT_PROPERTIES, Snapshot, project, validate_properties
from .store import SnapshotStore, freeze_bulk

logger = logging.getLogger(__name__)

MESSAGE_DELETE = "message_delete"
MESSAGE_EDIT = "message_edit"
BULK_MESSAGE_DELETE = "bulk_message_delete"

EMITTERS: Tuple[str, ...] = (MESSAGE_DELETE, MESSAGE_EDIT, BULK_MESSAGE_DELETE)
DEFAULT_EMITTERS: Tuple[str, ...] = (MESSAGE_DELETE, MESSAGE_EDIT)

Listener = Callable[..., Awaitable[None]]


class Subscriptions:
    """Listeners registered on one event source, removable together."""

    def __init__(self, source: Any) -> None:
        self._source = source
        self._listeners: List[Tuple[str, Listener]] = []

    def add(self, func: Listener, name: str) -> None:
        self._source.add_listener(func, name)
        self._listeners.append((name, func))

    def names(self) -> List[str]:
        return [name for name, _ in self._listeners]

    def close(self) -> None:
        """Deregister every listener. Safe to call twice."""

        while self._listeners:
            name, func = self._listeners.pop()
            self._source.remove_listener(func, name)

    def __len__(self) -> int:
        return len(self._listeners)


def _validate_emitters(emitters: Iterable[str]) -> Tuple[str, ...]:
    if isinstance(emitters, str):
        raise ValueError("emitters must be a sequence of event names, not a string")
    selected = tuple(dict.fromkeys(emitters))
    if not selected:
        raise ValueError("At least one emitter is required")
    unknown = [e for e in selected if e not in EMITTERS]
    if unknown:
        raise ValueError(
            f"Unknown emitters: {', '.join(map(str, unknown))} (expected any of {', '.join(EMITTERS)})"
        )
    return selected


def is_partial(message: Any) -> bool:
    """Return ``True`` when ``message`` is not fully loaded."""

    # discord.Message subclasses PartialMessage; only the bare stub needs a fetch.
    if isinstance(message, discord.PartialMessage) and not isinstance(message, discord.Message):
        return True
    return bool(getattr(message, "partial", False))


class SnipesManager:
    """
    Track deleted, edited and bulk-deleted messages per channel.

    ``client`` must expose discord.py's ``add_listener`` / ``remove_listener``
    (e.g. :class:`discord.ext.commands.Bot`). Listeners are registered at
    construction for every configured emitter and stay registered until
    :meth:`close`.

    Example::

        bot = commands.Bot(command_prefix="!", intents=intents)
        bot.snipes = SnipesManager(
            bot,
            properties=("content", "author"),
            cache=EvictionOptions(expires=3600),
        )
        sniped = bot.snipes.deleted_messages.get(channel_id)
    """

    def __init__(
        self,
        client: Any,
        *,
        emitters: Sequence[str] = DEFAULT_EMITTERS,
        properties: Sequence[str] = DEFAULT_PROPERTIES,
        fetch_partials: bool = False,
        cache: EvictionOptions | None = None,
    ) -> None:
        self.client = client
        self.emitters = _validate_emitters(emitters)
        self.properties = validate_properties(properties)
        self.fetch_partials = bool(fetch_partials)
        self.cache = cache if cache is not None else EvictionOptions(enabled=False)

        self.deleted_messages = SnapshotStore("deleted")
        self.updated_messages = SnapshotStore("updated")
        self.bulk_deleted_messages = SnapshotStore("bulk_deleted")

        self._eviction = EvictionPolicy(self.cache)
        self._subscriptions = Subscriptions(client)
        self._closed = False

        if MESSAGE_DELETE in self.emitters:
            self._subscriptions.add(self.on_message_delete, "on_message_delete")
        if MESSAGE_EDIT in self.emitters:
            self._subscriptions.add(self.on_message_edit, "on_message_edit")
        if BULK_MESSAGE_DELETE in self.emitters:
            self._subscriptions.add(self.on_bulk_message_delete, "on_bulk_message_delete")

        try:
            asyncio.get_running_loop()
        except RuntimeError:
            # No loop yet (e.g. built alongside the bot); the first capture starts the sweep.
            pass
        else:
            self.start()

        logger.debug(
            "SnipesManager listening to %s (properties=%s, fetch_partials=%s)",
            ", ".join(self.emitters),
            list(self.properties),
            self.fetch_partials,
        )

    @property
    def eviction(self) -> EvictionPolicy:
        return self._eviction

    # ------------------------------------------------------------------ #
    # Lifecycle
    # ------------------------------------------------------------------ #

    def start(self) -> None:
        """Start the periodic sweep if configured. Needs a running loop."""

        if not self._closed:
            self._eviction.start_sweep(self.clear_all)

    async def close(self) -> None:
        """Remove all listeners and cancel pending eviction timers."""

        if self._closed:
            return
        self._closed = True
        self._subscriptions.close()
        await self._eviction.close()

    # ------------------------------------------------------------------ #
    # Event listeners
    # ------------------------------------------------------------------ #

    async def on_message_delete(self, message: discord.Message) -> None:
        await self._capture(self.deleted_messages, message)

    async def on_message_edit(self, before: discord.Message, after: discord.Message) -> None:
        await self._capture(self.updated_messages, before)

    async def on_bulk_message_delete(self, messages: List[discord.Message]) -> None:
        if not messages:
            return
        self.start()

        channel_id = messages[0].channel.id
        entries: List[Tuple[int, Snapshot]] = []
        for message in messages:
            resolved = await self._resolve(message)
            if resolved is None:
                continue
            entries.append((message.id, project(resolved, self.properties)))

        self.bulk_deleted_messages.insert(channel_id, freeze_bulk(entries))
        self._eviction.schedule(self.bulk_deleted_messages, channel_id)
        logger.debug(
            "Captured %d bulk-deleted messages in channel %s", len(entries), channel_id
        )

    async def _capture(self, store: SnapshotStore, message: discord.Message) -> None:
        self.start()

        resolved = await self._resolve(message)
        if resolved is None:
            return

        channel_id = resolved.channel.id
        store.insert(channel_id, project(resolved, self.properties))
        self._eviction.schedule(store, channel_id)
        logger.debug(
            "Captured message %s in channel %s (%s)",
            getattr(resolved, "id", None),
            channel_id,
            store.name,
        )

    async def _resolve(self, message: discord.Message) -> discord.Message | None:
        """Return ``message`` fully loaded, or ``None`` when fetching fails."""

        if not (self.fetch_partials and is_partial(message)):
            return message
        try:
            return await message.fetch()
        except discord.DiscordException as exc:
            logger.debug(
                "Dropping snapshot for message %s: fetch failed (%s)",
                getattr(message, "id", None),
                exc,
            )
            return None

    # ------------------------------------------------------------------ #
    # Maintenance
    # ------------------------------------------------------------------ #

    def clear_all(self) -> int:
        """Empty all three stores and return how many entries were removed."""

        stores = (self.bulk_deleted_messages, self.deleted_messages, self.updated_messages)
        total = sum(store.size for store in stores)
        self._eviction.log("Clearing all snapshot stores...")
        self._eviction.cancel_all()
        for store in stores:
            store.clear()
        self._eviction.log("Cleared %d snapshots.", total)
        return total


__all__ = [
    "BULK_MESSAGE_DELETE",
    "DEFAULT_EMITTERS",
    "EMITTERS",
    "MESSAGE_DELETE",
    "MESSAGE_EDIT",
    "SnipesManager",
    "Subscriptions",
    "is_partial",
]
