"""
Registry of slash-style snipe commands.

Handler classes carry a ``command_str`` and an async static ``handle(client,
message, args)``; ``client.snipes`` is the :class:`SnipesManager` they read
from. Decorate them with :func:`register`; the modules below are imported at
the end of this file so their handlers land in the registry.
"""
from __future__ import annotations

from typing import Awaitable, Dict, Protocol

import discord


class CommandHandler(Protocol):
    command_str: str

    @staticmethod
    def handle(client: discord.Client, message: discord.Message, args: str) -> Awaitable[None]: ...


_REGISTRY: Dict[str, CommandHandler] = {}


def register(cls: CommandHandler):
    """Add ``cls`` under its ``command_str``; rejects duplicate names."""
    name = cls.command_str.lower()
    if name in _REGISTRY and _REGISTRY[name] is not cls:
        raise ValueError(f"Command '/{name}' is already registered by {_REGISTRY[name].__name__}")
    _REGISTRY[name] = cls
    return cls


def get(command: str) -> CommandHandler | None:
    return _REGISTRY.get(command.lower())


def all_commands() -> Dict[str, CommandHandler]:
    return dict(_REGISTRY)


from . import clear, help, snipe  # noqa: E402,F401  (populate the registry)
