"""Command dispatch utilities."""

from __future__ import annotations

import logging
import re
from typing import NamedTuple

import discord

from .handlers import CommandHandler, get as get_handler

logger = logging.getLogger(__name__)

_COMMAND_RE = re.compile(r"^\s*/(\w+)(?:\s+(.*))?", re.DOTALL)


class CommandInvocation(NamedTuple):
    """Resolved command data for downstream consumers."""

    handler: CommandHandler
    name: str
    args: str


def _resolve_command(content: str) -> CommandInvocation | None:
    """Return the handler, command name, and args if ``content`` matches."""

    match = _COMMAND_RE.match(content)
    if not match:
        return None

    command, args = match.groups()
    command = (command or "").lower()
    handler = get_handler(command)
    if not handler:
        return None

    return CommandInvocation(handler=handler, name=command, args=(args or ""))


async def dispatch(client: discord.Client, message: discord.Message) -> bool:
    """
    Parse and execute a slash-style command at the start of the message.
    Returns True if a command was handled.
    """

    invocation = _resolve_command(message.content or "")
    if not invocation:
        return False

    handler, command, args = invocation
    logger.info("Dispatching command '%s' with args: %s", command, args)
    await handler.handle(client, message, args)
    return True
