"""Read-back commands for the snapshot stores."""

from __future__ import annotations

import re
from typing import Mapping

import discord

from . import register

NO_SNIPES = "No snipes in this channel."

_CHANNEL_RE = re.compile(r"^(?:<#)?(\d+)>?$")


def target_channel_id(message: discord.Message, args: str) -> int:
    """Channel id given as ``<#id>`` or a bare id in ``args``, else the message's channel."""

    token = (args or "").strip().split(maxsplit=1)
    if token:
        match = _CHANNEL_RE.match(token[0])
        if match:
            return int(match.group(1))
    return message.channel.id


def describe(snapshot: Mapping) -> str:
    """Render a snapshot as reply text."""

    if "content" in snapshot:
        author = snapshot.get("author")
        content = snapshot.get("content") or "*(no text)*"
        return f"{author}: {content}" if author is not None else content
    if not snapshot:
        return "*(nothing captured)*"
    return "\n".join(f"{name}: {value}" for name, value in snapshot.items())


@register
class SnipeCommand:
    """Show the last deleted message in a channel."""

    command_str = "snipe"

    @staticmethod
    async def handle(client: discord.Client, message: discord.Message, args: str) -> None:
        sniped = client.snipes.deleted_messages.get(target_channel_id(message, args))
        await message.channel.send(describe(sniped) if sniped is not None else NO_SNIPES)


@register
class EditSnipeCommand:
    """Show the last edited message in a channel as it was before the edit."""

    command_str = "editsnipe"

    @staticmethod
    async def handle(client: discord.Client, message: discord.Message, args: str) -> None:
        sniped = client.snipes.updated_messages.get(target_channel_id(message, args))
        await message.channel.send(describe(sniped) if sniped is not None else NO_SNIPES)


@register
class BulkSnipeCommand:
    """Show the messages removed by the last bulk delete in a channel."""

    command_str = "bulksnipe"

    @staticmethod
    async def handle(client: discord.Client, message: discord.Message, args: str) -> None:
        bulk = client.snipes.bulk_deleted_messages.get(target_channel_id(message, args))
        if not bulk:
            await message.channel.send(NO_SNIPES)
            return
        lines = [f"{len(bulk)} messages were bulk deleted:"]
        lines.extend(f"- {describe(snap)}" for snap in bulk.values())
        # Discord caps messages at 2000 characters
        await message.channel.send("\n".join(lines)[:2000])
