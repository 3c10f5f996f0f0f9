from __future__ import annotations
import discord
from . import register


@register
class ClearSnipesCommand:
    """Drop every cached snapshot."""

    command_str = "clearsnipes"

    @staticmethod
    async def handle(client: discord.Client, message: discord.Message, args: str) -> None:
        cleared = client.snipes.clear_all()
        await message.channel.send(f"Cleared {cleared} cached snipes.")
