from __future__ import annotations
import discord
from . import register, all_commands


@register
class HelpCommand:
    """List available slash-style commands."""

    command_str = "help"

    @staticmethod
    async def handle(
        client: discord.Client, message: discord.Message, args: str
    ) -> None:
        cmds = ", ".join(f"/{name}" for name in sorted(all_commands().keys()))
        await message.channel.send(f"Available commands: {cmds}")
