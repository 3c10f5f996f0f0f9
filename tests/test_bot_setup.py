import asyncio

import discord
from discord.ext import commands as discord_commands

from snipe_cache.eviction import EvictionOptions
from snipe_cache.manager import SnipesManager


async def _listeners_before_and_after_close():
    bot = discord_commands.Bot(command_prefix="!", intents=discord.Intents.none())
    try:
        manager = SnipesManager(
            bot,
            emitters=["message_delete", "bulk_message_delete"],
            cache=EvictionOptions(expires=60),
        )
        registered = {name for name, funcs in bot.extra_events.items() if funcs}
        await manager.close()
        remaining = {name for name, funcs in bot.extra_events.items() if funcs}
        return registered, remaining
    finally:
        await bot.close()


def test_manager_registers_on_bot_and_unregisters_on_close():
    registered, remaining = asyncio.run(_listeners_before_and_after_close())

    assert registered == {"on_message_delete", "on_bulk_message_delete"}
    assert remaining == set()
