"""Discord bot wiring for the snipes cache"""
import discord
from discord.ext import commands

from snipe_cache.config import core, snipes
from snipe_cache.event_hooks import message_hook, ready_hook
from snipe_cache.manager import SnipesManager

import logging

logger = logging.getLogger(__name__)

# --- Intents --------------
intents = discord.Intents.default()
intents.message_content = True
intents.guild_messages = True

# --- Client --------------
class SnipesBot(commands.Bot):
    """Bot carrying a :class:`SnipesManager` as ``snipes``."""

    def __init__(self, **options) -> None:
        super().__init__(command_prefix=commands.when_mentioned, **options)
        self.snipes = SnipesManager(self, **snipes.manager_kwargs())

    async def close(self) -> None:
        await self.snipes.close()
        await super().close()

client = SnipesBot(intents=intents)

# --- Event Handlers --------
@client.event
async def on_ready():
    await ready_hook.handle(client)

@client.event
async def on_message(message: discord.Message):
    await message_hook.handle(client, message)

def run():
    """
    Start the Discord client with configured token.
    """
    if not core.DISCORD_API_TOKEN:
        logger.error("No DISCORD_API_TOKEN configured. Cannot run client.")
        return

    try:
        client.run(core.DISCORD_API_TOKEN)
    except discord.LoginFailure as e:
        logger.error(f"Login failed: {e}")
    except Exception as e:
        logger.exception(f"Unexpected error while running client: {e}")
