import discord
from snipe_cache import commands

import logging

logger = logging.getLogger(__name__)


async def handle(client: discord.Client, message: discord.Message):
    """
    Handle incoming discord messages.
    - client: Discord bot client instance (carries ``snipes``)
    - message: The incoming message object
    """
    if message.author.bot or message.guild is None:
        return

    await commands.dispatch(client, message)
