import discord

import logging

logger = logging.getLogger(__name__)


async def handle(client: discord.Client):
    """Start snapshot maintenance once the client is connected."""
    logger.info(f"Logged in as {client.user.name} (ID: {client.user.id})")

    snipes = client.snipes
    snipes.start()
    logger.info(
        "Tracking %s with properties %s", ", ".join(snipes.emitters), list(snipes.properties)
    )
