import os


class Core:
    def __init__(self, config: dict | None = None) -> None:
        discord_cfg = (config or {}).get("discord", {})

        token_env = str(discord_cfg.get("token_env", "DISCORD_API_TOKEN"))

        self.DISCORD_API_TOKEN: str | None = os.getenv(token_env)
