"""Application configuration"""

import logging
from dotenv import load_dotenv

load_dotenv()

LOG_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s]: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

logging.basicConfig(format=LOG_FORMAT, datefmt=DATE_FORMAT, level=logging.INFO)
logging.getLogger("discord.gateway").setLevel(logging.WARNING)

from .loader import load_raw_config
from .core import Core
from .snipes import Snipes

_raw = load_raw_config()

core = Core(_raw)
snipes = Snipes(_raw)


class Config:
    core = core
    snipes = snipes


__all__ = ["core", "snipes", "Config", "Core", "Snipes", "load_raw_config"]
