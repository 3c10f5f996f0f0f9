import os, sys
import warnings
from pathlib import Path
from types import SimpleNamespace

import pytest

# Add project root to sys.path for imports
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

# Keep the developer's .env / config.toml from leaking into config tests
os.environ.setdefault("DISCORD_API_TOKEN", "test-token")
os.environ["SNIPES_CONFIG"] = str(Path(__file__).resolve().parent / "missing-config.toml")

warnings.filterwarnings("ignore", "'audioop' is deprecated", DeprecationWarning)


def pytest_configure(config):
    warnings.filterwarnings("ignore", "'audioop' is deprecated", DeprecationWarning)


class FakeSource:
    """Stand-in for ``commands.Bot`` listener registration."""

    def __init__(self):
        self.listeners = {}

    def add_listener(self, func, name):
        self.listeners.setdefault(name, []).append(func)

    def remove_listener(self, func, name):
        if func in self.listeners.get(name, []):
            self.listeners[name].remove(func)

    async def dispatch(self, event, *args):
        for func in list(self.listeners.get(f"on_{event}", [])):
            await func(*args)


def make_message(mid, channel_id, content="", **attrs):
    return SimpleNamespace(
        id=mid,
        channel=SimpleNamespace(id=channel_id),
        content=content,
        **attrs,
    )


@pytest.fixture
def source():
    return FakeSource()


@pytest.fixture
def make_msg():
    return make_message
