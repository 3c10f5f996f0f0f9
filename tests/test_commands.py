import asyncio
from types import SimpleNamespace

from snipe_cache import commands
from snipe_cache.commands.handlers.snipe import NO_SNIPES, describe, target_channel_id
from snipe_cache.manager import SnipesManager
from snipe_cache.projection import Snapshot


class FakeChannel:
    def __init__(self, cid):
        self.id = cid
        self.sent = []

    async def send(self, content):
        self.sent.append(content)


def _setup(source, make_msg):
    manager = SnipesManager(
        source,
        emitters=["message_delete", "message_edit", "bulk_message_delete"],
        properties=["content", "author"],
    )
    client = SimpleNamespace(snipes=manager)
    channel = FakeChannel(100)
    return manager, client, channel


def _command(channel, content):
    return SimpleNamespace(content=content, channel=channel)


def test_snipe_replies_with_last_deleted(source, make_msg):
    manager, client, channel = _setup(source, make_msg)

    async def scenario():
        await source.dispatch("message_delete", make_msg(1, 100, "gone", author="kim"))
        return await commands.dispatch(client, _command(channel, "/snipe"))

    assert asyncio.run(scenario()) is True
    assert channel.sent == ["kim: gone"]


def test_snipe_other_channel_by_mention(source, make_msg):
    manager, client, channel = _setup(source, make_msg)

    async def scenario():
        await source.dispatch("message_edit", make_msg(1, 200, "before", author="a"), make_msg(1, 200, "after", author="a"))
        await commands.dispatch(client, _command(channel, "/editsnipe <#200>"))
        await commands.dispatch(client, _command(channel, "/editsnipe"))

    asyncio.run(scenario())

    assert channel.sent == ["a: before", NO_SNIPES]


def test_bulksnipe_lists_messages(source, make_msg):
    manager, client, channel = _setup(source, make_msg)

    async def scenario():
        await source.dispatch(
            "bulk_message_delete",
            [make_msg(1, 100, "x", author="a"), make_msg(2, 100, "y", author="b")],
        )
        await commands.dispatch(client, _command(channel, "/bulksnipe"))

    asyncio.run(scenario())

    assert channel.sent == ["2 messages were bulk deleted:\n- a: x\n- b: y"]


def test_clearsnipes_reports_count(source, make_msg):
    manager, client, channel = _setup(source, make_msg)

    async def scenario():
        await source.dispatch("message_delete", make_msg(1, 100, "x"))
        await commands.dispatch(client, _command(channel, "/clearsnipes"))

    asyncio.run(scenario())

    assert channel.sent == ["Cleared 1 cached snipes."]
    assert manager.deleted_messages.size == 0


def test_unknown_or_plain_text_not_dispatched(source, make_msg):
    _, client, channel = _setup(source, make_msg)

    assert asyncio.run(commands.dispatch(client, _command(channel, "/nope"))) is False
    assert asyncio.run(commands.dispatch(client, _command(channel, "hello /snipe"))) is False
    assert channel.sent == []


def test_help_lists_commands(source, make_msg):
    _, client, channel = _setup(source, make_msg)

    asyncio.run(commands.dispatch(client, _command(channel, "/help")))

    assert channel.sent == [
        "Available commands: /bulksnipe, /clearsnipes, /editsnipe, /help, /snipe"
    ]


def test_describe_without_content_field():
    assert describe(Snapshot({"pinned": True})) == "pinned: True"
    assert describe(Snapshot({})) == "*(nothing captured)*"
    assert describe(Snapshot({"content": ""})) == "*(no text)*"


def test_target_channel_id_falls_back_to_message_channel():
    message = _command(FakeChannel(5), "/snipe")

    assert target_channel_id(message, "") == 5
    assert target_channel_id(message, "123") == 123
    assert target_channel_id(message, "<#456> extra") == 456
    assert target_channel_id(message, "general") == 5


def test_message_hook_ignores_bots_and_dms(source, make_msg):
    from snipe_cache.event_hooks import message_hook

    _, client, channel = _setup(source, make_msg)
    human = SimpleNamespace(bot=False)

    async def scenario():
        await message_hook.handle(client, SimpleNamespace(content="/help", channel=channel, author=SimpleNamespace(bot=True), guild=object()))
        await message_hook.handle(client, SimpleNamespace(content="/help", channel=channel, author=human, guild=None))
        await message_hook.handle(client, SimpleNamespace(content="/snipe", channel=channel, author=human, guild=object()))

    asyncio.run(scenario())

    assert channel.sent == [NO_SNIPES]


def test_ready_hook_starts_sweep(source):
    from snipe_cache.eviction import ClearOptions, EvictionOptions
    from snipe_cache.event_hooks import ready_hook

    manager = SnipesManager(source, cache=EvictionOptions(clear=ClearOptions(interval=60)))
    client = SimpleNamespace(snipes=manager, user=SimpleNamespace(name="bot", id=1))

    async def scenario():
        await ready_hook.handle(client)
        running = manager.eviction.sweep_running
        await manager.close()
        return running

    assert asyncio.run(scenario()) is True
