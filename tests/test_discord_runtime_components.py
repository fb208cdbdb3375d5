from __future__ import annotations

import asyncio
import os
import sys
from pathlib import Path
from types import SimpleNamespace

import pytest


PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

pytest.importorskip("discord")

import voice_thread_bot.app as app_mod  # noqa: E402
from fakes import make_settings  # noqa: E402
from voice_thread_bot.discord.client import VoiceThreadDiscordBot  # noqa: E402
from voice_thread_bot.discord.platform import DiscordPlatform  # noqa: E402
from voice_thread_bot.errors import PlatformCallError  # noqa: E402
from voice_thread_bot.linkage.registry import LinkRegistry  # noqa: E402


class _FakeClient:
    def __init__(self, cached: dict[int, object], remote: dict[int, object]) -> None:
        self.cached = cached
        self.remote = remote
        self.fetches: list[int] = []

    def get_channel(self, channel_id: int) -> object | None:
        return self.cached.get(channel_id)

    async def fetch_channel(self, channel_id: int) -> object:
        self.fetches.append(channel_id)
        return self.remote[channel_id]


class _FakeMessageable:
    def __init__(self, name: str = "chan") -> None:
        self.name = name
        self.sent: list[tuple[str, dict[str, object]]] = []
        self.edits: list[dict[str, object]] = []

    async def send(self, content: str, **kwargs: object) -> SimpleNamespace:
        self.sent.append((content, kwargs))
        return SimpleNamespace(content=content)

    async def edit(self, **kwargs: object) -> None:
        self.edits.append(kwargs)


def test_bot_wires_registry_platform_and_intents() -> None:
    bot = VoiceThreadDiscordBot(make_settings(discord_members_intent=False))

    assert isinstance(bot.registry, LinkRegistry)
    assert isinstance(bot.platform, DiscordPlatform)
    assert bot.platform.client is bot
    assert bot.intents.voice_states is True
    assert bot.intents.members is False
    assert len(bot.registry) == 0


def test_platform_prefers_cache_then_fetches() -> None:
    cached = _FakeMessageable("cached")
    remote = _FakeMessageable("remote")
    client = _FakeClient({1: cached}, {2: remote})
    platform = DiscordPlatform(client)  # type: ignore[arg-type]

    async def scenario() -> tuple[str, str]:
        return await platform.get_channel_name(1), await platform.get_channel_name(2)

    assert asyncio.run(scenario()) == ("cached", "remote")
    assert client.fetches == [2]


def test_platform_send_and_edit_pass_only_given_options() -> None:
    channel = _FakeMessageable()
    platform = DiscordPlatform(_FakeClient({1: channel}, {}))  # type: ignore[arg-type]

    async def scenario() -> None:
        await platform.send_message(1, "hello")
        await platform.send_message(1, "quiet", allowed_mentions="mentions")  # type: ignore[arg-type]
        await platform.edit_thread(1, archived=True)
        await platform.edit_thread(1, name="New Name")
        await platform.edit_thread(1)

    asyncio.run(scenario())

    assert channel.sent == [("hello", {}), ("quiet", {"allowed_mentions": "mentions"})]
    assert channel.edits == [{"archived": True}, {"name": "New Name"}]


def test_platform_rejects_non_guild_and_non_thread_channels() -> None:
    platform = DiscordPlatform(_FakeClient({1: _FakeMessageable()}, {}))  # type: ignore[arg-type]

    with pytest.raises(PlatformCallError, match="not a guild channel"):
        asyncio.run(platform.get_channel(1))
    with pytest.raises(PlatformCallError, match="not a thread"):
        asyncio.run(platform.get_thread_member_ids(1))


def test_platform_permissions_resolve_member_from_guild() -> None:
    member = SimpleNamespace(id=11)
    perms = SimpleNamespace(manage_channels=True)
    seen: list[object] = []

    def permissions_for(target: object) -> SimpleNamespace:
        seen.append(target)
        return perms

    channel = SimpleNamespace(
        guild=SimpleNamespace(get_member=lambda user_id: member if user_id == 11 else None),
        permissions_for=permissions_for,
    )
    platform = DiscordPlatform(_FakeClient({}, {}))  # type: ignore[arg-type]

    result = asyncio.run(platform.permissions_for(channel, SimpleNamespace(id=11)))  # type: ignore[arg-type]

    assert result is perms
    assert seen == [member]


def test_instance_lock_replaces_stale_pid(tmp_path: Path) -> None:
    lock_path = tmp_path / "data" / "bot.pid"
    lock_path.parent.mkdir()
    lock_path.write_text("2147000000", encoding="utf-8")

    app_mod._acquire_instance_lock(lock_path)

    assert lock_path.read_text(encoding="utf-8") == str(os.getpid())
    app_mod._release_instance_lock(lock_path)
    assert not lock_path.exists()


def test_instance_lock_refuses_live_pid(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    lock_path = tmp_path / "bot.pid"
    lock_path.write_text("4242", encoding="utf-8")
    monkeypatch.setattr(app_mod, "_is_process_alive", lambda pid: pid == 4242)

    with pytest.raises(RuntimeError, match="already running"):
        app_mod._acquire_instance_lock(lock_path)

    assert lock_path.read_text(encoding="utf-8") == "4242"
