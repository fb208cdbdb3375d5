from __future__ import annotations

from typing import Awaitable, TypeVar

import discord

from ..errors import PlatformCallError

T = TypeVar("T")


async def platform_step(label: str, coro: Awaitable[T]) -> T:
    try:
        return await coro
    except discord.DiscordException as exc:
        raise PlatformCallError(f"Failed to {label}: {exc}") from exc


def channel_mention(channel_id: int) -> str:
    return f"<#{channel_id}>"
