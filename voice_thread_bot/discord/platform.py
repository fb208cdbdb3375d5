from __future__ import annotations

import logging
from typing import Any

import discord

from ..errors import PlatformCallError

logger = logging.getLogger("voice_thread_bot")


class DiscordPlatform:
    """The handful of Discord REST operations the linkage logic needs.

    Channel lookups go through the client cache first and fall back to a REST
    fetch. Errors are raised as discord.py exceptions; callers add context.
    """

    def __init__(self, client: discord.Client) -> None:
        self.client = client

    async def _resolve_channel(self, channel_id: int) -> Any:
        channel = self.client.get_channel(channel_id)
        if channel is None:
            logger.debug("Channel %s not cached; fetching", channel_id)
            channel = await self.client.fetch_channel(channel_id)
        return channel

    async def get_channel(self, channel_id: int) -> discord.abc.GuildChannel:
        channel = await self._resolve_channel(channel_id)
        if not isinstance(channel, discord.abc.GuildChannel):
            raise PlatformCallError(f"channel {channel_id} is not a guild channel")
        return channel

    async def get_channel_name(self, channel_id: int) -> str:
        channel = await self._resolve_channel(channel_id)
        return str(getattr(channel, "name", "") or "")

    async def get_thread_member_ids(self, thread_id: int) -> list[int]:
        thread = await self._resolve_channel(thread_id)
        if not isinstance(thread, discord.Thread):
            raise PlatformCallError(f"channel {thread_id} is not a thread")
        members = await thread.fetch_members()
        return [int(member.id) for member in members]

    async def send_message(
        self,
        channel_id: int,
        content: str,
        *,
        allowed_mentions: discord.AllowedMentions | None = None,
        view: discord.ui.View | None = None,
    ) -> discord.Message:
        channel = await self._resolve_channel(channel_id)
        kwargs: dict[str, Any] = {}
        if allowed_mentions is not None:
            kwargs["allowed_mentions"] = allowed_mentions
        if view is not None:
            kwargs["view"] = view
        return await channel.send(content, **kwargs)

    async def create_public_thread(
        self,
        message: discord.Message,
        name: str,
        *,
        auto_archive_minutes: int,
    ) -> discord.Thread:
        # Threads started from a message in a text channel are always public.
        return await message.create_thread(name=name, auto_archive_duration=auto_archive_minutes)

    async def edit_thread(
        self,
        thread_id: int,
        *,
        archived: bool | None = None,
        name: str | None = None,
    ) -> None:
        thread = await self._resolve_channel(thread_id)
        kwargs: dict[str, Any] = {}
        if archived is not None:
            kwargs["archived"] = archived
        if name is not None:
            kwargs["name"] = name
        if not kwargs:
            return
        await thread.edit(**kwargs)

    async def edit_channel(self, channel_id: int, *, name: str) -> None:
        channel = await self.get_channel(channel_id)
        await channel.edit(name=name)

    async def permissions_for(self, channel: discord.abc.GuildChannel, user: Any) -> discord.Permissions:
        member = user
        if not isinstance(member, discord.Member):
            guild = channel.guild
            member = guild.get_member(int(user.id)) or await guild.fetch_member(int(user.id))
        return channel.permissions_for(member)

    async def respond_message(self, interaction: discord.Interaction, content: str, *, ephemeral: bool = True) -> None:
        await interaction.response.send_message(content, ephemeral=ephemeral)

    async def respond_modal(self, interaction: discord.Interaction, modal: discord.ui.Modal) -> None:
        await interaction.response.send_modal(modal)
