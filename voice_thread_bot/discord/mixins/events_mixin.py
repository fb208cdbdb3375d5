from __future__ import annotations

import contextlib
import logging

import discord

from ..classifier import is_managed_voice_channel
from ..messages import GENERIC_FAILURE_TEXT, RENAME_BUTTON_ID, RENAME_MODAL_ID, interaction_custom_id

logger = logging.getLogger("voice_thread_bot")


class EventsMixin:
    async def on_interaction(self, interaction: discord.Interaction) -> None:
        custom_id = interaction_custom_id(interaction.data)
        if interaction.type == discord.InteractionType.component and custom_id == RENAME_BUTTON_ID:
            handler = self.handle_rename_button
        elif interaction.type == discord.InteractionType.modal_submit and custom_id == RENAME_MODAL_ID:
            handler = self.handle_rename_submit
        else:
            return

        try:
            await handler(interaction)
        except Exception as exc:
            logger.exception("Interaction %s failed in channel=%s: %s", custom_id, interaction.channel_id, exc)
            if not interaction.response.is_done():
                with contextlib.suppress(Exception):
                    await self.platform.respond_message(interaction, GENERIC_FAILURE_TEXT, ephemeral=True)

    async def on_guild_channel_delete(self, channel: discord.abc.GuildChannel) -> None:
        if not is_managed_voice_channel(channel, self.settings):
            return
        try:
            await self.archive_thread(channel.id)
        except Exception as exc:
            logger.exception("Failed to archive thread for voice channel=%s: %s", channel.id, exc)

    async def on_guild_channel_update(
        self,
        before: discord.abc.GuildChannel,
        after: discord.abc.GuildChannel,
    ) -> None:
        if not is_managed_voice_channel(after, self.settings):
            return
        try:
            await self.rename_thread(after.id)
        except Exception as exc:
            logger.exception("Failed to rename thread for voice channel=%s: %s", after.id, exc)

    async def on_voice_state_update(
        self,
        member: discord.Member,
        before: discord.VoiceState,
        after: discord.VoiceState,
    ) -> None:
        channel = getattr(after, "channel", None)
        if channel is None or member is None:
            return
        if not is_managed_voice_channel(channel, self.settings):
            return
        try:
            await self.create_or_announce_thread(channel.id, member)
        except Exception as exc:
            logger.exception(
                "Failed to create/announce thread for voice channel=%s user=%s: %s",
                channel.id,
                getattr(member, "id", "?"),
                exc,
            )
