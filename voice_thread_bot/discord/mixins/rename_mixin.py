from __future__ import annotations

import logging

import discord

from ...errors import MalformedInteractionError, NotLinkedError, PlatformCallError, UnauthorizedError
from ..common import platform_step
from ..messages import (
    CHANNEL_NAME_LIMIT,
    NOT_LINKED_TEXT,
    RENAME_INPUT_ID,
    RENAMED_TEXT,
    UNAUTHORIZED_TEXT,
    RenameChannelModal,
    extract_modal_value,
)

logger = logging.getLogger("voice_thread_bot")


class RenameWorkflowMixin:
    """Rename button -> modal -> channel edit.

    Nothing is remembered between the two steps. Both the button press and the
    modal submit re-resolve the voice channel from the thread the interaction
    came from and re-check the user's permissions, so a user who loses
    Manage Channels after opening the dialog cannot complete the rename.
    """

    async def _resolve_linked_voice_channel(self, thread_id: int) -> discord.abc.GuildChannel:
        voice_channel_id = await self.registry.lookup_voice(thread_id)
        if voice_channel_id is None:
            raise NotLinkedError(f"thread={thread_id} has no linked voice channel")
        try:
            return await self.platform.get_channel(voice_channel_id)
        except (discord.DiscordException, PlatformCallError) as exc:
            raise NotLinkedError(f"voice channel={voice_channel_id} is unavailable") from exc

    async def _authorize_rename(self, interaction: discord.Interaction) -> discord.abc.GuildChannel:
        channel = await self._resolve_linked_voice_channel(int(interaction.channel_id or 0))
        permissions = await platform_step(
            "read voice channel permissions",
            self.platform.permissions_for(channel, interaction.user),
        )
        if not permissions.manage_channels:
            raise UnauthorizedError(f"user={interaction.user.id} cannot manage channel={channel.id}")
        return channel

    async def _gate_rename(self, interaction: discord.Interaction) -> discord.abc.GuildChannel | None:
        try:
            return await self._authorize_rename(interaction)
        except NotLinkedError as exc:
            logger.info("Rename refused: %s", exc)
            reply = NOT_LINKED_TEXT
        except UnauthorizedError as exc:
            logger.info("Rename refused: %s", exc)
            reply = UNAUTHORIZED_TEXT
        await platform_step(
            "send rename refusal",
            self.platform.respond_message(interaction, reply, ephemeral=True),
        )
        return None

    async def handle_rename_button(self, interaction: discord.Interaction) -> None:
        channel = await self._gate_rename(interaction)
        if channel is None:
            return
        await platform_step(
            "open rename dialog",
            self.platform.respond_modal(interaction, RenameChannelModal()),
        )

    async def handle_rename_submit(self, interaction: discord.Interaction) -> None:
        channel = await self._gate_rename(interaction)
        if channel is None:
            return

        value = extract_modal_value(interaction.data, RENAME_INPUT_ID)
        if value is None or not value.strip():
            raise MalformedInteractionError("expected input not found")
        new_name = value.strip()[:CHANNEL_NAME_LIMIT]

        await platform_step(
            "rename voice channel",
            self.platform.edit_channel(channel.id, name=new_name),
        )
        logger.info("User=%s renamed voice channel=%s to %r", interaction.user.id, channel.id, new_name)
        await platform_step(
            "send rename confirmation",
            self.platform.respond_message(interaction, RENAMED_TEXT, ephemeral=True),
        )
