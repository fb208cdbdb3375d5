from __future__ import annotations

import logging

import discord

from ..common import channel_mention, platform_step
from ..messages import (
    build_rename_view,
    created_announcement,
    joined_text,
    thread_name_for,
    voice_chat_pointer,
    welcome_text,
)

logger = logging.getLogger("voice_thread_bot")


class ThreadLifecycleMixin:
    async def create_or_announce_thread(self, voice_channel_id: int, member: discord.Member) -> None:
        # Per-VC lock closes the first-join race: a second joiner waits and then
        # sees the linkage instead of creating a duplicate thread.
        async with self.channel_locks[voice_channel_id]:
            thread_id = await self.registry.lookup_thread(voice_channel_id)
            if thread_id is not None:
                await self._announce_join(thread_id, member)
                return
            await self._create_thread(voice_channel_id, member)

    async def _announce_join(self, thread_id: int, member: discord.Member) -> None:
        member_ids = await platform_step(
            "fetch thread members",
            self.platform.get_thread_member_ids(thread_id),
        )
        if int(member.id) in member_ids:
            return
        await platform_step(
            "send join message",
            self.platform.send_message(thread_id, joined_text(member.mention)),
        )

    async def _create_thread(self, voice_channel_id: int, member: discord.Member) -> None:
        channel_name = await self._voice_channel_name(voice_channel_id)

        announcement = await platform_step(
            "send creation announcement",
            self.platform.send_message(
                self.settings.thread_channel_id,
                created_announcement(member.mention, channel_mention(voice_channel_id)),
                allowed_mentions=discord.AllowedMentions(users=False),
            ),
        )
        thread = await platform_step(
            "create thread",
            self.platform.create_public_thread(
                announcement,
                thread_name_for(channel_name),
                auto_archive_minutes=self.settings.thread_auto_archive_minutes,
            ),
        )
        await platform_step(
            "send voice chat pointer",
            self.platform.send_message(voice_channel_id, voice_chat_pointer(thread.mention)),
        )
        welcome_view = build_rename_view()
        try:
            await platform_step(
                "send welcome message",
                self.platform.send_message(
                    thread.id,
                    welcome_text(member.mention, channel_name),
                    view=welcome_view,
                ),
            )
        finally:
            # Presses are routed by custom_id in on_interaction; drop the view from the client's store.
            welcome_view.stop()

        await self.registry.insert(voice_channel_id, thread.id)
        logger.info(
            "Created thread=%s for voice channel=%s (started by user=%s)",
            thread.id,
            voice_channel_id,
            member.id,
        )

    async def _voice_channel_name(self, voice_channel_id: int) -> str:
        try:
            name = await self.platform.get_channel_name(voice_channel_id)
        except discord.DiscordException as exc:
            logger.warning("Could not read name of voice channel=%s: %s", voice_channel_id, exc)
            name = ""
        return name or self.settings.unknown_channel_name

    async def archive_thread(self, voice_channel_id: int) -> None:
        # Waits for an in-flight creation so its linkage is removed too.
        # The linkage stays dropped even if the archive call below fails.
        async with self.channel_locks[voice_channel_id]:
            thread_id = await self.registry.remove(voice_channel_id)
        self.channel_locks.pop(voice_channel_id, None)
        if thread_id is None:
            return

        await platform_step(
            "archive thread",
            self.platform.edit_thread(thread_id, archived=True),
        )
        logger.info("Archived thread=%s for deleted voice channel=%s", thread_id, voice_channel_id)

    async def rename_thread(self, voice_channel_id: int) -> None:
        thread_id = await self.registry.lookup_thread(voice_channel_id)
        if thread_id is None:
            return

        channel_name = await self._voice_channel_name(voice_channel_id)
        await platform_step(
            "rename thread",
            self.platform.edit_thread(thread_id, name=thread_name_for(channel_name)),
        )
