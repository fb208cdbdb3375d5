from __future__ import annotations

import asyncio
import logging
from collections import defaultdict

import discord

from ..config import Settings
from ..linkage.registry import LinkRegistry
from .mixins.events_mixin import EventsMixin
from .mixins.lifecycle_mixin import ThreadLifecycleMixin
from .mixins.rename_mixin import RenameWorkflowMixin
from .platform import DiscordPlatform

logger = logging.getLogger("voice_thread_bot")


class VoiceThreadDiscordBot(
    EventsMixin,
    RenameWorkflowMixin,
    ThreadLifecycleMixin,
    discord.Client,
):
    def __init__(self, settings: Settings, registry: LinkRegistry | None = None) -> None:
        intents = discord.Intents.default()
        intents.members = settings.discord_members_intent
        intents.voice_states = True
        intents.guilds = True

        super().__init__(intents=intents)

        self.settings = settings
        # Lives for the process only; linkages are rebuilt as people join again.
        self.registry = registry if registry is not None else LinkRegistry()
        self.platform = DiscordPlatform(self)
        self.channel_locks: dict[int, asyncio.Lock] = defaultdict(asyncio.Lock)

    async def on_ready(self) -> None:
        if self.user:
            logger.info("Connected as %s (%s)", self.user, self.user.id)
        logger.info(
            "Watching voice category=%s, announcing in channel=%s, ignoring %s channel(s)",
            self.settings.vc_category_id,
            self.settings.thread_channel_id,
            len(self.settings.vc_ignored_channel_ids),
        )
