from __future__ import annotations

from typing import Any

import discord

from ..config import Settings


def is_managed_voice_channel(channel: Any, settings: Settings) -> bool:
    if channel is None:
        return False
    if getattr(channel, "type", None) != discord.ChannelType.voice:
        return False

    # Category id is the parent id for channels that sit under a category.
    parent_id = getattr(channel, "category_id", None)
    if parent_id is None:
        return False
    if int(parent_id) != settings.vc_category_id:
        return False

    return int(getattr(channel, "id", 0) or 0) not in settings.vc_ignored_channel_ids
