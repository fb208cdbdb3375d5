from __future__ import annotations

from typing import Any, Iterator, Mapping

import discord

# Custom ids are the wire contract with buttons/modals already posted in Discord.
# Changing them orphans every welcome message sent before the change.
RENAME_BUTTON_ID = "rename_button"
RENAME_MODAL_ID = "rename_title"
RENAME_INPUT_ID = "rename_text"

CHANNEL_NAME_LIMIT = 100

RENAME_BUTTON_LABEL = "📝 Rename channel"
RENAME_MODAL_TITLE = "✏️ Rename channel"
RENAME_INPUT_LABEL = "What is this voice chat about?"
RENAME_INPUT_PLACEHOLDER = "Fortnite, word chain, karaoke, ..."

NOT_LINKED_TEXT = "❌ That voice channel no longer exists."
UNAUTHORIZED_TEXT = "❌ Only the voice channel's owner can rename it."
RENAMED_TEXT = "✅ Channel name updated."
GENERIC_FAILURE_TEXT = "Something went wrong. Please try again."


def thread_name_for(channel_name: str) -> str:
    name = " ".join(channel_name.split())
    return name[:CHANNEL_NAME_LIMIT] or "voice chat"


def created_announcement(member_mention: str, voice_mention: str) -> str:
    return f"{member_mention} started a new voice chat.\nJoin the VC → {voice_mention}"


def voice_chat_pointer(thread_mention: str) -> str:
    return f"Voice chat → {thread_mention}"


def welcome_text(member_mention: str, channel_name: str) -> str:
    return (
        f"{member_mention} welcome to `{channel_name}`.\n"
        "Give the channel a catchy name so everyone wants to join!"
    )


def joined_text(member_mention: str) -> str:
    return f"{member_mention} joined."


def build_rename_view() -> discord.ui.View:
    view = discord.ui.View(timeout=None)
    view.add_item(
        discord.ui.Button(
            label=RENAME_BUTTON_LABEL,
            style=discord.ButtonStyle.success,
            custom_id=RENAME_BUTTON_ID,
        )
    )
    return view


class RenameChannelModal(discord.ui.Modal):
    """Modal shell only; submissions are handled by the client's on_interaction."""

    def __init__(self) -> None:
        super().__init__(title=RENAME_MODAL_TITLE, custom_id=RENAME_MODAL_ID)
        self.channel_name = discord.ui.TextInput(
            label=RENAME_INPUT_LABEL,
            placeholder=RENAME_INPUT_PLACEHOLDER,
            style=discord.TextStyle.short,
            custom_id=RENAME_INPUT_ID,
            max_length=CHANNEL_NAME_LIMIT,
        )
        self.add_item(self.channel_name)


def interaction_custom_id(data: Mapping[str, Any] | None) -> str:
    if not data:
        return ""
    return str(data.get("custom_id") or "")


def _iter_modal_fields(data: Mapping[str, Any]) -> Iterator[Mapping[str, Any]]:
    for row in data.get("components") or []:
        if not isinstance(row, Mapping):
            continue
        children = row.get("components")
        if children is None:
            # Label components wrap a single child instead of an action row.
            child = row.get("component")
            children = [child] if child is not None else [row]
        for child in children:
            if isinstance(child, Mapping):
                yield child


def extract_modal_value(data: Mapping[str, Any] | None, custom_id: str) -> str | None:
    if not data:
        return None
    for field in _iter_modal_fields(data):
        if field.get("custom_id") == custom_id:
            value = field.get("value")
            return None if value is None else str(value)
    return None
