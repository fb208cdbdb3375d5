from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Set

from dotenv import load_dotenv


load_dotenv()

THREAD_AUTO_ARCHIVE_CHOICES = (60, 1440, 4320, 10080)


def _env_lookup(name: str, aliases: tuple[str, ...] = ()) -> str | None:
    for key in (name, *aliases):
        # Be tolerant to UTF-8 BOM accidentally saved in .env key names.
        for candidate in (key, f"\ufeff{key}"):
            raw = os.getenv(candidate)
            if raw is not None:
                return raw
    return None


def _env_bool(name: str, default: bool, aliases: tuple[str, ...] = ()) -> bool:
    raw = _env_lookup(name, aliases)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_int(name: str, default: int, aliases: tuple[str, ...] = ()) -> int:
    raw = _env_lookup(name, aliases)
    if raw is None:
        return default
    try:
        return int(raw.strip())
    except ValueError:
        return default


def _env_id_set(name: str, aliases: tuple[str, ...] = ()) -> Set[int]:
    raw = (_env_lookup(name, aliases) or "").strip()
    if not raw:
        return set()
    result: Set[int] = set()
    for chunk in raw.split(","):
        value = chunk.strip()
        if not value:
            continue
        try:
            result.add(int(value))
        except ValueError:
            continue
    return result


def _clean_token(value: str) -> str:
    cleaned = value.strip()
    if cleaned.lower().startswith("bot "):
        cleaned = cleaned[4:].strip()
    if (cleaned.startswith('"') and cleaned.endswith('"')) or (
        cleaned.startswith("'") and cleaned.endswith("'")
    ):
        cleaned = cleaned[1:-1].strip()
    return cleaned


def _env_str(name: str, default: str, aliases: tuple[str, ...] = ()) -> str:
    raw = _env_lookup(name, aliases)
    if raw is None:
        return default
    value = raw.strip()
    return value if value else default


@dataclass(slots=True)
class Settings:
    discord_token: str
    vc_category_id: int
    thread_channel_id: int
    vc_ignored_channel_ids: Set[int] = field(default_factory=set)
    discord_members_intent: bool = True

    thread_auto_archive_minutes: int = 1440
    unknown_channel_name: str = "unknown channel"

    log_level: str = "INFO"
    pid_path: Path = Path("./data/voice_thread_bot.pid")

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            discord_token=_clean_token(_env_lookup("DISCORD_TOKEN") or ""),
            vc_category_id=_env_int("VC_CATEGORY_ID", 0, aliases=("DISCORD_VC_CATEGORY",)),
            thread_channel_id=_env_int("THREAD_CHANNEL_ID", 0, aliases=("DISCORD_THREAD_CHANNEL",)),
            vc_ignored_channel_ids=_env_id_set("VC_IGNORED_CHANNEL_IDS", aliases=("DISCORD_VC_IGNORED_CHANNELS",)),
            discord_members_intent=_env_bool("DISCORD_MEMBERS_INTENT", True),
            thread_auto_archive_minutes=_env_int("THREAD_AUTO_ARCHIVE_MINUTES", 1440),
            unknown_channel_name=_env_str("UNKNOWN_CHANNEL_NAME", "unknown channel"),
            log_level=_env_str("LOG_LEVEL", "INFO").upper(),
            pid_path=Path(_env_str("PID_FILE", "./data/voice_thread_bot.pid")).expanduser(),
        )

    def validate(self) -> None:
        if not self.discord_token:
            raise ValueError("DISCORD_TOKEN is required")
        if self.discord_token == "put_your_discord_bot_token_here":
            raise ValueError("DISCORD_TOKEN is still placeholder")

        if self.vc_category_id <= 0:
            raise ValueError("VC_CATEGORY_ID is required and must be a channel id")
        if self.thread_channel_id <= 0:
            raise ValueError("THREAD_CHANNEL_ID is required and must be a channel id")

        if self.thread_auto_archive_minutes not in THREAD_AUTO_ARCHIVE_CHOICES:
            choices = ", ".join(str(item) for item in THREAD_AUTO_ARCHIVE_CHOICES)
            raise ValueError(f"THREAD_AUTO_ARCHIVE_MINUTES must be one of: {choices}")
        if not self.unknown_channel_name.strip():
            raise ValueError("UNKNOWN_CHANNEL_NAME cannot be empty")
        if not isinstance(logging.getLevelName(self.log_level), int):
            raise ValueError(f"LOG_LEVEL is not a logging level: {self.log_level}")
