from __future__ import annotations

import asyncio


class LinkRegistry:
    """In-memory bijection between voice channels and their companion threads.

    Both directions share one lock so inserts and removals are never observed
    half-applied. Lookups copy the value out and release the lock immediately;
    callers must not expect a lookup result to still hold after they await
    anything else.
    """

    def __init__(self) -> None:
        self._lock = asyncio.Lock()
        self._voice_to_thread: dict[int, int] = {}
        self._thread_to_voice: dict[int, int] = {}

    def __len__(self) -> int:
        return len(self._voice_to_thread)

    async def lookup_thread(self, voice_channel_id: int) -> int | None:
        async with self._lock:
            return self._voice_to_thread.get(voice_channel_id)

    async def lookup_voice(self, thread_channel_id: int) -> int | None:
        async with self._lock:
            return self._thread_to_voice.get(thread_channel_id)

    async def insert(self, voice_channel_id: int, thread_channel_id: int) -> None:
        async with self._lock:
            # Last write wins; drop stale partners so each side maps to exactly one id.
            old_thread = self._voice_to_thread.pop(voice_channel_id, None)
            if old_thread is not None:
                self._thread_to_voice.pop(old_thread, None)
            old_voice = self._thread_to_voice.pop(thread_channel_id, None)
            if old_voice is not None:
                self._voice_to_thread.pop(old_voice, None)

            self._voice_to_thread[voice_channel_id] = thread_channel_id
            self._thread_to_voice[thread_channel_id] = voice_channel_id

    async def remove(self, voice_channel_id: int) -> int | None:
        async with self._lock:
            thread_id = self._voice_to_thread.pop(voice_channel_id, None)
            if thread_id is not None:
                self._thread_to_voice.pop(thread_id, None)
            return thread_id
