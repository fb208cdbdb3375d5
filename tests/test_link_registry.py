from __future__ import annotations

import asyncio
import sys
from pathlib import Path


PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from voice_thread_bot.linkage.registry import LinkRegistry  # noqa: E402


def test_insert_links_both_directions() -> None:
    async def scenario() -> tuple[LinkRegistry, int | None, int | None]:
        registry = LinkRegistry()
        await registry.insert(1, 500)
        return registry, await registry.lookup_thread(1), await registry.lookup_voice(500)

    registry, thread_id, voice_id = asyncio.run(scenario())

    assert thread_id == 500
    assert voice_id == 1
    assert len(registry) == 1


def test_remove_clears_both_directions_and_returns_thread() -> None:
    async def scenario() -> tuple[int | None, int | None, int | None, int | None]:
        registry = LinkRegistry()
        await registry.insert(1, 500)
        removed = await registry.remove(1)
        missing = await registry.remove(1)
        return removed, missing, await registry.lookup_thread(1), await registry.lookup_voice(500)

    removed, missing, thread_id, voice_id = asyncio.run(scenario())

    assert removed == 500
    assert missing is None
    assert thread_id is None
    assert voice_id is None


def test_lookups_on_empty_registry_are_absent() -> None:
    async def scenario() -> tuple[int | None, int | None]:
        registry = LinkRegistry()
        return await registry.lookup_thread(1), await registry.lookup_voice(1)

    assert asyncio.run(scenario()) == (None, None)


def test_reinsert_keeps_mapping_bijective() -> None:
    async def scenario() -> tuple[LinkRegistry, list[int | None]]:
        registry = LinkRegistry()
        await registry.insert(1, 500)
        await registry.insert(1, 501)
        await registry.insert(2, 501)
        lookups = [
            await registry.lookup_thread(1),
            await registry.lookup_voice(500),
            await registry.lookup_thread(2),
            await registry.lookup_voice(501),
        ]
        return registry, lookups

    registry, lookups = asyncio.run(scenario())

    assert lookups == [None, None, 501, 2]
    assert len(registry) == 1


def test_concurrent_inserts_stay_consistent() -> None:
    async def scenario() -> tuple[LinkRegistry, dict[int, tuple[int | None, int | None]]]:
        registry = LinkRegistry()
        await asyncio.gather(*(registry.insert(voice_id, 1000 + voice_id) for voice_id in range(50)))
        await asyncio.gather(*(registry.remove(voice_id) for voice_id in range(0, 50, 2)))
        pairs = {
            voice_id: (await registry.lookup_thread(voice_id), await registry.lookup_voice(1000 + voice_id))
            for voice_id in range(50)
        }
        return registry, pairs

    registry, pairs = asyncio.run(scenario())

    assert len(registry) == 25
    for voice_id, (thread_id, linked_voice) in pairs.items():
        if voice_id % 2:
            assert (thread_id, linked_voice) == (1000 + voice_id, voice_id)
        else:
            assert (thread_id, linked_voice) == (None, None)
