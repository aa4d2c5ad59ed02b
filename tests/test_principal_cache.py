from __future__ import annotations

from typing import Any

import pytest

from org_provisioner.directory.cache import PrincipalCache


class CountingLoader:
    def __init__(self, known: set[int]) -> None:
        self.known = known
        self.calls: list[int] = []

    async def __call__(self, principal_id: int) -> dict[str, Any] | None:
        self.calls.append(principal_id)
        if principal_id not in self.known:
            return None
        return {"id": principal_id, "name": f"p{principal_id}"}


@pytest.mark.asyncio
async def test_get_or_load_caches_hits_only() -> None:
    cache = PrincipalCache()
    loader = CountingLoader({1})

    assert (await cache.get_or_load(1, loader))["name"] == "p1"
    assert (await cache.get_or_load(1, loader))["name"] == "p1"
    assert await cache.get_or_load(2, loader) is None
    assert await cache.get_or_load(2, loader) is None

    assert loader.calls == [1, 2, 2]
    assert 1 in cache
    assert 2 not in cache


@pytest.mark.asyncio
async def test_invalidate_evicts_and_tolerates_unknown_ids() -> None:
    cache = PrincipalCache()
    loader = CountingLoader({1, 2, 3})
    for pid in (1, 2, 3):
        await cache.get_or_load(pid, loader)

    await cache.invalidate({1, 3, 42})

    assert 1 not in cache
    assert 3 not in cache
    assert 2 in cache
    await cache.get_or_load(1, loader)
    assert loader.calls == [1, 2, 3, 1]


@pytest.mark.asyncio
async def test_oldest_entry_is_evicted_first() -> None:
    cache = PrincipalCache(max_entries=2)
    loader = CountingLoader({1, 2, 3})

    await cache.get_or_load(1, loader)
    await cache.get_or_load(2, loader)
    # Touch 1 so 2 becomes the oldest.
    await cache.get_or_load(1, loader)
    await cache.get_or_load(3, loader)

    assert 1 in cache
    assert 2 not in cache
    assert 3 in cache

    cache.clear()
    assert 1 not in cache
    assert 3 not in cache
