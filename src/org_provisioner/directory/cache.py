"""
org_provisioner.directory.cache

Read-side principal cache.

Responsibilities:
- Serve principal views by id without hitting the store on every read.
- Evict stale views when a write reports its changed-principal set.
"""

from __future__ import annotations

from collections import OrderedDict
from collections.abc import Awaitable, Callable, Iterable
from typing import Any

from org_provisioner.observability.logging import get_logger

log = get_logger(__name__)

PrincipalView = dict[str, Any]


class PrincipalCache:
    """
    Bounded in-process cache keyed by principal id (oldest entry evicted first).
    Mutations happen only between awaits, so no lock is needed.
    """

    def __init__(self, *, max_entries: int = 10_000) -> None:
        self._max_entries = max_entries
        self._entries: OrderedDict[int, PrincipalView] = OrderedDict()

    def __contains__(self, principal_id: object) -> bool:
        return principal_id in self._entries

    async def get_or_load(
        self,
        principal_id: int,
        loader: Callable[[int], Awaitable[PrincipalView | None]],
    ) -> PrincipalView | None:
        cached = self._entries.get(principal_id)
        if cached is not None:
            self._entries.move_to_end(principal_id)
            return cached

        view = await loader(principal_id)
        # Negative lookups are not cached; a principal may be created right after.
        if view is not None:
            self._entries[principal_id] = view
            while len(self._entries) > self._max_entries:
                self._entries.popitem(last=False)
        return view

    async def invalidate(self, principal_ids: Iterable[int]) -> None:
        """
        Best-effort eviction. Never raises: callers treat invalidation as fire-and-continue.
        """

        evicted = [pid for pid in principal_ids if self._entries.pop(pid, None) is not None]
        if evicted:
            log.debug("principal_cache.invalidated", principal_ids=sorted(evicted))

    def clear(self) -> None:
        self._entries.clear()


# --- Module Notes -----------------------------------------------------------
# A shared cache (e.g. Redis) can replace this class as long as it keeps the
# `invalidate` / `get_or_load` contract.
