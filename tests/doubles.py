"""
tests.doubles

In-memory collaborators for exercising the provisioning pipeline without a DB.

Responsibilities:
- Record every store and cache call, in order, into one shared event list.
- Fail a chosen creation step (or every audit write) with a chosen error.
"""

from __future__ import annotations

from collections.abc import Collection
from typing import Any

from org_provisioner.directory.principal import CreationResult, PrincipalSet, PrincipalType


class FakeStore:
    def __init__(
        self,
        events: list[tuple[Any, ...]],
        *,
        fail_on: PrincipalType | None = None,
        error: Exception | None = None,
        first_id: int = 100,
    ) -> None:
        self.events = events
        self.fail_on = fail_on
        self.error = error
        self.records: dict[int, tuple[PrincipalSet, int | None]] = {}
        self.permissions_seen: list[Collection[str] | None] = []
        self._next_id = first_id

    @property
    def create_calls(self) -> list[tuple[Any, ...]]:
        return [e for e in self.events if e[0] == "create"]

    async def create_principal(
        self,
        record: PrincipalSet,
        parent_id: int | None = None,
        permissions: Collection[str] | None = None,
    ) -> CreationResult:
        self.events.append(("create", record.typ, parent_id))
        self.permissions_seen.append(permissions)
        if self.fail_on == record.typ:
            raise self.error or RuntimeError("store failure")

        principal_id = self._next_id
        self._next_id += 1
        self.records[principal_id] = (record, parent_id)

        changed = {principal_id}
        if parent_id is not None:
            changed.add(parent_id)
        return CreationResult(id=principal_id, changed_principals=frozenset(changed))

    async def get_principal(self, principal_id: int) -> dict[str, Any] | None:
        found = self.records.get(principal_id)
        if found is None:
            return None
        record, parent_id = found
        return {"id": principal_id, "tenantId": parent_id, **record.to_json()}


class FakeCache:
    def __init__(self, events: list[tuple[Any, ...]]) -> None:
        self.events = events

    async def invalidate(self, principal_ids: Collection[int]) -> None:
        self.events.append(("invalidate", frozenset(principal_ids)))


class FakeAudit:
    def __init__(self, *, error: Exception | None = None) -> None:
        self.error = error
        self.attempted: list[str] = []

    async def record(
        self,
        *,
        principal_id: int | None,
        actor: str,
        event_type: str,
        details: dict[str, Any],
    ) -> None:
        self.attempted.append(event_type)
        if self.error is not None:
            raise self.error
