"""
org_provisioner.orchestrator.nodes

Provisioning steps executed by the pipeline graph.

Responsibilities:
- Declare the ordered steps (tenant -> domain -> admin) and their data flow.
- Build each record, submit it to the directory store, and invalidate the cache
  for the write's changed-principal set before the next step runs.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Collection
from dataclasses import dataclass
from typing import Any, Protocol

from org_provisioner.directory.principal import PrincipalSet
from org_provisioner.directory.store import DirectoryStore
from org_provisioner.orchestrator.state import ProvisionState
from org_provisioner.provisioning.contracts import ProvisionRequest
from org_provisioner.provisioning.records import (
    build_admin_record,
    build_domain_record,
    build_tenant_record,
)


class CacheInvalidator(Protocol):
    async def invalidate(self, principal_ids: Collection[int]) -> None: ...


@dataclass(frozen=True, slots=True)
class StepContext:
    # Per-request collaborators; the caller's permissions are re-checked by the store.
    store: DirectoryStore
    cache: CacheInvalidator
    permissions: frozenset[str]


@dataclass(frozen=True, slots=True)
class ProvisionStep:
    name: str
    build: Callable[[ProvisionRequest], PrincipalSet]
    # State key holding the parent id passed to the store.
    parent_key: str
    # State key receiving the assigned id.
    output_key: str
    event: str


PIPELINE: tuple[ProvisionStep, ...] = (
    ProvisionStep(
        name="create_tenant",
        build=build_tenant_record,
        parent_key="parent_tenant_id",
        output_key="tenant_id",
        event="TENANT_CREATED",
    ),
    ProvisionStep(
        name="create_domain",
        build=build_domain_record,
        parent_key="tenant_id",
        output_key="domain_id",
        event="DOMAIN_CREATED",
    ),
    ProvisionStep(
        name="create_admin",
        build=build_admin_record,
        parent_key="tenant_id",
        output_key="admin_id",
        event="ADMIN_CREATED",
    ),
)


async def run_step(step: ProvisionStep, state: ProvisionState, *, ctx: StepContext) -> dict[str, Any]:
    record = step.build(state["request"])
    parent_id = state.get(step.parent_key)  # type: ignore[misc]

    # Store errors propagate unchanged; earlier steps stay committed.
    result = await ctx.store.create_principal(record, parent_id, ctx.permissions)
    await ctx.cache.invalidate(result.changed_principals)

    return {
        step.output_key: result.id,
        "audit_log": [
            {
                "event": step.event,
                "details": {
                    "principal_id": result.id,
                    "parent_id": parent_id,
                    "changed_principals": sorted(result.changed_principals),
                },
            }
        ],
    }


def bind_step(
    step: ProvisionStep, ctx: StepContext
) -> Callable[[ProvisionState], Awaitable[dict[str, Any]]]:
    async def _wrapped(state: ProvisionState) -> dict[str, Any]:
        return await run_step(step, state, ctx=ctx)

    return _wrapped


# --- Module Notes -----------------------------------------------------------
# Steps never read ids they did not receive through state, so "stop after step N"
# is simply the graph raising out of node N+1.
