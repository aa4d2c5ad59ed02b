"""
org_provisioner.services.provisioning_service

Organization provisioning service (operation outcome owner).

Responsibilities:
- Authorize, then validate, before any mutation.
- Execute the tenant -> domain -> admin pipeline, threading the new tenant id.
- Record each committed step in the audit trail as it happens, so partial
  failures remain visible.
- Return the three assigned ids, or propagate the first error unchanged.
"""

from __future__ import annotations

from typing import Any, Protocol

from org_provisioner.auth.models import AccessToken
from org_provisioner.directory.store import DirectoryStore
from org_provisioner.errors import ProvisioningError
from org_provisioner.observability.logging import get_logger
from org_provisioner.orchestrator.graph import build_graph
from org_provisioner.orchestrator.nodes import CacheInvalidator, StepContext
from org_provisioner.orchestrator.state import ProvisionState
from org_provisioner.provisioning.contracts import ProvisionResponse
from org_provisioner.provisioning.gate import authorize
from org_provisioner.provisioning.validation import parse_provision_request

log = get_logger(__name__)


class AuditRecorder(Protocol):
    async def record(
        self,
        *,
        principal_id: int | None,
        actor: str,
        event_type: str,
        details: dict[str, Any],
    ) -> Any: ...


class ProvisioningService:
    def __init__(
        self,
        *,
        store: DirectoryStore,
        cache: CacheInvalidator,
        audit: AuditRecorder | None = None,
    ) -> None:
        self._store = store
        self._cache = cache
        self._audit = audit

    async def provision(self, *, body: bytes | None, access: AccessToken) -> ProvisionResponse:
        authorize(access)
        request = parse_provision_request(body)

        parent_tenant_id = access.tenant.id if access.tenant is not None else None
        log.info(
            "provision.started",
            actor=access.subject,
            tenant_name=request.tenant_name,
            domain=request.domain,
            parent_tenant_id=parent_tenant_id,
        )

        graph = build_graph(
            ctx=StepContext(store=self._store, cache=self._cache, permissions=access.permissions)
        )
        state: ProvisionState = {
            "request": request,
            "parent_tenant_id": parent_tenant_id,
            "audit_log": [],
        }

        committed: dict[str, int] = {}
        try:
            async for update in graph.astream(state, stream_mode="updates"):
                if not isinstance(update, dict) or not update:
                    continue
                node_name, node_update = next(iter(update.items()))
                if not isinstance(node_update, dict):
                    continue
                await self._record_step(
                    actor=access.subject, step=node_name, update=node_update, committed=committed
                )
        except Exception as e:
            await self._record_failure(actor=access.subject, committed=committed, error=e)
            raise

        response = ProvisionResponse(
            tenant_id=committed["tenant_id"],
            domain_id=committed["domain_id"],
            admin_id=committed["admin_id"],
        )
        await self._audit_event(
            principal_id=response.tenant_id,
            actor=access.subject,
            event_type="PROVISION_COMPLETED",
            details=response.model_dump(by_alias=True),
        )
        log.info("provision.completed", actor=access.subject, **response.model_dump())
        return response

    async def _record_step(
        self,
        *,
        actor: str,
        step: str,
        update: dict[str, Any],
        committed: dict[str, int],
    ) -> None:
        for key in ("tenant_id", "domain_id", "admin_id"):
            if key in update:
                committed[key] = int(update[key])

        entries = update.get("audit_log", [])
        for entry in entries if isinstance(entries, list) else []:
            details = dict(entry.get("details", {}))
            log.info("provision.step_committed", actor=actor, step=step, **details)
            await self._audit_event(
                principal_id=details.get("principal_id"),
                actor=actor,
                event_type=str(entry.get("event", "UNKNOWN")),
                details={"step": step, **details},
            )

    async def _record_failure(
        self, *, actor: str, committed: dict[str, int], error: Exception
    ) -> None:
        code = error.code if isinstance(error, ProvisioningError) else type(error).__name__
        # Committed steps are not rolled back; the ids below remain persisted.
        log.warning("provision.failed", actor=actor, error_code=code, committed=committed)
        await self._audit_event(
            principal_id=committed.get("tenant_id"),
            actor=actor,
            event_type="PROVISION_FAILED",
            details={"error_code": code, "error": str(error), "committed": dict(committed)},
        )

    async def _audit_event(
        self,
        *,
        principal_id: int | None,
        actor: str,
        event_type: str,
        details: dict[str, Any],
    ) -> None:
        if self._audit is None:
            return
        # The audit trail observes the operation; it never decides its outcome.
        try:
            await self._audit.record(
                principal_id=principal_id, actor=actor, event_type=event_type, details=details
            )
        except Exception:
            log.exception(
                "provision.audit_failed", event_type=event_type, principal_id=principal_id
            )


# --- Module Notes -----------------------------------------------------------
# No compensation is attempted on failure: the store offers no multi-record
# transaction, and each step's write is already visible (cache invalidated).
