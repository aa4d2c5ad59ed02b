"""
org_provisioner.orchestrator.state

Typed state schema used by the provisioning pipeline.

Responsibilities:
- Define the contract between steps (inputs/outputs).
- Keep the new tenant id inside a single request's pipeline state.
"""

from __future__ import annotations

from typing import Annotated, Any, TypedDict

from org_provisioner.orchestrator.reducers import append_audit
from org_provisioner.provisioning.contracts import ProvisionRequest


class ProvisionState(TypedDict, total=False):
    # Input
    request: ProvisionRequest
    # Caller's own tenant (nested provisioning); None for global administrators.
    parent_tenant_id: int | None

    # Assigned ids, written by the step that created them
    tenant_id: int
    domain_id: int
    admin_id: int

    # Audit
    audit_log: Annotated[list[dict[str, Any]], append_audit]


# --- Module Notes -----------------------------------------------------------
# `total=False` because ids only appear once their step has committed.
