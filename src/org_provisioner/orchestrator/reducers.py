"""
org_provisioner.orchestrator.reducers

Reducers define how LangGraph merges partial state updates.

Why reducers:
- Each provisioning step returns only the keys it produced.
- The audit log must accumulate across steps rather than be overwritten.
"""

from __future__ import annotations

from typing import Any


def append_audit(
    left: list[dict[str, Any]] | None, right: list[dict[str, Any]] | None
) -> list[dict[str, Any]]:
    """
    Append-only reducer for audit log entries.

    Steps return `{"audit_log": [event]}` and this reducer concatenates safely.
    """

    if not left:
        return list(right or [])
    if not right:
        return list(left)
    return [*left, *right]
