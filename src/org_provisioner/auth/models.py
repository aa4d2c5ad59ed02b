"""
org_provisioner.auth.models

Auth domain models.

Responsibilities:
- Define the authenticated caller context (`AccessToken`) injected into endpoints.
"""

from __future__ import annotations

from dataclasses import dataclass

from org_provisioner.errors import PermissionDenied


@dataclass(frozen=True, slots=True)
class TenantBinding:
    """
    Tenant the caller is scoped to (tenant administrators).
    """

    id: int


@dataclass(frozen=True, slots=True)
class AccessToken:
    """
    Authenticated caller identity plus granted permissions.
    """

    subject: str
    permissions: frozenset[str]
    tenant: TenantBinding | None = None

    def assert_has_permission(self, permission: str) -> None:
        if permission not in self.permissions:
            raise PermissionDenied(str(permission))


# --- Module Notes -----------------------------------------------------------
# Keep this model minimal; it is passed through to the directory store for
# store-side permission re-checks.
