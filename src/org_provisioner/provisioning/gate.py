"""
org_provisioner.provisioning.gate

Permission gate for organization provisioning.

Responsibilities:
- Assert, once and up front, every capability the whole operation needs.
"""

from __future__ import annotations

from org_provisioner.auth.models import AccessToken
from org_provisioner.auth.permissions import Permission

# Checked in this order; the first missing one is reported.
REQUIRED_PERMISSIONS: tuple[Permission, ...] = (
    Permission.tenant_create,
    Permission.domain_create,
    Permission.individual_create,
)


def authorize(access: AccessToken) -> None:
    for permission in REQUIRED_PERMISSIONS:
        access.assert_has_permission(permission)
