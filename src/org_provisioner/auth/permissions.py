"""
org_provisioner.auth.permissions

Named capabilities a caller may hold.

Responsibilities:
- Define the closed permission vocabulary carried in bearer tokens.
- Map principal types to their create/get permissions.
"""

from __future__ import annotations

import enum

from org_provisioner.directory.principal import PrincipalType


class Permission(enum.StrEnum):
    # Values are the wire names used in token claims; treat as stable API contract.
    tenant_create = "tenant-create"
    tenant_get = "tenant-get"
    domain_create = "domain-create"
    domain_get = "domain-get"
    individual_create = "individual-create"
    individual_get = "individual-get"
    group_create = "group-create"
    group_get = "group-get"
    role_create = "role-create"
    role_get = "role-get"


_CREATE: dict[PrincipalType, Permission] = {
    PrincipalType.tenant: Permission.tenant_create,
    PrincipalType.domain: Permission.domain_create,
    PrincipalType.individual: Permission.individual_create,
    PrincipalType.group: Permission.group_create,
    PrincipalType.role: Permission.role_create,
}

_GET: dict[PrincipalType, Permission] = {
    PrincipalType.tenant: Permission.tenant_get,
    PrincipalType.domain: Permission.domain_get,
    PrincipalType.individual: Permission.individual_get,
    PrincipalType.group: Permission.group_get,
    PrincipalType.role: Permission.role_get,
}


def create_permission_for(typ: PrincipalType) -> str:
    # Types without a dedicated permission fall back to "<type>-create".
    return _CREATE.get(typ, f"{typ.value}-create")


def get_permission_for(typ: PrincipalType) -> str:
    return _GET.get(typ, f"{typ.value}-get")


# --- Module Notes -----------------------------------------------------------
# Unknown permission strings in tokens are kept as-is; they simply never match.
