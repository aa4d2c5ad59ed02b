"""
org_provisioner.provisioning.records

Pure builders mapping a validated request to principal records.
"""

from __future__ import annotations

from org_provisioner.directory.principal import PrincipalField, PrincipalSet, PrincipalType
from org_provisioner.provisioning.contracts import ProvisionRequest

TENANT_ADMIN_ROLE = "tenant-admin"


def build_tenant_record(request: ProvisionRequest) -> PrincipalSet:
    tenant = PrincipalSet(typ=PrincipalType.tenant)
    tenant.set(PrincipalField.name, request.tenant_name)
    optional = (
        (PrincipalField.description, request.description),
        (PrincipalField.quota, request.quota),
        (PrincipalField.brand_name, request.brand_name),
        (PrincipalField.brand_logo_url, request.brand_logo_url),
        (PrincipalField.brand_theme, request.brand_theme),
    )
    for key, value in optional:
        if value is not None:
            tenant.set(key, value)
    return tenant


def build_domain_record(request: ProvisionRequest) -> PrincipalSet:
    return PrincipalSet(typ=PrincipalType.domain).set(PrincipalField.name, request.domain)


def build_admin_record(request: ProvisionRequest) -> PrincipalSet:
    admin = PrincipalSet(typ=PrincipalType.individual)
    admin.set(PrincipalField.name, request.admin_name)
    admin.set(PrincipalField.secrets, [request.admin_password])
    admin.set(PrincipalField.emails, [request.admin_email])
    admin.set(PrincipalField.roles, [TENANT_ADMIN_ROLE])
    return admin
