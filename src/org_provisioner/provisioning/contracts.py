"""
org_provisioner.provisioning.contracts

Request/response contracts for organization provisioning.

Responsibilities:
- Define the JSON shape of a provisioning request (camelCase keys).
- Define the provisioning result and its `{"data": {...}}` envelope.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ProvisionRequest(BaseModel):
    """
    Creates a tenant, its domain, and a tenant admin in one call.
    Required fields must be present (else BadParameters) and non-empty (else MissingField).
    """

    # camelCase keys only; snake_case attribute names are not accepted on the wire.
    model_config = ConfigDict(strict=True)

    # Tenant / organization
    tenant_name: str = Field(alias="tenantName")
    domain: str

    # Admin user
    admin_name: str = Field(alias="adminName")
    admin_password: str = Field(alias="adminPassword", repr=False)
    admin_email: str = Field(alias="adminEmail")

    # Optional branding
    brand_name: str | None = Field(default=None, alias="brandName")
    brand_logo_url: str | None = Field(default=None, alias="brandLogoUrl")
    brand_theme: str | None = Field(default=None, alias="brandTheme")

    description: str | None = None
    # Storage quota for the tenant, in bytes.
    quota: int | None = Field(default=None, ge=0)


class ProvisionResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    tenant_id: int = Field(alias="tenantId")
    domain_id: int = Field(alias="domainId")
    admin_id: int = Field(alias="adminId")

    def envelope(self) -> dict[str, dict[str, int]]:
        return {"data": self.model_dump(by_alias=True)}


# --- Module Notes -----------------------------------------------------------
# Unknown keys in the request body are ignored (pydantic default "ignore").
