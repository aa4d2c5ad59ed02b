"""
org_provisioner.provisioning.validation

Request validation for organization provisioning.

Responsibilities:
- Deserialize raw request bytes into a `ProvisionRequest`.
- Reject empty required fields in a fixed order, before any side effect.
"""

from __future__ import annotations

from pydantic import ValidationError

from org_provisioner.errors import BadParameters, MissingField
from org_provisioner.provisioning.contracts import ProvisionRequest

# (attribute, wire name) in the order they are checked.
REQUIRED_FIELDS: tuple[tuple[str, str], ...] = (
    ("tenant_name", "tenantName"),
    ("domain", "domain"),
    ("admin_name", "adminName"),
    ("admin_password", "adminPassword"),
    ("admin_email", "adminEmail"),
)


def parse_provision_request(body: bytes | None) -> ProvisionRequest:
    try:
        request = ProvisionRequest.model_validate_json(body or b"")
    except ValidationError as e:
        raise BadParameters(_describe(e)) from e

    # First empty field wins; later fields are not inspected.
    for attr, wire_name in REQUIRED_FIELDS:
        if not getattr(request, attr):
            raise MissingField(wire_name)
    return request


def _describe(error: ValidationError) -> str:
    first = error.errors()[0]
    loc = ".".join(str(part) for part in first.get("loc", ()))
    if loc:
        return f"Invalid request body: {loc}: {first.get('msg', 'invalid')}"
    return f"Invalid request body: {first.get('msg', 'invalid')}"
