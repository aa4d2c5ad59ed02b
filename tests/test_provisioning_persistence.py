"""
tests.test_provisioning_persistence

Provisioning against a real SQLite directory when the database misbehaves.

Responsibilities:
- A failed directory write surfaces unchanged, with the session left usable.
- A broken audit trail never changes the outcome of provisioning.
"""

from __future__ import annotations

import json

import pytest
from sqlalchemy import text
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from org_provisioner.auth.models import AccessToken
from org_provisioner.db.repositories.audit import AuditRepo
from org_provisioner.db.repositories.principals import PrincipalRepo
from org_provisioner.directory.cache import PrincipalCache
from org_provisioner.directory.store import SqlDirectoryStore
from org_provisioner.provisioning.gate import REQUIRED_PERMISSIONS
from org_provisioner.services.provisioning_service import ProvisioningService
from tests.conftest import ACME_REQUEST

ACCESS = AccessToken(
    subject="superadmin",
    permissions=frozenset(p.value for p in REQUIRED_PERMISSIONS),
)


def _service(session: AsyncSession) -> ProvisioningService:
    return ProvisioningService(
        store=SqlDirectoryStore(session),
        cache=PrincipalCache(),
        audit=AuditRepo(session),
    )


@pytest.mark.asyncio
async def test_failed_flush_surfaces_store_error_and_failure_is_audited(
    session: AsyncSession, monkeypatch: pytest.MonkeyPatch
) -> None:
    # The address table is gone, so the admin insert fails inside the flush.
    await session.execute(text("DROP TABLE principal_emails"))
    await session.commit()

    async def _no_owner(self: PrincipalRepo, address: str) -> int | None:
        return None

    monkeypatch.setattr(PrincipalRepo, "email_owner", _no_owner)

    with pytest.raises(OperationalError, match="principal_emails"):
        await _service(session).provision(body=json.dumps(ACME_REQUEST).encode(), access=ACCESS)

    repo = PrincipalRepo(session)
    tenant = await repo.get_by_name("Acme")
    domain = await repo.get_by_name("acme.test")
    assert tenant is not None
    assert domain is not None
    assert await repo.get_by_name("Root") is None

    events = await AuditRepo(session).list_for_principal(tenant.id)
    by_type = {e.event_type: e for e in events}
    assert set(by_type) == {"TENANT_CREATED", "PROVISION_FAILED"}
    failed = by_type["PROVISION_FAILED"].details
    assert failed["error_code"] == "OperationalError"
    assert failed["committed"] == {"tenant_id": tenant.id, "domain_id": domain.id}


@pytest.mark.asyncio
async def test_missing_audit_table_does_not_stop_provisioning(session: AsyncSession) -> None:
    await session.execute(text("DROP TABLE audit_events"))
    await session.commit()

    result = await _service(session).provision(
        body=json.dumps(ACME_REQUEST).encode(), access=ACCESS
    )

    repo = PrincipalRepo(session)
    admin = await repo.get_by_name("Root")
    assert admin is not None
    assert admin.id == result.admin_id
    assert admin.tenant_id == result.tenant_id
    domain = await repo.get_by_name("acme.test")
    assert domain is not None
    assert domain.id == result.domain_id
