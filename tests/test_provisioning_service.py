from __future__ import annotations

import json
from typing import Any

import pytest

from org_provisioner.auth.models import AccessToken, TenantBinding
from org_provisioner.directory.principal import PrincipalField, PrincipalType
from org_provisioner.errors import (
    BadParameters,
    DuplicatePrincipal,
    MissingField,
    PermissionDenied,
)
from org_provisioner.provisioning.gate import REQUIRED_PERMISSIONS
from org_provisioner.provisioning.validation import REQUIRED_FIELDS
from org_provisioner.services.provisioning_service import ProvisioningService
from tests.conftest import ACME_REQUEST
from tests.doubles import FakeAudit, FakeCache, FakeStore

FULL = frozenset(p.value for p in REQUIRED_PERMISSIONS)


def _access(permissions: frozenset[str] = FULL, tenant_id: int | None = None) -> AccessToken:
    return AccessToken(
        subject="superadmin",
        permissions=permissions,
        tenant=TenantBinding(id=tenant_id) if tenant_id is not None else None,
    )


def _body(**overrides: Any) -> bytes:
    return json.dumps({**ACME_REQUEST, **overrides}).encode()


def _service(events: list, **store_kwargs: Any) -> tuple[ProvisioningService, FakeStore]:
    store = FakeStore(events, **store_kwargs)
    return ProvisioningService(store=store, cache=FakeCache(events)), store


@pytest.mark.asyncio
async def test_creates_tenant_domain_admin_in_order_with_parent_threading() -> None:
    events: list = []
    service, store = _service(events, first_id=7)

    result = await service.provision(body=_body(), access=_access())

    assert result.tenant_id == 7
    assert result.domain_id == 8
    assert result.admin_id == 9
    assert store.create_calls == [
        ("create", PrincipalType.tenant, None),
        ("create", PrincipalType.domain, 7),
        ("create", PrincipalType.individual, 7),
    ]
    assert store.permissions_seen == [FULL, FULL, FULL]


@pytest.mark.asyncio
async def test_cache_invalidated_after_each_creation_before_the_next() -> None:
    events: list = []
    service, _ = _service(events, first_id=1)

    await service.provision(body=_body(), access=_access())

    assert events == [
        ("create", PrincipalType.tenant, None),
        ("invalidate", frozenset({1})),
        ("create", PrincipalType.domain, 1),
        ("invalidate", frozenset({2, 1})),
        ("create", PrincipalType.individual, 1),
        ("invalidate", frozenset({3, 1})),
    ]


@pytest.mark.asyncio
async def test_acme_scenario_ids_distinct_and_admin_has_tenant_admin_role() -> None:
    events: list = []
    service, store = _service(events)

    result = await service.provision(body=_body(), access=_access())

    ids = [result.tenant_id, result.domain_id, result.admin_id]
    assert len(set(ids)) == 3
    assert all(i > 0 for i in ids)
    assert result.envelope() == {
        "data": {"tenantId": ids[0], "domainId": ids[1], "adminId": ids[2]}
    }

    admin, parent = store.records[result.admin_id]
    assert admin.get_list(PrincipalField.roles) == ["tenant-admin"]
    assert parent == result.tenant_id


@pytest.mark.asyncio
async def test_tenant_bound_caller_provisions_nested_tenant() -> None:
    events: list = []
    service, store = _service(events, first_id=50)

    result = await service.provision(body=_body(), access=_access(tenant_id=3))

    assert store.create_calls[0] == ("create", PrincipalType.tenant, 3)
    # Dependent records hang off the new tenant, not the caller's.
    assert store.create_calls[1] == ("create", PrincipalType.domain, result.tenant_id)
    assert store.create_calls[2] == ("create", PrincipalType.individual, result.tenant_id)
    assert events[1] == ("invalidate", frozenset({50, 3}))


@pytest.mark.asyncio
@pytest.mark.parametrize("attr, wire_name", REQUIRED_FIELDS)
async def test_missing_field_makes_no_store_calls(attr: str, wire_name: str) -> None:
    events: list = []
    service, _ = _service(events)

    with pytest.raises(MissingField) as exc:
        await service.provision(body=_body(**{wire_name: ""}), access=_access())

    assert exc.value.field == wire_name
    assert events == []


@pytest.mark.asyncio
@pytest.mark.parametrize("missing", sorted(FULL))
async def test_missing_permission_makes_no_store_calls(missing: str) -> None:
    events: list = []
    service, _ = _service(events)

    with pytest.raises(PermissionDenied) as exc:
        await service.provision(body=_body(), access=_access(FULL - {missing}))

    assert exc.value.permission == missing
    assert events == []


@pytest.mark.asyncio
async def test_permission_checked_before_body_validation() -> None:
    events: list = []
    service, _ = _service(events)

    # Both invalid body and missing permission: the permission error wins.
    with pytest.raises(PermissionDenied):
        await service.provision(body=b"{not json", access=_access(frozenset()))
    with pytest.raises(PermissionDenied):
        await service.provision(body=_body(tenantName=""), access=_access(frozenset()))
    assert events == []


@pytest.mark.asyncio
async def test_bad_body_with_full_permissions_makes_no_store_calls() -> None:
    events: list = []
    service, _ = _service(events)

    with pytest.raises(BadParameters):
        await service.provision(body=b"{not json", access=_access())
    with pytest.raises(BadParameters):
        await service.provision(body=None, access=_access())
    assert events == []


@pytest.mark.asyncio
async def test_domain_failure_keeps_tenant_and_skips_admin() -> None:
    events: list = []
    error = DuplicatePrincipal("acme.test")
    service, store = _service(events, fail_on=PrincipalType.domain, error=error, first_id=1)

    with pytest.raises(DuplicatePrincipal) as exc:
        await service.provision(body=_body(), access=_access())

    # Propagated verbatim.
    assert exc.value is error
    assert events == [
        ("create", PrincipalType.tenant, None),
        ("invalidate", frozenset({1})),
        ("create", PrincipalType.domain, 1),
    ]
    # Tenant stays created and readable.
    tenant = await store.get_principal(1)
    assert tenant is not None
    assert tenant["type"] == "tenant"
    assert tenant["name"] == "Acme"


@pytest.mark.asyncio
async def test_tenant_failure_stops_everything() -> None:
    events: list = []
    service, store = _service(events, fail_on=PrincipalType.tenant, error=RuntimeError("boom"))

    with pytest.raises(RuntimeError, match="boom"):
        await service.provision(body=_body(), access=_access())

    assert events == [("create", PrincipalType.tenant, None)]
    assert store.records == {}


@pytest.mark.asyncio
async def test_admin_failure_leaves_tenant_and_domain() -> None:
    events: list = []
    error = PermissionDenied("individual-create")
    service, store = _service(events, fail_on=PrincipalType.individual, error=error, first_id=1)

    with pytest.raises(PermissionDenied):
        await service.provision(body=_body(), access=_access())

    assert sorted(store.records) == [1, 2]
    assert events[-1] == ("create", PrincipalType.individual, 1)
    assert ("invalidate", frozenset({2, 1})) in events


@pytest.mark.asyncio
async def test_failing_audit_writes_do_not_abort_the_pipeline() -> None:
    events: list = []
    store = FakeStore(events, first_id=1)
    audit = FakeAudit(error=RuntimeError("audit table unavailable"))
    service = ProvisioningService(store=store, cache=FakeCache(events), audit=audit)

    result = await service.provision(body=_body(), access=_access())

    assert (result.tenant_id, result.domain_id, result.admin_id) == (1, 2, 3)
    assert [c[1] for c in store.create_calls] == [
        PrincipalType.tenant,
        PrincipalType.domain,
        PrincipalType.individual,
    ]
    assert audit.attempted == [
        "TENANT_CREATED",
        "DOMAIN_CREATED",
        "ADMIN_CREATED",
        "PROVISION_COMPLETED",
    ]


@pytest.mark.asyncio
async def test_failing_audit_write_keeps_the_store_error() -> None:
    events: list = []
    error = DuplicatePrincipal("acme.test")
    store = FakeStore(events, fail_on=PrincipalType.domain, error=error, first_id=1)
    audit = FakeAudit(error=RuntimeError("audit table unavailable"))
    service = ProvisioningService(store=store, cache=FakeCache(events), audit=audit)

    with pytest.raises(DuplicatePrincipal) as exc:
        await service.provision(body=_body(), access=_access())

    assert exc.value is error
    assert audit.attempted == ["TENANT_CREATED", "PROVISION_FAILED"]
