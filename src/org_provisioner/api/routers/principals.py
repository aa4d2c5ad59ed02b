"""
org_provisioner.api.routers.principals

Read endpoints for directory principals.

Responsibilities:
- Serve principal views through the read-side cache.
- Expose the audit trail of a principal (e.g. a partially provisioned tenant).
- Hide principals outside the caller's tenant.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from org_provisioner.api.deps import db_session, principal_cache, settings_dep
from org_provisioner.auth.deps import get_access_token
from org_provisioner.auth.models import AccessToken
from org_provisioner.auth.permissions import get_permission_for
from org_provisioner.db.repositories.audit import AuditRepo
from org_provisioner.directory.cache import PrincipalCache, PrincipalView
from org_provisioner.directory.principal import PrincipalType
from org_provisioner.directory.store import SqlDirectoryStore
from org_provisioner.errors import NotFound
from org_provisioner.settings import Settings

router = APIRouter(prefix="/v1/principals", tags=["principals"])


async def _visible_principal(
    principal_id: int,
    *,
    access: AccessToken,
    session: AsyncSession,
    cache: PrincipalCache,
    settings: Settings,
) -> PrincipalView:
    store = SqlDirectoryStore(session, require_email_domain=settings.require_email_domain)
    view = await cache.get_or_load(principal_id, store.get_principal)
    if view is None:
        raise NotFound("Principal not found")

    access.assert_has_permission(get_permission_for(PrincipalType(view["type"])))
    # Tenant-scoped callers see their own tenant and what it contains, nothing else.
    if access.tenant is not None and access.tenant.id not in (view["id"], view["tenantId"]):
        raise NotFound("Principal not found")
    return view


@router.get("/{principal_id}")
async def get_principal(
    principal_id: int,
    access: AccessToken = Depends(get_access_token),
    session: AsyncSession = Depends(db_session),
    cache: PrincipalCache = Depends(principal_cache),
    settings: Settings = Depends(settings_dep),
) -> dict[str, Any]:
    view = await _visible_principal(
        principal_id, access=access, session=session, cache=cache, settings=settings
    )
    return {"data": view}


@router.get("/{principal_id}/audit")
async def list_audit_events(
    principal_id: int,
    access: AccessToken = Depends(get_access_token),
    session: AsyncSession = Depends(db_session),
    cache: PrincipalCache = Depends(principal_cache),
    settings: Settings = Depends(settings_dep),
) -> dict[str, Any]:
    await _visible_principal(
        principal_id, access=access, session=session, cache=cache, settings=settings
    )
    events = await AuditRepo(session).list_for_principal(principal_id)
    return {
        "data": [
            {
                "id": str(e.id),
                "event_type": e.event_type,
                "actor": e.actor,
                "details": e.details,
                "created_at": e.created_at.isoformat(),
            }
            for e in events
        ]
    }
