"""
org_provisioner.api.routers.organization

Organization management endpoints.

Responsibilities:
- Route `/api/organization/{action}` requests: only `POST provision` is matched,
  everything else is NotFound.
- Hand the raw request body and caller context to `ProvisioningService`.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from org_provisioner.api.deps import db_session, principal_cache, settings_dep
from org_provisioner.auth.deps import get_access_token
from org_provisioner.auth.models import AccessToken
from org_provisioner.db.repositories.audit import AuditRepo
from org_provisioner.directory.cache import PrincipalCache
from org_provisioner.directory.store import SqlDirectoryStore
from org_provisioner.errors import NotFound
from org_provisioner.services.provisioning_service import ProvisioningService
from org_provisioner.settings import Settings

router = APIRouter(prefix="/api/organization", tags=["organization"])


async def dispatch(
    *,
    method: str,
    segments: list[str],
    body: bytes | None,
    access: AccessToken,
    service: ProvisioningService,
) -> JSONResponse:
    match (segments, method.upper()):
        case (["provision"], "POST"):
            result = await service.provision(body=body, access=access)
            return JSONResponse(content=result.envelope())
        case _:
            raise NotFound()


# Every method is routed here so unmatched ones surface as NotFound, not 405.
_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


@router.api_route("", methods=_METHODS)
@router.api_route("/{path:path}", methods=_METHODS)
async def handle_manage_organization(
    request: Request,
    access: AccessToken = Depends(get_access_token),
    session: AsyncSession = Depends(db_session),
    cache: PrincipalCache = Depends(principal_cache),
    settings: Settings = Depends(settings_dep),
) -> JSONResponse:
    service = ProvisioningService(
        store=SqlDirectoryStore(session, require_email_domain=settings.require_email_domain),
        cache=cache,
        audit=AuditRepo(session),
    )
    # The bare prefix carries no `path` parameter.
    path = request.path_params.get("path", "")
    return await dispatch(
        method=request.method,
        segments=[s for s in path.split("/") if s],
        body=await request.body(),
        access=access,
        service=service,
    )


# --- Module Notes -----------------------------------------------------------
# The body is read as raw bytes on purpose: malformed JSON must surface as
# BadParameters only after the permission gate has run.
