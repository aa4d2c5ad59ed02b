"""
org_provisioner.auth.deps

FastAPI dependency functions for authentication.

Responsibilities:
- Convert a bearer token into a typed `AccessToken`.
- Provide the JWT config derived from settings.
- Bind the authenticated caller into the request log context.
"""

from __future__ import annotations

import structlog
from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from starlette.status import HTTP_401_UNAUTHORIZED

from org_provisioner.api.deps import settings_dep
from org_provisioner.auth.jwt import JwtConfig, JwtValidationError, decode_and_validate
from org_provisioner.auth.models import AccessToken, TenantBinding
from org_provisioner.settings import Settings

_bearer = HTTPBearer(auto_error=False)


def jwt_config(settings: Settings) -> JwtConfig:
    return JwtConfig(
        alg=settings.jwt_alg,
        issuer=settings.jwt_issuer,
        audience=settings.jwt_audience,
        secret=settings.jwt_secret,
    )


async def get_access_token(
    creds: HTTPAuthorizationCredentials | None = Depends(_bearer),
    settings: Settings = Depends(settings_dep),
) -> AccessToken:
    # Authn: require a bearer token.
    if creds is None or not creds.credentials:
        raise HTTPException(status_code=HTTP_401_UNAUTHORIZED, detail="Missing bearer token")

    try:
        payload = decode_and_validate(cfg=jwt_config(settings), token=creds.credentials)
    except JwtValidationError as e:
        raise HTTPException(status_code=HTTP_401_UNAUTHORIZED, detail=f"Invalid token: {e}") from e

    subject = str(payload.get("sub", ""))
    permissions_raw = payload.get("permissions", [])
    tenant_raw = payload.get("tenant_id")
    if not subject:
        raise HTTPException(status_code=HTTP_401_UNAUTHORIZED, detail="Invalid token subject")
    if not isinstance(permissions_raw, list):
        raise HTTPException(status_code=HTTP_401_UNAUTHORIZED, detail="Invalid token permissions")
    if tenant_raw is not None and (isinstance(tenant_raw, bool) or not isinstance(tenant_raw, int)):
        raise HTTPException(status_code=HTTP_401_UNAUTHORIZED, detail="Invalid token tenant")

    # Every later log line of this request carries the caller.
    structlog.contextvars.bind_contextvars(actor=subject, caller_tenant_id=tenant_raw)
    return AccessToken(
        subject=subject,
        permissions=frozenset(str(p) for p in permissions_raw),
        tenant=TenantBinding(id=tenant_raw) if tenant_raw is not None else None,
    )


# --- Module Notes -----------------------------------------------------------
# Authorization is not decided here: handlers assert the permissions they need so
# the order of checks stays under the handler's control.
