from __future__ import annotations

from datetime import timedelta

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from org_provisioner.api.deps import settings_dep
from org_provisioner.auth.deps import jwt_config
from org_provisioner.auth.jwt import issue_token
from org_provisioner.errors import NotFound
from org_provisioner.settings import Settings

router = APIRouter(prefix="/v1/dev", tags=["dev"])


class DevTokenRequest(BaseModel):
    subject: str = Field(min_length=1, max_length=256)
    permissions: list[str] = Field(default_factory=list)
    tenant_id: int | None = Field(default=None, ge=1)
    ttl_minutes: int = Field(default=60, ge=1, le=24 * 60)


class DevTokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"


@router.post("/token", response_model=DevTokenResponse)
async def mint_dev_token(
    body: DevTokenRequest,
    settings: Settings = Depends(settings_dep),
) -> DevTokenResponse:
    if settings.env == "prod":
        raise NotFound()

    token = issue_token(
        cfg=jwt_config(settings),
        subject=body.subject,
        permissions=body.permissions,
        tenant_id=body.tenant_id,
        ttl=timedelta(minutes=body.ttl_minutes),
    )
    return DevTokenResponse(access_token=token)
