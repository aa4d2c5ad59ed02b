"""
org_provisioner.api.routers.health

Health and readiness endpoints.

Responsibilities:
- Provide liveness check (`/healthz`).
- Provide readiness check (`/readyz`): the directory and audit tables must be
  queryable, not just the database reachable.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from org_provisioner.api.deps import db_session
from org_provisioner.db.models import AuditEvent, Principal
from org_provisioner.observability.logging import get_logger

log = get_logger(__name__)

router = APIRouter()

_READINESS_CHECKS = {
    "directory": select(Principal.id).limit(1),
    "audit": select(AuditEvent.id).limit(1),
}


@router.get("/healthz")
async def healthz() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/readyz")
async def readyz(session: AsyncSession = Depends(db_session)) -> JSONResponse:
    checks: dict[str, Any] = {}
    for name, stmt in _READINESS_CHECKS.items():
        try:
            await session.execute(stmt)
        except SQLAlchemyError as e:
            log.warning("readiness.check_failed", check=name, error=str(e))
            checks[name] = "unavailable"
            await session.rollback()
        else:
            checks[name] = "ok"

    ready = all(v == "ok" for v in checks.values())
    return JSONResponse(
        status_code=200 if ready else 503,
        content={"status": "ready" if ready else "not_ready", "checks": checks},
    )
