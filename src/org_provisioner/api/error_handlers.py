"""
org_provisioner.api.error_handlers

Global exception handlers.

Responsibilities:
- Render `ProvisioningError` subclasses as `{"error": {...}}` with their HTTP status.
- Never leak internal details for unexpected exceptions.
"""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.status import HTTP_500_INTERNAL_SERVER_ERROR

from org_provisioner.errors import ProvisioningError
from org_provisioner.observability.logging import get_logger

log = get_logger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(ProvisioningError)
    async def provisioning_error_handler(request: Request, exc: ProvisioningError) -> JSONResponse:
        log.info("request.failed", error_code=exc.code, status=exc.http_status)
        return JSONResponse(status_code=exc.http_status, content=exc.to_response())

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        log.error("request.unhandled_error", error=str(exc), exc_info=exc)
        return JSONResponse(
            status_code=HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": {"code": "INTERNAL_ERROR", "message": "An unexpected error occurred"}},
        )


# --- Module Notes -----------------------------------------------------------
# HTTPException (401 from auth deps) keeps FastAPI's default `{"detail": ...}` shape.
