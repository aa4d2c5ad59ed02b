"""
org_provisioner.errors

Error taxonomy for provisioning and directory operations.

Responsibilities:
- Give every failure a stable code and HTTP status.
- Carry the detail the caller needs (missing field, missing permission).
- Render a uniform response envelope (see `api.error_handlers`).
"""

from __future__ import annotations

from typing import Any


class ProvisioningError(Exception):
    """
    Base class for all errors surfaced to API callers.
    Subclasses override `code` / `http_status` and add structured details.
    """

    code: str = "INTERNAL_ERROR"
    http_status: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def details(self) -> dict[str, Any]:
        return {}

    def to_response(self) -> dict[str, Any]:
        return {"error": {"code": self.code, "message": self.message, **self.details()}}


class BadParameters(ProvisioningError):
    code = "BAD_PARAMETERS"
    http_status = 400


class MissingField(ProvisioningError):
    code = "MISSING_FIELD"
    http_status = 400

    def __init__(self, field: str) -> None:
        super().__init__(f"Missing required field: {field}")
        self.field = field

    def details(self) -> dict[str, Any]:
        return {"field": self.field}


class PermissionDenied(ProvisioningError):
    code = "PERMISSION_DENIED"
    http_status = 403

    def __init__(self, permission: str) -> None:
        super().__init__(f"Missing permission: {permission}")
        self.permission = permission

    def details(self) -> dict[str, Any]:
        return {"permission": self.permission}


class NotFound(ProvisioningError):
    code = "NOT_FOUND"
    http_status = 404

    def __init__(self, message: str = "Not found") -> None:
        super().__init__(message)


class StoreError(ProvisioningError):
    """
    Raised by the directory store. The orchestrator propagates it unchanged.
    """

    code = "STORE_ERROR"
    http_status = 400


class DuplicatePrincipal(StoreError):
    code = "ALREADY_EXISTS"
    http_status = 409

    def __init__(self, name: str) -> None:
        super().__init__(f"{name!r} already exists")
        self.name = name

    def details(self) -> dict[str, Any]:
        return {"name": self.name}


class ConstraintViolation(StoreError):
    code = "CONSTRAINT_VIOLATION"
    http_status = 400


# --- Module Notes -----------------------------------------------------------
# Errors are never retried or compensated locally: the first failure is the
# operation's result, and anything committed before it stays committed.
