"""
org_provisioner.directory.store

Directory store contract and the default SQL-backed implementation.

Responsibilities:
- Define `DirectoryStore`, the only write path the orchestrator uses.
- Persist principals durably, assign ids, and report changed-principal sets.
- Enforce store-side rules: permission re-check, unique names/addresses,
  valid parent tenant, known email domains.
"""

from __future__ import annotations

from collections.abc import Collection
from typing import Any, Protocol

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from org_provisioner.auth.permissions import create_permission_for
from org_provisioner.db.models import Principal
from org_provisioner.db.repositories.principals import PrincipalRepo
from org_provisioner.directory.principal import (
    CreationResult,
    PrincipalField,
    PrincipalSet,
    PrincipalType,
)
from org_provisioner.directory.secrets import hash_secret
from org_provisioner.errors import ConstraintViolation, DuplicatePrincipal, PermissionDenied
from org_provisioner.observability.logging import get_logger

log = get_logger(__name__)


class DirectoryStore(Protocol):
    async def create_principal(
        self,
        record: PrincipalSet,
        parent_id: int | None = None,
        permissions: Collection[str] | None = None,
    ) -> CreationResult: ...


class SqlDirectoryStore:
    """
    SQLAlchemy-backed directory. Each successful creation is committed on its own,
    so callers sequencing several creations get no cross-call atomicity.
    """

    def __init__(self, session: AsyncSession, *, require_email_domain: bool = True) -> None:
        self._session = session
        self._principals = PrincipalRepo(session)
        self._require_email_domain = require_email_domain

    async def create_principal(
        self,
        record: PrincipalSet,
        parent_id: int | None = None,
        permissions: Collection[str] | None = None,
    ) -> CreationResult:
        try:
            return await self._create(record, parent_id, permissions)
        except SQLAlchemyError:
            # A failed flush leaves the session unusable until rolled back.
            await self._session.rollback()
            raise

    async def get_principal(self, principal_id: int) -> dict[str, Any] | None:
        row = await self._principals.get(principal_id)
        if row is None:
            return None
        return principal_view(row)

    async def _create(
        self,
        record: PrincipalSet,
        parent_id: int | None,
        permissions: Collection[str] | None,
    ) -> CreationResult:
        # Store-side re-check; the HTTP layer may have been bypassed (internal callers).
        if permissions is not None:
            required = create_permission_for(record.typ)
            if required not in permissions:
                raise PermissionDenied(str(required))

        name = (record.name or "").strip()
        if not name:
            raise ConstraintViolation("Principal name is required")
        if record.typ == PrincipalType.domain:
            name = name.lower()

        if await self._principals.get_by_name(name) is not None:
            raise DuplicatePrincipal(name)

        if parent_id is not None:
            parent = await self._principals.get(parent_id)
            if parent is None or parent.type != PrincipalType.tenant:
                raise ConstraintViolation(f"Tenant {parent_id} does not exist")

        emails = [e.strip().lower() for e in record.get_list(PrincipalField.emails)]
        for address in emails:
            await self._check_address(address, parent_id=parent_id)

        fields = self._stored_fields(record, emails=emails)
        try:
            row = await self._principals.add(
                type=record.typ,
                name=name,
                tenant_id=parent_id,
                fields=fields,
                emails=emails,
            )
            await self._session.commit()
        except IntegrityError as e:
            # Lost a race against a concurrent creation of the same name/address.
            await self._session.rollback()
            raise DuplicatePrincipal(name) from e

        changed = {row.id}
        if parent_id is not None:
            changed.add(parent_id)
        log.info(
            "directory.principal_created",
            principal_id=row.id,
            principal_type=record.typ.value,
            tenant_id=parent_id,
        )
        return CreationResult(id=row.id, changed_principals=frozenset(changed))

    async def _check_address(self, address: str, *, parent_id: int | None) -> None:
        local, sep, domain_name = address.partition("@")
        if not sep or not local or not domain_name:
            raise ConstraintViolation(f"Invalid email address: {address}")
        if await self._principals.email_owner(address) is not None:
            raise DuplicatePrincipal(address)
        if not self._require_email_domain:
            return

        domain = await self._principals.get_by_name(domain_name, type=PrincipalType.domain)
        if domain is None:
            raise ConstraintViolation(f"Domain {domain_name} does not exist")
        # A tenant-scoped account may only use its own tenant's domains.
        if parent_id is not None and domain.tenant_id != parent_id:
            raise ConstraintViolation(f"Domain {domain_name} does not belong to tenant {parent_id}")

    @staticmethod
    def _stored_fields(record: PrincipalSet, *, emails: list[str]) -> dict[str, Any]:
        fields: dict[str, Any] = {}
        for key, value in record.fields.items():
            if key == PrincipalField.name:
                continue
            if key == PrincipalField.secrets:
                fields[key.value] = [hash_secret(s) for s in record.get_list(key)]
            elif key == PrincipalField.emails:
                fields[key.value] = emails
            else:
                fields[key.value] = list(value) if isinstance(value, list) else value
        return fields


def principal_view(row: Principal) -> dict[str, Any]:
    """
    Public JSON view of a principal; secrets never leave the store.
    """

    view: dict[str, Any] = {
        "id": row.id,
        "type": row.type.value,
        "name": row.name,
        "tenantId": row.tenant_id,
    }
    for key, value in (row.fields or {}).items():
        if key == PrincipalField.secrets.value:
            continue
        view[key] = value
    return view


# --- Module Notes -----------------------------------------------------------
# Duplicate detection belongs here, not in the orchestrator: concurrent provisioning
# requests are only serialized by the store (and its unique constraints).
