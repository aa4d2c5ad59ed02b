"""
org_provisioner.db.repositories.principals

Repository for `Principal` rows.

Responsibilities:
- Insert principals together with their address index entries.
- Look principals up by id, name, or owned address.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from org_provisioner.db.models import Principal, PrincipalEmail
from org_provisioner.directory.principal import PrincipalType


class PrincipalRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def add(
        self,
        *,
        type: PrincipalType,
        name: str,
        tenant_id: int | None,
        fields: dict[str, Any],
        emails: list[str],
    ) -> Principal:
        principal = Principal(type=type, name=name, tenant_id=tenant_id, fields=fields)
        principal.emails = [PrincipalEmail(address=address) for address in emails]
        self._session.add(principal)
        # Flush assigns the integer id without committing.
        await self._session.flush()
        return principal

    async def get(self, principal_id: int) -> Principal | None:
        return await self._session.get(Principal, principal_id)

    async def get_by_name(
        self, name: str, *, type: PrincipalType | None = None
    ) -> Principal | None:
        stmt = select(Principal).where(Principal.name == name)
        if type is not None:
            stmt = stmt.where(Principal.type == type)
        return (await self._session.execute(stmt)).scalar_one_or_none()

    async def email_owner(self, address: str) -> int | None:
        stmt = select(PrincipalEmail.principal_id).where(PrincipalEmail.address == address)
        return (await self._session.execute(stmt)).scalar_one_or_none()


# --- Module Notes -----------------------------------------------------------
# Uniqueness of names and addresses is ultimately backed by DB constraints; the
# store pre-checks them only to produce precise error types.
