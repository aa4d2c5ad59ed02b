"""
org_provisioner.db.repositories.audit

Repository for `AuditEvent` entities.

Responsibilities:
- Append audit events for provisioning steps.
- Query the audit trail by principal for transparency and compliance.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy import desc, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from org_provisioner.db.models import AuditEvent


class AuditRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def add(
        self,
        *,
        principal_id: int | None,
        actor: str,
        event_type: str,
        details: dict[str, Any],
    ) -> AuditEvent:
        # Audit events are append-only (no update/delete) in normal operation.
        ev = AuditEvent(
            principal_id=principal_id,
            actor=actor,
            event_type=event_type,
            details=details,
        )
        self._session.add(ev)
        await self._session.flush()
        return ev

    async def record(
        self,
        *,
        principal_id: int | None,
        actor: str,
        event_type: str,
        details: dict[str, Any],
    ) -> AuditEvent:
        """
        Add and commit immediately, so the entry survives a later failing step.
        On failure the session is rolled back before re-raising, leaving it usable
        for the directory writes that share it.
        """

        try:
            ev = await self.add(
                principal_id=principal_id, actor=actor, event_type=event_type, details=details
            )
            await self._session.commit()
        except SQLAlchemyError:
            await self._session.rollback()
            raise
        return ev

    async def list_for_principal(self, principal_id: int, *, limit: int = 200) -> list[AuditEvent]:
        # Newest-first for UI consumption.
        stmt = (
            select(AuditEvent)
            .where(AuditEvent.principal_id == principal_id)
            .order_by(desc(AuditEvent.created_at))
            .limit(limit)
        )
        return list((await self._session.execute(stmt)).scalars().all())


# --- Module Notes -----------------------------------------------------------
# The provisioning service records one event per committed step plus a final
# PROVISION_COMPLETED / PROVISION_FAILED entry.
