"""
org_provisioner.db.models

Persistence schema for the directory store.

Responsibilities:
- Define ORM models:
  - Principal: any directory entity (tenant, domain, individual, ...)
  - PrincipalEmail: address ownership index (one owner per address)
  - AuditEvent: append-only audit trail of provisioning steps
"""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Any

from sqlalchemy import JSON, Enum, ForeignKey, Index, Integer, String, Uuid as SAUuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from org_provisioner.db.base import Base
from org_provisioner.directory.principal import PrincipalType


def _utcnow() -> datetime:
    # Persist naive UTC timestamps for simplicity; production systems may use tz-aware types.
    return datetime.utcnow()


class Principal(Base):
    __tablename__ = "principals"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    type: Mapped[PrincipalType] = mapped_column(Enum(PrincipalType), nullable=False, index=True)
    # Names are unique across all principal types.
    name: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    tenant_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("principals.id"), nullable=True, index=True
    )

    # Remaining fields keyed by their wire name (see PrincipalField); secrets are hashed.
    fields: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)

    created_at: Mapped[datetime] = mapped_column(nullable=False, default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(nullable=False, default=_utcnow, onupdate=_utcnow)

    emails: Mapped[list[PrincipalEmail]] = relationship(
        back_populates="principal", cascade="all, delete-orphan"
    )

    __table_args__ = (Index("ix_principals_tenant_type", "tenant_id", "type"),)


class PrincipalEmail(Base):
    __tablename__ = "principal_emails"

    address: Mapped[str] = mapped_column(String(320), primary_key=True)
    principal_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("principals.id"), nullable=False, index=True
    )

    principal: Mapped[Principal] = relationship(back_populates="emails")


class AuditEvent(Base):
    __tablename__ = "audit_events"

    id: Mapped[uuid.UUID] = mapped_column(
        SAUuid(as_uuid=True), primary_key=True, default=uuid.uuid4
    )
    principal_id: Mapped[int | None] = mapped_column(Integer, nullable=True, index=True)

    actor: Mapped[str] = mapped_column(String(256), nullable=False)  # token subject / system
    event_type: Mapped[str] = mapped_column(String(128), nullable=False, index=True)
    details: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)

    created_at: Mapped[datetime] = mapped_column(nullable=False, default=_utcnow, index=True)


# --- Module Notes -----------------------------------------------------------
# JSON `fields` keep the record model generic (branding, roles, ...) without a
# column per optional attribute.
