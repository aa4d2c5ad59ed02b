"""
org_provisioner.db.init_db

Schema bootstrap for dev/test databases (prod runs Alembic migrations).
"""

from __future__ import annotations

from sqlalchemy import inspect
from sqlalchemy.ext.asyncio import AsyncEngine

from org_provisioner.db import models  # noqa: F401  # register models on Base.metadata
from org_provisioner.db.base import Base
from org_provisioner.observability.logging import get_logger

log = get_logger(__name__)


async def init_db(engine: AsyncEngine) -> list[str]:
    """
    Create the directory and audit tables that are missing; returns their names.
    Existing tables are left untouched, so restarting against a populated
    directory is safe.
    """

    async with engine.begin() as conn:
        existing = set(await conn.run_sync(lambda sync_conn: inspect(sync_conn).get_table_names()))
        await conn.run_sync(Base.metadata.create_all)

    created = [name for name in Base.metadata.tables if name not in existing]
    if created:
        log.info("db.tables_created", tables=created)
    return created
