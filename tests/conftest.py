"""
tests.conftest

Shared fixtures.

Responsibilities:
- Build an app (and raw sessions) against a throwaway SQLite database.
- Mint bearer tokens with chosen permissions / tenant binding.
"""

from __future__ import annotations

from collections.abc import AsyncIterator, Callable
from datetime import timedelta

import httpx
import pytest
import pytest_asyncio
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from org_provisioner.api.app import create_app
from org_provisioner.auth.deps import jwt_config
from org_provisioner.auth.jwt import issue_token
from org_provisioner.auth.permissions import Permission
from org_provisioner.db.init_db import init_db
from org_provisioner.db.session import create_engine, create_sessionmaker
from org_provisioner.settings import Settings

PROVISION_PERMISSIONS = [
    Permission.tenant_create.value,
    Permission.domain_create.value,
    Permission.individual_create.value,
]

READ_PERMISSIONS = [
    Permission.tenant_get.value,
    Permission.domain_get.value,
    Permission.individual_get.value,
]

ACME_REQUEST = {
    "tenantName": "Acme",
    "domain": "acme.test",
    "adminName": "Root",
    "adminPassword": "x",
    "adminEmail": "root@acme.test",
}


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        env="test",
        log_level="WARNING",
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'directory.db'}",
    )


@pytest_asyncio.fixture
async def app(settings: Settings) -> AsyncIterator[FastAPI]:
    app = create_app(settings=settings)
    # httpx ASGITransport does not run lifespan; drive it explicitly.
    async with app.router.lifespan_context(app):
        yield app


@pytest_asyncio.fixture
async def client(app: FastAPI) -> AsyncIterator[httpx.AsyncClient]:
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest_asyncio.fixture
async def sessionmaker(settings: Settings) -> AsyncIterator[async_sessionmaker[AsyncSession]]:
    engine = create_engine(settings)
    await init_db(engine)
    try:
        yield create_sessionmaker(engine)
    finally:
        await engine.dispose()


@pytest_asyncio.fixture
async def session(
    sessionmaker: async_sessionmaker[AsyncSession],
) -> AsyncIterator[AsyncSession]:
    async with sessionmaker() as s:
        yield s


@pytest.fixture
def auth_headers(settings: Settings) -> Callable[..., dict[str, str]]:
    def _headers(
        permissions: list[str] | None = None,
        *,
        tenant_id: int | None = None,
        subject: str = "superadmin",
    ) -> dict[str, str]:
        token = issue_token(
            cfg=jwt_config(settings),
            subject=subject,
            permissions=list(PROVISION_PERMISSIONS + READ_PERMISSIONS)
            if permissions is None
            else permissions,
            tenant_id=tenant_id,
            ttl=timedelta(minutes=5),
        )
        return {"Authorization": f"Bearer {token}"}

    return _headers
