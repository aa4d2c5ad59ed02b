"""
org_provisioner.api.deps

FastAPI dependency wiring for the API layer.

Responsibilities:
- Provide dependency functions for settings, DB sessions, and the principal cache.
- Encapsulate app.state access patterns (sessionmaker/cache).
"""

from __future__ import annotations

from collections.abc import AsyncIterator

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from org_provisioner.directory.cache import PrincipalCache
from org_provisioner.settings import Settings, get_settings


def settings_dep(request: Request) -> Settings:
    # Apps built by `create_app` carry their own settings; fall back to env settings.
    settings = getattr(request.app.state, "settings", None)
    return settings if isinstance(settings, Settings) else get_settings()


def sessionmaker_from_app(request: Request) -> async_sessionmaker[AsyncSession]:
    # Created on app startup in `org_provisioner.api.app.create_app`.
    return request.app.state.sessionmaker  # type: ignore[attr-defined]


async def db_session(
    session_factory: async_sessionmaker[AsyncSession] = Depends(sessionmaker_from_app),
) -> AsyncIterator[AsyncSession]:
    # Request-scoped DB session. The directory store commits after each creation.
    async with session_factory() as session:
        yield session


def principal_cache(request: Request) -> PrincipalCache:
    # One cache per process, shared by all requests.
    return request.app.state.principal_cache  # type: ignore[attr-defined]
