"""
org_provisioner.settings

Central configuration model (Pydantic Settings).

Responsibilities:
- Provide strongly-typed, env-driven settings for all layers.
- Hide secrets from repr/logging (e.g., JWT secret).
- Offer a cached settings instance for dependency injection.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Env-driven configuration (prefix `ORGP_`), safe defaults for local dev.
    """

    model_config = SettingsConfigDict(env_prefix="ORGP_", case_sensitive=False)

    # Environment controls toggle behavior like auto-init DB tables and dev tokens.
    env: Literal["dev", "test", "prod"] = "dev"
    service_name: str = "org-provisioner"
    log_level: str = "INFO"

    api_host: str = "0.0.0.0"
    api_port: int = 8080

    # Auth
    jwt_alg: str = "HS256"
    jwt_issuer: str = "org-provisioner"
    jwt_audience: str = "org-provisioner-api"
    jwt_secret: str = Field(default="dev-secret-change-me", repr=False)

    # Directory store
    database_url: str = "sqlite+aiosqlite:///./org_provisioner.db"
    # Individuals may only carry addresses whose domain is a known Domain principal.
    require_email_domain: bool = True

    # Read-side principal cache
    principal_cache_size: int = Field(default=10_000, ge=1)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    # Cache avoids re-parsing env vars for each request dependency.
    return Settings()


# --- Module Notes -----------------------------------------------------------
# Every other module depends on this one; keep field names stable since they are
# also the public env var names (ORGP_<FIELD>).
