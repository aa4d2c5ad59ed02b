"""
org_provisioner.directory.secrets

Credential hashing for principal secrets.

Responsibilities:
- Hash plaintext secrets before they reach storage (Argon2id via passlib).
- Leave values that are already hashes untouched.
- Verify plaintext candidates against stored hashes.
"""

from __future__ import annotations

from passlib.context import CryptContext

_ctx = CryptContext(schemes=["argon2"], deprecated="auto", argon2__type="ID")


def is_hashed(secret: str) -> bool:
    return _ctx.identify(secret) is not None


def hash_secret(secret: str) -> str:
    # Pre-hashed secrets (e.g. migrated accounts) are stored verbatim.
    if is_hashed(secret):
        return secret
    return _ctx.hash(secret)


def verify_secret(candidate: str, stored: str) -> bool:
    if not is_hashed(stored):
        return False
    return _ctx.verify(candidate, stored)
