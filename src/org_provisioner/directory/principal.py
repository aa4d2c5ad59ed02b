"""
org_provisioner.directory.principal

Generic, type-tagged principal record model.

Responsibilities:
- Describe any directory entity (tenant, domain, individual, ...) as a type tag plus
  an ordered field map.
- Define the result of a store-side creation (`CreationResult`).
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any


class PrincipalType(enum.StrEnum):
    individual = "individual"
    group = "group"
    resource = "resource"
    location = "location"
    list = "list"
    other = "other"
    domain = "domain"
    tenant = "tenant"
    role = "role"
    api_key = "api-key"
    oauth_client = "oauth-client"


class PrincipalField(enum.StrEnum):
    # Wire names (camelCase) as they appear in principal JSON views.
    name = "name"
    type = "type"
    quota = "quota"
    description = "description"
    secrets = "secrets"
    emails = "emails"
    member_of = "memberOf"
    members = "members"
    tenant = "tenant"
    roles = "roles"
    enabled_permissions = "enabledPermissions"
    disabled_permissions = "disabledPermissions"
    urls = "urls"
    external_members = "externalMembers"
    locale = "locale"
    picture = "picture"
    brand_name = "brandName"
    brand_logo_url = "brandLogoUrl"
    brand_theme = "brandTheme"


# A field holds a single string, an ordered list of strings, or a number (quota).
PrincipalValue = str | int | list[str]


@dataclass(slots=True)
class PrincipalSet:
    """
    Principal record: type tag + insertion-ordered field map.
    Field presence per type is not enforced here.
    """

    typ: PrincipalType
    fields: dict[PrincipalField, PrincipalValue] = field(default_factory=dict)

    def set(self, key: PrincipalField, value: PrincipalValue) -> PrincipalSet:
        self.fields[key] = value
        return self

    def get_str(self, key: PrincipalField) -> str | None:
        value = self.fields.get(key)
        if isinstance(value, str):
            return value
        if isinstance(value, list) and value:
            return value[0]
        return None

    def get_list(self, key: PrincipalField) -> list[str]:
        value = self.fields.get(key)
        if value is None:
            return []
        if isinstance(value, list):
            return list(value)
        return [str(value)]

    def get_int(self, key: PrincipalField) -> int | None:
        value = self.fields.get(key)
        return value if isinstance(value, int) else None

    @property
    def name(self) -> str | None:
        return self.get_str(PrincipalField.name)

    def to_json(self) -> dict[str, Any]:
        out: dict[str, Any] = {"type": self.typ.value}
        for key, value in self.fields.items():
            out[key.value] = list(value) if isinstance(value, list) else value
        return out


@dataclass(frozen=True, slots=True)
class CreationResult:
    """
    Outcome of `create_principal`: the assigned id and every principal whose cached
    view became stale because of the write (always includes `id`).
    """

    id: int
    changed_principals: frozenset[int]


# --- Module Notes -----------------------------------------------------------
# The record is a transient value: once submitted, the persisted principal is owned
# by the directory store.
