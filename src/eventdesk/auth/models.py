"""
eventdesk.auth.models

Auth domain types used across API/service layers.

Responsibilities:
- Define the closed set of roles and the capabilities each grants.
- Represent the resolved caller (`Principal`) in a typed, immutable form.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass


class Role(enum.StrEnum):
    member = "MEMBER"
    admin = "ADMIN"


class Capability(enum.StrEnum):
    member = "member"
    administrator = "administrator"


ROLE_CAPABILITIES: dict[Role, frozenset[Capability]] = {
    Role.member: frozenset({Capability.member}),
    Role.admin: frozenset({Capability.member, Capability.administrator}),
}


@dataclass(frozen=True, slots=True)
class MemberProfile:
    id: int
    name: str
    email: str
    phone: str | None = None


@dataclass(frozen=True, slots=True)
class Principal:
    id: int
    email: str
    role: Role
    member: MemberProfile | None = None

    @property
    def capabilities(self) -> frozenset[Capability]:
        return ROLE_CAPABILITIES.get(self.role, frozenset())

    def can(self, capability: Capability) -> bool:
        return capability in self.capabilities

    @property
    def is_admin(self) -> bool:
        return self.can(Capability.administrator)

    @property
    def member_id(self) -> int | None:
        return self.member.id if self.member is not None else None


# --- Module Notes -----------------------------------------------------------
# Adding a role means adding one entry to ROLE_CAPABILITIES; gate checks stay
# capability lookups.
