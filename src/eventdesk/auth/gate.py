"""
eventdesk.auth.gate

Access gate: the authorization precondition every procedure passes through.

Responsibilities:
- Turn an opaque credential into a `Principal` via an injected resolver.
- Enforce "any authenticated user", "member" and "administrator only" levels.
- Reject missing/blank credentials before the resolver (and its store) is touched.
"""

from __future__ import annotations

from typing import Protocol

from eventdesk.auth.models import Capability, Principal
from eventdesk.errors import Forbidden, Unauthenticated


class CredentialResolver(Protocol):
    async def resolve(self, credential: str) -> Principal | None:
        """Return the principal for `credential`, or None if it is invalid/unknown."""
        ...


class AccessGate:
    def __init__(self, resolver: CredentialResolver) -> None:
        self._resolver = resolver

    async def resolve_principal(self, credential: str | None) -> Principal:
        if credential is None or not credential.strip():
            raise Unauthenticated("Invalid or expired token")
        principal = await self._resolver.resolve(credential)
        if principal is None:
            raise Unauthenticated("Invalid or expired token")
        return principal

    async def require_authenticated(self, credential: str | None) -> Principal:
        return await self.resolve_principal(credential)

    async def require_member(self, credential: str | None) -> Principal:
        principal = await self.require_authenticated(credential)
        if not principal.can(Capability.member):
            raise Forbidden("Member access required")
        return principal

    async def require_administrator(self, credential: str | None) -> Principal:
        principal = await self.require_authenticated(credential)
        if not principal.can(Capability.administrator):
            raise Forbidden("Admin access required")
        return principal


# --- Module Notes -----------------------------------------------------------
# The gate holds no state besides its resolver: no caching, one lookup per call.
# Errors propagate unchanged to the API error handler.
