"""
tests.test_gate

Access gate behaviour against in-memory resolvers (no database).
"""

from __future__ import annotations

import pytest

from eventdesk.auth.gate import AccessGate
from eventdesk.auth.models import Principal, Role
from eventdesk.errors import Forbidden, Unauthenticated

PRINCIPALS = {
    "tok-admin-1": Principal(id=1, email="admin@example.com", role=Role.admin),
    "tok-user-2": Principal(id=2, email="user@example.com", role=Role.member),
}


class StaticResolver:
    def __init__(self) -> None:
        self.calls: list[str] = []

    async def resolve(self, credential: str) -> Principal | None:
        self.calls.append(credential)
        return PRINCIPALS.get(credential)


@pytest.mark.asyncio
async def test_administrator_token_passes_admin_check() -> None:
    gate = AccessGate(StaticResolver())
    principal = await gate.require_administrator("tok-admin-1")
    assert principal.id == 1
    assert principal.role == Role.admin


@pytest.mark.asyncio
async def test_member_token_is_authenticated_but_not_administrator() -> None:
    gate = AccessGate(StaticResolver())
    principal = await gate.require_authenticated("tok-user-2")
    assert (principal.id, principal.role) == (2, Role.member)

    assert (await gate.require_member("tok-user-2")).id == 2
    with pytest.raises(Forbidden):
        await gate.require_administrator("tok-user-2")


@pytest.mark.asyncio
async def test_administrator_also_holds_member_capability() -> None:
    gate = AccessGate(StaticResolver())
    assert (await gate.require_member("tok-admin-1")).is_admin


@pytest.mark.asyncio
@pytest.mark.parametrize("credential", ["", "   ", None])
async def test_blank_credentials_never_reach_the_resolver(credential: str | None) -> None:
    resolver = StaticResolver()
    gate = AccessGate(resolver)
    with pytest.raises(Unauthenticated):
        await gate.require_authenticated(credential)
    with pytest.raises(Unauthenticated):
        await gate.require_administrator(credential)
    assert resolver.calls == []


@pytest.mark.asyncio
async def test_unknown_credential_is_unauthenticated() -> None:
    gate = AccessGate(StaticResolver())
    with pytest.raises(Unauthenticated):
        await gate.require_authenticated("garbage")
    with pytest.raises(Unauthenticated):
        await gate.require_administrator("garbage")


@pytest.mark.asyncio
async def test_resolution_is_repeatable_and_uncached() -> None:
    resolver = StaticResolver()
    gate = AccessGate(resolver)
    first = await gate.require_authenticated("tok-admin-1")
    second = await gate.require_authenticated("tok-admin-1")
    assert (first.id, first.role) == (second.id, second.role)
    assert resolver.calls == ["tok-admin-1", "tok-admin-1"]
