from __future__ import annotations

from typing import Any

import pytest

from conftest import ADMIN_EMAIL, Rpc


@pytest.mark.asyncio
async def test_register_then_get_me(rpc: Rpc, member: dict[str, Any]) -> None:
    assert member["user"]["role"] == "MEMBER"
    assert member["user"]["member"]["memberName"] == "Jane Doe"

    r = await rpc("getMe", authToken=member["token"])
    assert r.status_code == 200
    me = r.json()
    assert me["email"] == "jane@example.com"
    assert me["member"]["adults"] == 2
    assert me["member"]["children"] == 1


@pytest.mark.asyncio
async def test_login_rejects_bad_password(rpc: Rpc, admin_token: str) -> None:
    r = await rpc("login", email=ADMIN_EMAIL, password="wrong-password")
    assert r.status_code == 401
    assert r.json()["error"] == {"code": "UNAUTHORIZED", "message": "Invalid email or password"}


@pytest.mark.asyncio
async def test_register_rejects_duplicate_email(rpc: Rpc, member: dict[str, Any]) -> None:
    r = await rpc(
        "register",
        memberName="Jane Again",
        memberEmail="jane@example.com",
        password="another-pw",
    )
    assert r.status_code == 409
    assert r.json()["error"]["code"] == "CONFLICT"


@pytest.mark.asyncio
async def test_register_enforces_password_length(rpc: Rpc) -> None:
    r = await rpc("register", memberName="Short", memberEmail="s@example.com", password="123")
    assert r.status_code == 400
    assert r.json()["error"]["code"] == "BAD_REQUEST"


@pytest.mark.asyncio
async def test_admin_procedures_reject_members_and_anonymous_callers(
    rpc: Rpc, member_token: str
) -> None:
    r = await rpc("getUsers", authToken=member_token)
    assert r.status_code == 403
    assert r.json()["error"] == {"code": "FORBIDDEN", "message": "Admin access required"}

    r = await rpc("getUsers")
    assert r.status_code == 401
    assert r.json()["error"]["code"] == "UNAUTHORIZED"

    r = await rpc("getUsers", authToken="not-a-jwt")
    assert r.status_code == 401


@pytest.mark.asyncio
async def test_admin_user_lifecycle(rpc: Rpc, admin_token: str) -> None:
    r = await rpc(
        "createUser",
        authToken=admin_token,
        memberName="John Smith",
        memberEmail="john@example.com",
        adults=1,
        children=0,
        infants=0,
        elder=1,
        password="john-pw-1",
        role="MEMBER",
    )
    assert r.status_code == 200, r.text
    user = r.json()["user"]
    assert user["member"]["elder"] == 1

    r = await rpc("getUsers", authToken=admin_token)
    emails = [u["email"] for u in r.json()]
    assert emails[0] == "john@example.com"
    assert ADMIN_EMAIL in emails

    r = await rpc(
        "updateUser",
        authToken=admin_token,
        userId=user["id"],
        memberName="John A. Smith",
        memberPhone="555-0199",
    )
    assert r.status_code == 200
    assert r.json()["user"]["member"]["memberName"] == "John A. Smith"
    assert r.json()["user"]["member"]["memberPhone"] == "555-0199"

    r = await rpc("deleteUser", authToken=admin_token, userId=user["id"])
    assert r.json() == {"success": True}

    r = await rpc("login", email="john@example.com", password="john-pw-1")
    assert r.status_code == 401


@pytest.mark.asyncio
async def test_update_user_rejects_taken_email(
    rpc: Rpc, admin_token: str, member: dict[str, Any]
) -> None:
    r = await rpc(
        "updateUser",
        authToken=admin_token,
        userId=member["user"]["id"],
        memberEmail=ADMIN_EMAIL,
    )
    assert r.status_code == 409


@pytest.mark.asyncio
async def test_admin_cannot_delete_own_account(rpc: Rpc, admin_token: str) -> None:
    me = (await rpc("getMe", authToken=admin_token)).json()
    r = await rpc("deleteUser", authToken=admin_token, userId=me["id"])
    assert r.status_code == 400
    assert r.json()["error"]["message"] == "You cannot delete your own account"


@pytest.mark.asyncio
async def test_deleted_user_token_stops_working(
    rpc: Rpc, admin_token: str, member: dict[str, Any]
) -> None:
    r = await rpc("deleteUser", authToken=admin_token, userId=member["user"]["id"])
    assert r.status_code == 200

    r = await rpc("getMe", authToken=member["token"])
    assert r.status_code == 401


@pytest.mark.asyncio
async def test_role_changes_apply_to_issued_tokens(
    rpc: Rpc, admin_token: str, member: dict[str, Any]
) -> None:
    r = await rpc("updateUser", authToken=admin_token, userId=member["user"]["id"], role="ADMIN")
    assert r.status_code == 200

    r = await rpc("getUsers", authToken=member["token"])
    assert r.status_code == 200
