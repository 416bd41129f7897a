"""
tests.test_tokens

Session token verification: only tokens signed with our secret, for our issuer
and audience, and not yet expired, resolve to a caller.
"""

from __future__ import annotations

from dataclasses import replace
from datetime import timedelta
from typing import Any

import jwt
import pytest

from eventdesk.auth.jwt import JwtConfig, issue_token
from eventdesk.settings import Settings

from conftest import Rpc


def _token_for(cfg: JwtConfig, member: dict[str, Any]) -> str:
    user = member["user"]
    return issue_token(
        cfg=cfg, user_id=user["id"], role=user["role"], member_id=user["member"]["id"]
    )


@pytest.mark.asyncio
async def test_token_signed_with_app_config_resolves(
    rpc: Rpc, settings: Settings, member: dict[str, Any]
) -> None:
    token = _token_for(JwtConfig.from_settings(settings), member)
    r = await rpc("getMe", authToken=token)
    assert r.status_code == 200
    assert r.json()["email"] == "jane@example.com"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "changes",
    [
        {"ttl": timedelta(seconds=-60)},
        {"secret": "someone-elses-secret"},
        {"audience": "another-service"},
        {"issuer": "another-issuer"},
    ],
    ids=["expired", "foreign-secret", "foreign-audience", "foreign-issuer"],
)
async def test_unverifiable_tokens_are_unauthenticated(
    rpc: Rpc, settings: Settings, member: dict[str, Any], changes: dict[str, Any]
) -> None:
    cfg = replace(JwtConfig.from_settings(settings), **changes)
    r = await rpc("getMe", authToken=_token_for(cfg, member))
    assert r.status_code == 401
    assert r.json()["error"]["code"] == "UNAUTHORIZED"


@pytest.mark.asyncio
async def test_token_without_subject_is_unauthenticated(
    rpc: Rpc, settings: Settings, member: dict[str, Any]
) -> None:
    cfg = JwtConfig.from_settings(settings)
    token = jwt.encode(
        {"iss": cfg.issuer, "aud": cfg.audience, "iat": 0, "exp": 4_102_444_800, "role": "ADMIN"},
        cfg.secret,
        algorithm=cfg.alg,
    )
    r = await rpc("getUsers", authToken=token)
    assert r.status_code == 401
