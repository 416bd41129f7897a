"""
eventdesk.auth.jwt

Session tokens handed out by `login` and `register`.

Responsibilities:
- Sign a token naming the user, their role and member profile.
- Reject tokens with a bad signature, wrong issuer or audience, or missing claims.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any

import jwt
from jwt import InvalidTokenError

from eventdesk.settings import Settings


@dataclass(frozen=True, slots=True)
class JwtConfig:
    alg: str
    issuer: str
    audience: str
    secret: str
    ttl: timedelta = timedelta(days=365)

    @classmethod
    def from_settings(cls, settings: Settings) -> JwtConfig:
        return cls(
            alg=settings.jwt_alg,
            issuer=settings.jwt_issuer,
            audience=settings.jwt_audience,
            secret=settings.jwt_secret,
            ttl=timedelta(days=settings.token_ttl_days),
        )


class JwtValidationError(Exception):
    pass


@dataclass(frozen=True, slots=True)
class TokenClaims:
    user_id: int
    role: str
    member_id: int | None


def issue_token(*, cfg: JwtConfig, user_id: int, role: str, member_id: int | None) -> str:
    now = datetime.now(tz=UTC)
    payload: dict[str, Any] = {
        "iss": cfg.issuer,
        "aud": cfg.audience,
        "sub": str(user_id),
        "role": role,
        "iat": int(now.timestamp()),
        "exp": int((now + cfg.ttl).timestamp()),
    }
    if member_id is not None:
        payload["member_id"] = member_id
    return jwt.encode(payload, cfg.secret, algorithm=cfg.alg)


def decode_and_validate(*, cfg: JwtConfig, token: str) -> TokenClaims:
    try:
        payload = jwt.decode(
            token,
            cfg.secret,
            algorithms=[cfg.alg],
            issuer=cfg.issuer,
            audience=cfg.audience,
            options={
                "require": ["exp", "iat", "iss", "aud", "sub"],
            },
        )
    except InvalidTokenError as e:
        raise JwtValidationError(str(e)) from e

    sub = payload.get("sub")
    role = payload.get("role")
    member_id = payload.get("member_id")
    if not isinstance(sub, str) or not sub.isdigit():
        raise JwtValidationError("invalid subject")
    if not isinstance(role, str):
        raise JwtValidationError("invalid role claim")
    if member_id is not None and not isinstance(member_id, int):
        raise JwtValidationError("invalid member claim")
    return TokenClaims(user_id=int(sub), role=role, member_id=member_id)


# --- Module Notes -----------------------------------------------------------
# Claims are only a lookup key: the gate re-reads role and member from the
# store on every call (see `auth.resolver.JwtUserResolver`).
