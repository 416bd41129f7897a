"""
eventdesk.auth.resolver

Credential-to-principal resolution backed by the user store.

Responsibilities:
- Validate JWT credentials (signature, issuer, audience, expiry).
- Load the user and member profile with a short-lived session per lookup.
- Project persisted user state into a `Principal`.
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from eventdesk.auth.jwt import JwtConfig, JwtValidationError, decode_and_validate
from eventdesk.auth.models import MemberProfile, Principal, Role
from eventdesk.db.models import User
from eventdesk.db.repositories.users import UserRepo
from eventdesk.observability.logging import get_logger

log = get_logger(__name__)


def principal_from_user(user: User) -> Principal:
    member = user.member
    return Principal(
        id=user.id,
        email=user.email,
        role=Role(user.role),
        member=(
            MemberProfile(id=member.id, name=member.name, email=member.email, phone=member.phone)
            if member is not None
            else None
        ),
    )


class JwtUserResolver:
    def __init__(
        self,
        *,
        jwt_cfg: JwtConfig,
        session_factory: async_sessionmaker[AsyncSession],
    ) -> None:
        self._jwt_cfg = jwt_cfg
        self._session_factory = session_factory

    async def resolve(self, credential: str) -> Principal | None:
        try:
            claims = decode_and_validate(cfg=self._jwt_cfg, token=credential)
        except JwtValidationError as e:
            log.info("credential_rejected", reason=str(e))
            return None

        async with self._session_factory() as session:
            user = await UserRepo(session).get(claims.user_id)
            if user is None:
                log.info("credential_user_missing", user_id=claims.user_id)
                return None
            return principal_from_user(user)


# --- Module Notes -----------------------------------------------------------
# Role comes from the stored user, not the token, so demotions and deletions
# apply to already-issued tokens.
