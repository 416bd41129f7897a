"""
eventdesk.services.accounts

Account lifecycle service (login, self-registration, admin user management).

Responsibilities:
- Verify passwords and issue session tokens.
- Create member profiles together with their login account.
- Keep user and member emails unique across updates.
- Remove accounts while keeping member history that registrations/expenses refer to.
"""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from eventdesk.auth.jwt import JwtConfig, issue_token
from eventdesk.auth.models import Principal, Role
from eventdesk.auth.passwords import hash_password_async, verify_password_async
from eventdesk.db.models import User
from eventdesk.db.repositories.users import MemberRepo, UserRepo
from eventdesk.errors import BadRequest, Conflict, NotFound, Unauthenticated
from eventdesk.observability.logging import get_logger

log = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class MemberDetails:
    name: str
    email: str
    phone: str | None = None
    adults: int = 1
    children: int = 0
    infants: int = 0
    elder: int = 0


class AccountService:
    def __init__(self, *, session: AsyncSession, jwt_cfg: JwtConfig) -> None:
        self._session = session
        self._jwt_cfg = jwt_cfg
        self._users = UserRepo(session)
        self._members = MemberRepo(session)

    def _token_for(self, user: User) -> str:
        return issue_token(
            cfg=self._jwt_cfg,
            user_id=user.id,
            role=user.role.value,
            member_id=user.member_id,
        )

    async def login(self, *, email: str, password: str) -> tuple[str, User]:
        user = await self._users.get_by_email(email)
        # Same message for unknown email and bad password.
        if user is None or not await verify_password_async(password, user.password_hash):
            log.info("login_rejected")
            raise Unauthenticated("Invalid email or password")
        log.info("login", user_id=user.id)
        return self._token_for(user), user

    async def register(self, *, details: MemberDetails, password: str) -> tuple[str, User]:
        user = await self._create_account(details=details, password=password, role=Role.member)
        log.info("member_registered", user_id=user.id, member_id=user.member_id)
        return self._token_for(user), user

    async def create_user(self, *, details: MemberDetails, password: str, role: Role) -> User:
        user = await self._create_account(details=details, password=password, role=role)
        log.info("user_created", user_id=user.id, role=role.value)
        return user

    async def _create_account(self, *, details: MemberDetails, password: str, role: Role) -> User:
        if await self._users.get_by_email(details.email) is not None:
            raise Conflict("User with this email already exists")
        if await self._members.get_by_email(details.email) is not None:
            raise Conflict("Member with this email already exists")

        password_hash = await hash_password_async(password)
        member = await self._members.create(
            name=details.name,
            email=details.email,
            phone=details.phone,
            adults=details.adults,
            children=details.children,
            infants=details.infants,
            elder=details.elder,
        )
        user = await self._users.create(
            email=details.email,
            password_hash=password_hash,
            role=role,
            member_id=member.id,
        )
        await self._session.commit()
        return await self._require_user(user.id)

    async def list_users(self) -> list[User]:
        return await self._users.list_newest_first()

    async def update_user(
        self,
        *,
        user_id: int,
        name: str | None = None,
        email: str | None = None,
        phone: str | None = None,
        adults: int | None = None,
        children: int | None = None,
        infants: int | None = None,
        elder: int | None = None,
        password: str | None = None,
        role: Role | None = None,
    ) -> User:
        user = await self._require_user(user_id)

        if email and email != user.email:
            if await self._users.get_by_email(email) is not None:
                raise Conflict("User with this email already exists")
            other = await self._members.get_by_email(email)
            if other is not None and other.id != user.member_id:
                raise Conflict("Member with this email already exists")

        member = user.member
        if member is not None:
            if name:
                member.name = name
            if email:
                member.email = email
            if phone is not None:
                member.phone = phone
            if adults is not None:
                member.adults = adults
            if children is not None:
                member.children = children
            if infants is not None:
                member.infants = infants
            if elder is not None:
                member.elder = elder

        if email:
            user.email = email
        if role is not None:
            user.role = role
        if password:
            user.password_hash = await hash_password_async(password)

        await self._session.commit()
        log.info("user_updated", user_id=user_id)
        return await self._require_user(user_id)

    async def delete_user(self, *, user_id: int, actor: Principal) -> None:
        user = await self._require_user(user_id)
        if user.id == actor.id:
            raise BadRequest("You cannot delete your own account")

        member = user.member
        await self._users.delete(user)
        member_removed = False
        if member is not None and not await self._members.is_referenced(member.id):
            await self._members.delete(member)
            member_removed = True
        await self._session.commit()
        log.info("user_deleted", user_id=user_id, member_removed=member_removed)

    async def get_user(self, user_id: int) -> User:
        return await self._require_user(user_id)

    async def _require_user(self, user_id: int) -> User:
        user = await self._users.get(user_id)
        if user is None:
            raise NotFound("User not found")
        return user


async def ensure_admin(
    session_factory: async_sessionmaker[AsyncSession],
    *,
    email: str,
    password: str,
) -> bool:
    """Create the bootstrap administrator unless an ADMIN user already exists."""
    async with session_factory() as session:
        users = UserRepo(session)
        if await users.first_admin() is not None:
            return False
        if await users.get_by_email(email) is not None:
            log.warning("bootstrap_admin_email_taken", email=email)
            return False
        members = MemberRepo(session)
        member = await members.get_by_email(email)
        if member is None:
            member = await members.create(name="System Administrator", email=email)
        await users.create(
            email=email,
            password_hash=await hash_password_async(password),
            role=Role.admin,
            member_id=member.id,
        )
        await session.commit()
    log.info("bootstrap_admin_created", email=email)
    return True


# --- Module Notes -----------------------------------------------------------
# Token claims mirror the persisted user at issue time; the gate never trusts
# them for role decisions.
