"""
eventdesk.db.repositories.users

Repositories for `User` and `Member` entities.

Responsibilities:
- Create/fetch login accounts together with their member profile.
- Tell whether a member profile is still referenced by registrations or expenses.
"""

from __future__ import annotations

from sqlalchemy import desc, exists, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from eventdesk.auth.models import Role
from eventdesk.db.models import Expense, Guest, Member, Order, User


class MemberRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(
        self,
        *,
        name: str,
        email: str,
        phone: str | None = None,
        adults: int = 1,
        children: int = 0,
        infants: int = 0,
        elder: int = 0,
    ) -> Member:
        member = Member(
            name=name,
            email=email,
            phone=phone,
            adults=adults,
            children=children,
            infants=infants,
            elder=elder,
        )
        self._session.add(member)
        await self._session.flush()
        return member

    async def get(self, member_id: int) -> Member | None:
        return await self._session.get(Member, member_id)

    async def get_by_email(self, email: str) -> Member | None:
        stmt = select(Member).where(Member.email == email)
        return (await self._session.execute(stmt)).scalar_one_or_none()

    async def list_by_name(self) -> list[Member]:
        stmt = select(Member).order_by(Member.name)
        return list((await self._session.execute(stmt)).scalars().all())

    async def is_referenced(self, member_id: int) -> bool:
        # Guests, orders and expenses keep history; the profile must outlive the login.
        stmt = select(
            or_(
                exists().where(Guest.member_id == member_id),
                exists().where(Order.member_id == member_id),
                exists().where(Expense.incurred_by == member_id),
            )
        )
        return bool((await self._session.execute(stmt)).scalar())

    async def delete(self, member: Member) -> None:
        await self._session.delete(member)
        await self._session.flush()


class UserRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(
        self,
        *,
        email: str,
        password_hash: str,
        role: Role,
        member_id: int | None,
    ) -> User:
        user = User(email=email, password_hash=password_hash, role=role, member_id=member_id)
        self._session.add(user)
        await self._session.flush()
        return user

    async def get(self, user_id: int) -> User | None:
        stmt = (
            select(User)
            .options(selectinload(User.member))
            .where(User.id == user_id)
            .execution_options(populate_existing=True)
        )
        return (await self._session.execute(stmt)).scalar_one_or_none()

    async def get_by_email(self, email: str) -> User | None:
        stmt = select(User).options(selectinload(User.member)).where(User.email == email)
        return (await self._session.execute(stmt)).scalar_one_or_none()

    async def list_newest_first(self) -> list[User]:
        stmt = (
            select(User)
            .options(selectinload(User.member))
            .order_by(desc(User.created_at), desc(User.id))
        )
        return list((await self._session.execute(stmt)).scalars().all())

    async def first_admin(self) -> User | None:
        stmt = select(User).where(User.role == Role.admin).order_by(User.id).limit(1)
        return (await self._session.execute(stmt)).scalar_one_or_none()

    async def delete(self, user: User) -> None:
        await self._session.delete(user)
        await self._session.flush()


# --- Module Notes -----------------------------------------------------------
# `UserRepo.get` is also the credential store read used by the access gate.
