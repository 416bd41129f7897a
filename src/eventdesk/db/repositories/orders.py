"""
eventdesk.db.repositories.orders

Repositories for `Guest`, `Order` and `OrderLine`.

Responsibilities:
- Persist registrations (guest + order + lines) in the caller's transaction.
- Load orders with guest, member and line details for admin views and reports.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from sqlalchemy import delete, desc, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from eventdesk.db.models import Guest, Order, OrderLine, OrderStatus


def _order_detail_options() -> list[Any]:
    return [
        selectinload(Order.guest),
        selectinload(Order.member),
        selectinload(Order.lines).selectinload(OrderLine.product),
        selectinload(Order.lines).selectinload(OrderLine.variant),
        selectinload(Order.lines).selectinload(OrderLine.session),
    ]


class GuestRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(self, **fields: Any) -> Guest:
        guest = Guest(**fields)
        self._session.add(guest)
        await self._session.flush()
        return guest


class OrderRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(
        self,
        *,
        transaction_id: str,
        total_cost: float,
        lines: Iterable[dict[str, Any]],
        guest_id: int | None = None,
        member_id: int | None = None,
    ) -> Order:
        order = Order(
            guest_id=guest_id,
            member_id=member_id,
            total_cost=total_cost,
            transaction_id=transaction_id,
            status=OrderStatus.pending,
        )
        order.lines = [OrderLine(**line) for line in lines]
        self._session.add(order)
        await self._session.flush()
        return order

    async def get(self, order_id: int) -> Order | None:
        return await self._session.get(Order, order_id)

    async def get_detailed(self, order_id: int) -> Order | None:
        stmt = (
            select(Order)
            .options(*_order_detail_options())
            .where(Order.id == order_id)
            .execution_options(populate_existing=True)
        )
        return (await self._session.execute(stmt)).scalar_one_or_none()

    async def list_detailed(
        self,
        *,
        session_ids: Iterable[int] | None = None,
        oldest_first: bool = False,
    ) -> list[Order]:
        stmt = select(Order).options(*_order_detail_options())
        if session_ids is not None:
            ids = list(session_ids)
            stmt = stmt.where(
                Order.id.in_(select(OrderLine.order_id).where(OrderLine.session_id.in_(ids)))
            )
        if oldest_first:
            stmt = stmt.order_by(Order.created_at, Order.id)
        else:
            stmt = stmt.order_by(desc(Order.created_at), desc(Order.id))
        return list((await self._session.execute(stmt)).scalars().all())

    async def count(self) -> int:
        return int((await self._session.execute(select(func.count(Order.id)))).scalar_one())

    async def replace_lines(self, order_id: int, lines: Iterable[dict[str, Any]]) -> None:
        await self._session.execute(delete(OrderLine).where(OrderLine.order_id == order_id))
        self._session.add_all(
            OrderLine(order_id=order_id, **line) for line in lines if line["quantity"] > 0
        )
        await self._session.flush()

    async def lines_for_sessions(self, session_ids: Iterable[int] | None) -> list[OrderLine]:
        stmt = select(OrderLine).options(
            selectinload(OrderLine.product), selectinload(OrderLine.variant)
        )
        if session_ids is None:
            stmt = stmt.where(OrderLine.session_id.is_not(None))
        else:
            stmt = stmt.where(OrderLine.session_id.in_(list(session_ids)))
        stmt = stmt.order_by(OrderLine.created_at, OrderLine.id)
        return list((await self._session.execute(stmt)).scalars().all())

    async def delete(self, order: Order) -> None:
        await self._session.delete(order)
        await self._session.flush()


# --- Module Notes -----------------------------------------------------------
# Line replacement is a bulk delete + insert inside the service's transaction;
# callers reload with `get_detailed` afterwards.
