from __future__ import annotations

from datetime import datetime

from sqlalchemy import desc, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from eventdesk.db.models import Expense, ExpenseStatus


class ExpenseRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(
        self,
        *,
        expense_type: str,
        vendor: str,
        amount: float,
        receipt_file: str | None,
        incurred_by: int,
        event_id: int,
    ) -> Expense:
        expense = Expense(
            expense_type=expense_type,
            vendor=vendor,
            amount=amount,
            receipt_file=receipt_file,
            incurred_by=incurred_by,
            event_id=event_id,
            status=ExpenseStatus.pending,
        )
        self._session.add(expense)
        await self._session.flush()
        return expense

    async def get(self, expense_id: int) -> Expense | None:
        return await self._session.get(Expense, expense_id)

    async def get_detailed(self, expense_id: int) -> Expense | None:
        stmt = (
            select(Expense)
            .options(selectinload(Expense.member), selectinload(Expense.event))
            .where(Expense.id == expense_id)
            .execution_options(populate_existing=True)
        )
        return (await self._session.execute(stmt)).scalar_one_or_none()

    async def list_filtered(
        self,
        *,
        incurred_by: int | None = None,
        event_id: int | None = None,
        status: ExpenseStatus | None = None,
        created_from: datetime | None = None,
        created_to: datetime | None = None,
    ) -> list[Expense]:
        stmt = select(Expense).options(selectinload(Expense.member), selectinload(Expense.event))
        if incurred_by is not None:
            stmt = stmt.where(Expense.incurred_by == incurred_by)
        if event_id is not None:
            stmt = stmt.where(Expense.event_id == event_id)
        if status is not None:
            stmt = stmt.where(Expense.status == status)
        if created_from is not None:
            stmt = stmt.where(Expense.created_at >= created_from)
        if created_to is not None:
            stmt = stmt.where(Expense.created_at <= created_to)
        stmt = stmt.order_by(desc(Expense.created_at), desc(Expense.id))
        return list((await self._session.execute(stmt)).scalars().all())
