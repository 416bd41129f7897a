from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from eventdesk.auth.models import Principal
from eventdesk.db.models import Expense, ExpenseStatus
from eventdesk.db.repositories.events import EventRepo
from eventdesk.db.repositories.expenses import ExpenseRepo
from eventdesk.errors import BadRequest, NotFound
from eventdesk.observability.logging import get_logger

log = get_logger(__name__)


class ExpenseService:
    def __init__(self, *, session: AsyncSession) -> None:
        self._session = session
        self._expenses = ExpenseRepo(session)
        self._events = EventRepo(session)

    async def create(
        self,
        *,
        principal: Principal,
        expense_type: str,
        vendor: str,
        amount: float,
        receipt_file: str | None,
        event_id: int,
    ) -> Expense:
        if principal.member_id is None:
            raise BadRequest("User must be associated with a member")
        if await self._events.get(event_id) is None:
            raise NotFound("Event not found")
        expense = await self._expenses.create(
            expense_type=expense_type,
            vendor=vendor,
            amount=amount,
            receipt_file=receipt_file,
            incurred_by=principal.member_id,
            event_id=event_id,
        )
        await self._session.commit()
        log.info("expense_created", expense_id=expense.id, event_id=event_id)
        return await self._require_detailed(expense.id)

    async def list_visible(
        self,
        *,
        principal: Principal,
        event_id: int | None = None,
        status: ExpenseStatus | None = None,
    ) -> list[Expense]:
        if principal.is_admin:
            return await self._expenses.list_filtered(event_id=event_id, status=status)
        # Non-admins only ever see their own; no member profile means nothing to see.
        if principal.member_id is None:
            return []
        return await self._expenses.list_filtered(
            incurred_by=principal.member_id, event_id=event_id, status=status
        )

    async def set_status(self, *, expense_id: int, status: ExpenseStatus) -> Expense:
        if status == ExpenseStatus.pending:
            raise BadRequest("Expense status can only be set to APPROVED or REJECTED")
        expense = await self._expenses.get(expense_id)
        if expense is None:
            raise NotFound("Expense not found")
        expense.status = status
        await self._session.commit()
        log.info("expense_status_changed", expense_id=expense_id, status=status.value)
        return await self._require_detailed(expense_id)

    async def _require_detailed(self, expense_id: int) -> Expense:
        expense = await self._expenses.get_detailed(expense_id)
        if expense is None:
            raise NotFound("Expense not found")
        return expense
