from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from eventdesk.api.deps import db_session, gate_dep
from eventdesk.api.schemas import CreateExpenseRequest, ExpensesQuery, UpdateExpenseStatusRequest
from eventdesk.api.serializers import expense_out
from eventdesk.auth.gate import AccessGate
from eventdesk.services.expenses import ExpenseService

router = APIRouter(prefix="/rpc", tags=["expenses"])


@router.post("/createExpense")
async def create_expense(
    body: CreateExpenseRequest,
    gate: AccessGate = Depends(gate_dep),
    session: AsyncSession = Depends(db_session),
) -> dict[str, Any]:
    principal = await gate.require_member(body.auth_token)
    expense = await ExpenseService(session=session).create(
        principal=principal,
        expense_type=body.expense_type,
        vendor=body.vendor,
        amount=body.amount,
        receipt_file=body.receipt_file,
        event_id=body.event_id,
    )
    return {"success": True, "expense": expense_out(expense)}


@router.post("/getExpenses")
async def get_expenses(
    body: ExpensesQuery,
    gate: AccessGate = Depends(gate_dep),
    session: AsyncSession = Depends(db_session),
) -> list[dict[str, Any]]:
    principal = await gate.require_authenticated(body.auth_token)
    expenses = await ExpenseService(session=session).list_visible(
        principal=principal, event_id=body.event_id, status=body.status
    )
    return [expense_out(x) for x in expenses]


@router.post("/updateExpenseStatus")
async def update_expense_status(
    body: UpdateExpenseStatusRequest,
    gate: AccessGate = Depends(gate_dep),
    session: AsyncSession = Depends(db_session),
) -> dict[str, Any]:
    await gate.require_administrator(body.auth_token)
    expense = await ExpenseService(session=session).set_status(
        expense_id=body.expense_id, status=body.status
    )
    return {"success": True, "expense": expense_out(expense)}
