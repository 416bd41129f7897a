from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from eventdesk.api.deps import db_session, gate_dep
from eventdesk.api.schemas import AuthedRequest, OrderIdRequest, UpdateOrderRequest
from eventdesk.api.serializers import order_out
from eventdesk.auth.gate import AccessGate
from eventdesk.services.orders import LineSpec, OrderService

router = APIRouter(prefix="/rpc", tags=["orders"])


@router.post("/getOrders")
async def get_orders(
    body: AuthedRequest,
    gate: AccessGate = Depends(gate_dep),
    session: AsyncSession = Depends(db_session),
) -> list[dict[str, Any]]:
    await gate.require_administrator(body.auth_token)
    return [order_out(o) for o in await OrderService(session=session).list_orders()]


@router.post("/updateOrder")
async def update_order(
    body: UpdateOrderRequest,
    gate: AccessGate = Depends(gate_dep),
    session: AsyncSession = Depends(db_session),
) -> dict[str, Any]:
    await gate.require_administrator(body.auth_token)
    lines = (
        [
            LineSpec(
                product_id=ln.product_id,
                quantity=ln.quantity,
                product_variant_id=ln.product_type_id,
                session_id=ln.session_id,
            )
            for ln in body.order_lines
        ]
        if body.order_lines is not None
        else None
    )
    order = await OrderService(session=session).update(
        order_id=body.order_id, total_cost=body.total_cost, status=body.status, lines=lines
    )
    return {"success": True, "order": order_out(order)}


@router.post("/deleteOrder")
async def delete_order(
    body: OrderIdRequest,
    gate: AccessGate = Depends(gate_dep),
    session: AsyncSession = Depends(db_session),
) -> dict[str, bool]:
    await gate.require_administrator(body.auth_token)
    await OrderService(session=session).delete(order_id=body.order_id)
    return {"success": True}
