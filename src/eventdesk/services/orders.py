from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from eventdesk.db.models import Order, OrderStatus
from eventdesk.db.repositories.events import SessionRepo
from eventdesk.db.repositories.orders import OrderRepo
from eventdesk.db.repositories.products import ProductRepo, VariantRepo
from eventdesk.errors import BadRequest, NotFound
from eventdesk.observability.logging import get_logger

log = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class LineSpec:
    product_id: int
    quantity: int
    product_variant_id: int | None = None
    session_id: int | None = None


class OrderService:
    def __init__(self, *, session: AsyncSession) -> None:
        self._session = session
        self._orders = OrderRepo(session)
        self._products = ProductRepo(session)
        self._variants = VariantRepo(session)
        self._sessions = SessionRepo(session)

    async def list_orders(self) -> list[Order]:
        return await self._orders.list_detailed()

    async def count(self) -> int:
        return await self._orders.count()

    async def update(
        self,
        *,
        order_id: int,
        total_cost: float | None = None,
        status: OrderStatus | None = None,
        lines: Sequence[LineSpec] | None = None,
    ) -> Order:
        order = await self._orders.get(order_id)
        if order is None:
            raise NotFound("Order not found")

        if lines is not None:
            await self._check_references(lines)
            await self._orders.replace_lines(
                order_id,
                [
                    {
                        "product_id": line.product_id,
                        "product_variant_id": line.product_variant_id,
                        "session_id": line.session_id,
                        "quantity": line.quantity,
                    }
                    for line in lines
                ],
            )
            if total_cost is None:
                total_cost = await self._price_lines(lines)

        if total_cost is not None:
            order.total_cost = total_cost
        if status is not None:
            order.status = status
        await self._session.commit()
        log.info("order_updated", order_id=order_id, lines_replaced=lines is not None)

        detailed = await self._orders.get_detailed(order_id)
        if detailed is None:
            raise NotFound("Order not found")
        return detailed

    async def _check_references(self, lines: Sequence[LineSpec]) -> None:
        for product_id in {ln.product_id for ln in lines}:
            if await self._products.get(product_id) is None:
                raise NotFound("Product not found")
        variant_ids = {ln.product_variant_id for ln in lines if ln.product_variant_id is not None}
        variants = await self._variants.get_many(variant_ids)
        if len(variants) != len(variant_ids):
            raise NotFound("Product type not found")
        for ln in lines:
            if ln.product_variant_id is None:
                continue
            if variants[ln.product_variant_id].product_id != ln.product_id:
                raise BadRequest("Product type does not belong to the selected product")
        for session_id in {ln.session_id for ln in lines if ln.session_id is not None}:
            if await self._sessions.get(session_id) is None:
                raise NotFound("Session not found")

    async def _price_lines(self, lines: Sequence[LineSpec]) -> float:
        # List price of each priced line; lines without a variant contribute nothing.
        priced = [ln for ln in lines if ln.product_variant_id is not None and ln.quantity > 0]
        variants = await self._variants.get_many(ln.product_variant_id for ln in priced)
        total = 0.0
        for ln in priced:
            variant = variants.get(ln.product_variant_id)
            if variant is not None:
                total += variant.price * ln.quantity
        return round(total, 2)

    async def delete(self, *, order_id: int) -> None:
        order = await self._orders.get(order_id)
        if order is None:
            raise NotFound("Order not found")
        await self._orders.delete(order)
        await self._session.commit()
        log.info("order_deleted", order_id=order_id)
