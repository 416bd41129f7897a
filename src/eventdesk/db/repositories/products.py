"""
eventdesk.db.repositories.products

Repositories for `Product`, `ProductVariant` and `ProductSessionMap`.

Responsibilities:
- Create/fetch products with their priced variants and session tags.
- Batch-load variants (with product) for registration pricing.
- Guard deletes against existing order lines.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from sqlalchemy import desc, exists, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from eventdesk.db.models import (
    EventSession,
    OrderLine,
    Product,
    ProductKind,
    ProductSessionMap,
    ProductVariant,
    RecordStatus,
)


class ProductRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(
        self,
        *,
        code: str,
        name: str,
        description: str | None,
        kind: ProductKind,
        variants: Iterable[dict[str, Any]] = (),
    ) -> Product:
        product = Product(code=code, name=name, description=description, kind=kind)
        product.variants = [ProductVariant(**v) for v in variants]
        self._session.add(product)
        await self._session.flush()
        return product

    async def get(self, product_id: int) -> Product | None:
        return await self._session.get(Product, product_id)

    async def get_by_code(self, code: str) -> Product | None:
        stmt = select(Product).where(Product.code == code)
        return (await self._session.execute(stmt)).scalar_one_or_none()

    async def get_detailed(self, product_id: int) -> Product | None:
        stmt = (
            select(Product)
            .options(
                selectinload(Product.variants),
                selectinload(Product.session_maps).selectinload(ProductSessionMap.session),
            )
            .where(Product.id == product_id)
            .execution_options(populate_existing=True)
        )
        return (await self._session.execute(stmt)).scalar_one_or_none()

    async def list_detailed(self, *, active_only: bool = False) -> list[Product]:
        stmt = select(Product).options(
            selectinload(Product.variants),
            selectinload(Product.session_maps).selectinload(ProductSessionMap.session),
        )
        if active_only:
            stmt = stmt.where(Product.status == RecordStatus.active)
        stmt = stmt.order_by(desc(Product.created_at), desc(Product.id))
        return list((await self._session.execute(stmt)).scalars().all())

    async def has_order_lines(self, product_id: int) -> bool:
        stmt = select(exists().where(OrderLine.product_id == product_id))
        return bool((await self._session.execute(stmt)).scalar())

    async def delete(self, product: Product) -> None:
        await self._session.delete(product)
        await self._session.flush()


class VariantRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(self, *, product_id: int, **fields: Any) -> ProductVariant:
        variant = ProductVariant(product_id=product_id, **fields)
        self._session.add(variant)
        await self._session.flush()
        return variant

    async def get(self, variant_id: int) -> ProductVariant | None:
        return await self._session.get(ProductVariant, variant_id)

    async def get_many(self, variant_ids: Iterable[int]) -> dict[int, ProductVariant]:
        ids = set(variant_ids)
        if not ids:
            return {}
        stmt = (
            select(ProductVariant)
            .options(selectinload(ProductVariant.product))
            .where(ProductVariant.id.in_(ids))
        )
        return {v.id: v for v in (await self._session.execute(stmt)).scalars().all()}

    async def has_order_lines(self, variant_id: int) -> bool:
        stmt = select(exists().where(OrderLine.product_variant_id == variant_id))
        return bool((await self._session.execute(stmt)).scalar())

    async def delete(self, variant: ProductVariant) -> None:
        await self._session.delete(variant)
        await self._session.flush()


class SessionMapRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, *, session_id: int, product_id: int) -> ProductSessionMap | None:
        stmt = select(ProductSessionMap).where(
            ProductSessionMap.session_id == session_id,
            ProductSessionMap.product_id == product_id,
        )
        return (await self._session.execute(stmt)).scalar_one_or_none()

    async def create(self, *, session_id: int, product_id: int) -> ProductSessionMap:
        mapping = ProductSessionMap(session_id=session_id, product_id=product_id)
        self._session.add(mapping)
        await self._session.flush()
        return mapping

    async def get_detailed(self, mapping_id: int) -> ProductSessionMap | None:
        stmt = (
            select(ProductSessionMap)
            .options(
                selectinload(ProductSessionMap.product),
                selectinload(ProductSessionMap.session).selectinload(EventSession.event),
            )
            .where(ProductSessionMap.id == mapping_id)
            .execution_options(populate_existing=True)
        )
        return (await self._session.execute(stmt)).scalar_one_or_none()

    async def delete(self, mapping: ProductSessionMap) -> None:
        await self._session.delete(mapping)
        await self._session.flush()
