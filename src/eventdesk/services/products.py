"""
eventdesk.services.products

Product catalog service.

Responsibilities:
- Maintain products (unique codes) and their priced variants.
- Tag/untag products to sessions.
- Refuse deletes of anything already ordered.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import asdict, dataclass
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from eventdesk.db.models import (
    MealChoice,
    MealPreference,
    PersonSize,
    Product,
    ProductKind,
    ProductSessionMap,
    ProductSubtype,
    ProductVariant,
    RecordStatus,
)
from eventdesk.db.repositories.events import SessionRepo
from eventdesk.db.repositories.products import ProductRepo, SessionMapRepo, VariantRepo
from eventdesk.errors import BadRequest, Conflict, NotFound
from eventdesk.observability.logging import get_logger

log = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class VariantSpec:
    size: PersonSize
    choice: MealChoice
    preference: MealPreference
    price: float
    subtype: ProductSubtype


class ProductService:
    def __init__(self, *, session: AsyncSession) -> None:
        self._session = session
        self._products = ProductRepo(session)
        self._variants = VariantRepo(session)
        self._maps = SessionMapRepo(session)
        self._sessions = SessionRepo(session)

    # Products

    async def create_product(
        self,
        *,
        code: str,
        name: str,
        description: str | None,
        kind: ProductKind,
        variants: Sequence[VariantSpec] = (),
    ) -> Product:
        if await self._products.get_by_code(code) is not None:
            raise Conflict("Product with this code already exists")
        product = await self._products.create(
            code=code,
            name=name,
            description=description,
            kind=kind,
            variants=[asdict(v) for v in variants],
        )
        await self._session.commit()
        log.info("product_created", product_id=product.id, code=code, variants=len(variants))
        return await self._require_detailed(product.id)

    async def list_products(self) -> list[Product]:
        return await self._products.list_detailed()

    async def list_public_products(self) -> list[Product]:
        return await self._products.list_detailed(active_only=True)

    async def update_product(
        self,
        *,
        product_id: int,
        code: str | None = None,
        name: str | None = None,
        description: str | None = None,
        kind: ProductKind | None = None,
        status: RecordStatus | None = None,
    ) -> Product:
        product = await self._products.get(product_id)
        if product is None:
            raise NotFound("Product not found")
        if code and code != product.code and await self._products.get_by_code(code) is not None:
            raise Conflict("Product with this code already exists")

        if code:
            product.code = code
        if name:
            product.name = name
        if description is not None:
            product.description = description
        if kind is not None:
            product.kind = kind
        if status is not None:
            product.status = status
        await self._session.commit()
        log.info("product_updated", product_id=product_id)
        return await self._require_detailed(product_id)

    async def delete_product(self, *, product_id: int) -> None:
        product = await self._products.get(product_id)
        if product is None:
            raise NotFound("Product not found")
        if await self._products.has_order_lines(product_id):
            raise BadRequest("Cannot delete product with existing orders")
        await self._products.delete(product)
        await self._session.commit()
        log.info("product_deleted", product_id=product_id)

    async def _require_detailed(self, product_id: int) -> Product:
        product = await self._products.get_detailed(product_id)
        if product is None:
            raise NotFound("Product not found")
        return product

    # Variants ("product types" on the wire)

    async def create_variant(self, *, product_id: int, spec: VariantSpec) -> ProductVariant:
        if await self._products.get(product_id) is None:
            raise NotFound("Product not found")
        variant = await self._variants.create(product_id=product_id, **asdict(spec))
        await self._session.commit()
        log.info("product_type_created", product_type_id=variant.id, product_id=product_id)
        return variant

    async def update_variant(self, *, variant_id: int, **changes: Any) -> ProductVariant:
        variant = await self._variants.get(variant_id)
        if variant is None:
            raise NotFound("Product type not found")
        for field, value in changes.items():
            if value is not None:
                setattr(variant, field, value)
        await self._session.commit()
        log.info("product_type_updated", product_type_id=variant_id)
        return variant

    async def delete_variant(self, *, variant_id: int) -> None:
        variant = await self._variants.get(variant_id)
        if variant is None:
            raise NotFound("Product type not found")
        if await self._variants.has_order_lines(variant_id):
            raise BadRequest("Cannot delete product type with existing orders")
        await self._variants.delete(variant)
        await self._session.commit()
        log.info("product_type_deleted", product_type_id=variant_id)

    # Session tags

    async def tag_session(self, *, product_id: int, session_id: int) -> ProductSessionMap:
        if await self._products.get(product_id) is None:
            raise NotFound("Product not found")
        if await self._sessions.get(session_id) is None:
            raise NotFound("Session not found")
        if await self._maps.get(session_id=session_id, product_id=product_id) is not None:
            raise Conflict("Product is already tagged to this session")
        mapping = await self._maps.create(session_id=session_id, product_id=product_id)
        await self._session.commit()
        log.info("product_tagged", product_id=product_id, session_id=session_id)
        detailed = await self._maps.get_detailed(mapping.id)
        if detailed is None:
            raise NotFound("Product is not tagged to this session")
        return detailed

    async def untag_session(self, *, product_id: int, session_id: int) -> None:
        mapping = await self._maps.get(session_id=session_id, product_id=product_id)
        if mapping is None:
            raise NotFound("Product is not tagged to this session")
        await self._maps.delete(mapping)
        await self._session.commit()
        log.info("product_untagged", product_id=product_id, session_id=session_id)


# --- Module Notes -----------------------------------------------------------
# Inactive variants stay in the catalog for order history; listings filter them.
