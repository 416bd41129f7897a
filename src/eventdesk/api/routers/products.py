"""
eventdesk.api.routers.products

Product catalog procedures: products, their variants ("product types" on the
wire) and session tagging.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from eventdesk.api.deps import db_session, gate_dep
from eventdesk.api.schemas import (
    AuthedRequest,
    CreateProductRequest,
    CreateVariantRequest,
    ProductIdRequest,
    SessionTagRequest,
    UpdateProductRequest,
    UpdateVariantRequest,
    VariantFields,
    VariantIdRequest,
)
from eventdesk.api.serializers import product_out, session_map_out, variant_out
from eventdesk.auth.gate import AccessGate
from eventdesk.services.products import ProductService, VariantSpec

router = APIRouter(prefix="/rpc", tags=["products"])


def _spec(fields: VariantFields) -> VariantSpec:
    return VariantSpec(
        size=fields.product_size,
        choice=fields.product_choice,
        preference=fields.product_pref,
        price=fields.product_price,
        subtype=fields.product_subtype,
    )


@router.post("/createProduct")
async def create_product(
    body: CreateProductRequest,
    gate: AccessGate = Depends(gate_dep),
    session: AsyncSession = Depends(db_session),
) -> dict[str, Any]:
    await gate.require_administrator(body.auth_token)
    product = await ProductService(session=session).create_product(
        code=body.product_code,
        name=body.product_name,
        description=body.product_desc,
        kind=body.product_type,
        variants=[_spec(v) for v in body.product_types],
    )
    return {"success": True, "product": product_out(product)}


@router.post("/getProducts")
async def get_products(
    body: AuthedRequest,
    gate: AccessGate = Depends(gate_dep),
    session: AsyncSession = Depends(db_session),
) -> list[dict[str, Any]]:
    await gate.require_authenticated(body.auth_token)
    return [product_out(p) for p in await ProductService(session=session).list_products()]


@router.post("/updateProduct")
async def update_product(
    body: UpdateProductRequest,
    gate: AccessGate = Depends(gate_dep),
    session: AsyncSession = Depends(db_session),
) -> dict[str, Any]:
    await gate.require_administrator(body.auth_token)
    product = await ProductService(session=session).update_product(
        product_id=body.product_id,
        code=body.product_code,
        name=body.product_name,
        description=body.product_desc,
        kind=body.product_type,
        status=body.status,
    )
    return {"success": True, "product": product_out(product)}


@router.post("/deleteProduct")
async def delete_product(
    body: ProductIdRequest,
    gate: AccessGate = Depends(gate_dep),
    session: AsyncSession = Depends(db_session),
) -> dict[str, bool]:
    await gate.require_administrator(body.auth_token)
    await ProductService(session=session).delete_product(product_id=body.product_id)
    return {"success": True}


@router.post("/createProductType")
async def create_product_type(
    body: CreateVariantRequest,
    gate: AccessGate = Depends(gate_dep),
    session: AsyncSession = Depends(db_session),
) -> dict[str, Any]:
    await gate.require_administrator(body.auth_token)
    variant = await ProductService(session=session).create_variant(
        product_id=body.product_id, spec=_spec(body)
    )
    return {"success": True, "productType": variant_out(variant)}


@router.post("/updateProductType")
async def update_product_type(
    body: UpdateVariantRequest,
    gate: AccessGate = Depends(gate_dep),
    session: AsyncSession = Depends(db_session),
) -> dict[str, Any]:
    await gate.require_administrator(body.auth_token)
    variant = await ProductService(session=session).update_variant(
        variant_id=body.product_type_id,
        size=body.product_size,
        choice=body.product_choice,
        preference=body.product_pref,
        price=body.product_price,
        subtype=body.product_subtype,
        status=body.status,
    )
    return {"success": True, "productType": variant_out(variant)}


@router.post("/deleteProductType")
async def delete_product_type(
    body: VariantIdRequest,
    gate: AccessGate = Depends(gate_dep),
    session: AsyncSession = Depends(db_session),
) -> dict[str, bool]:
    await gate.require_administrator(body.auth_token)
    await ProductService(session=session).delete_variant(variant_id=body.product_type_id)
    return {"success": True}


@router.post("/addProductToSession")
async def add_product_to_session(
    body: SessionTagRequest,
    gate: AccessGate = Depends(gate_dep),
    session: AsyncSession = Depends(db_session),
) -> dict[str, Any]:
    await gate.require_administrator(body.auth_token)
    mapping = await ProductService(session=session).tag_session(
        product_id=body.product_id, session_id=body.session_id
    )
    return {"success": True, "mapping": session_map_out(mapping)}


@router.post("/removeProductFromSession")
async def remove_product_from_session(
    body: SessionTagRequest,
    gate: AccessGate = Depends(gate_dep),
    session: AsyncSession = Depends(db_session),
) -> dict[str, bool]:
    await gate.require_administrator(body.auth_token)
    await ProductService(session=session).untag_session(
        product_id=body.product_id, session_id=body.session_id
    )
    return {"success": True}
