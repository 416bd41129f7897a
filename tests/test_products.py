from __future__ import annotations

from typing import Any

import pytest

from conftest import Rpc


@pytest.mark.asyncio
async def test_product_code_is_unique(rpc: Rpc, admin_token: str, catalog: dict[str, Any]) -> None:
    r = await rpc(
        "createProduct",
        authToken=admin_token,
        productCode="ENTRY-001",
        productName="Duplicate",
        productType="Entry",
    )
    assert r.status_code == 409
    assert r.json()["error"]["message"] == "Product with this code already exists"

    r = await rpc(
        "updateProduct", authToken=admin_token, productId=catalog["food"], productCode="ENTRY-001"
    )
    assert r.status_code == 409


@pytest.mark.asyncio
async def test_variant_lifecycle(rpc: Rpc, admin_token: str, catalog: dict[str, Any]) -> None:
    r = await rpc(
        "createProductType",
        authToken=admin_token,
        productId=catalog["food"],
        productSize="Elder",
        productChoice="NON-VEG",
        productPref="FISH",
        productPrice=33,
        productSubtype="DINE-IN",
    )
    assert r.status_code == 200, r.text
    variant = r.json()["productType"]
    assert variant["productPref"] == "FISH"

    r = await rpc(
        "updateProductType", authToken=admin_token, productTypeId=variant["id"], productPrice=36.5
    )
    assert r.json()["productType"]["productPrice"] == 36.5
    assert r.json()["productType"]["productSize"] == "Elder"

    r = await rpc("deleteProductType", authToken=admin_token, productTypeId=variant["id"])
    assert r.json() == {"success": True}

    r = await rpc("deleteProductType", authToken=admin_token, productTypeId=variant["id"])
    assert r.status_code == 404
    assert r.json()["error"]["message"] == "Product type not found"


@pytest.mark.asyncio
async def test_inactive_variants_are_hidden_from_listings(
    rpc: Rpc, admin_token: str, catalog: dict[str, Any]
) -> None:
    child_entry = catalog["entry_variants"]["Children"]
    r = await rpc(
        "updateProductType", authToken=admin_token, productTypeId=child_entry, status="INACTIVE"
    )
    assert r.status_code == 200

    r = await rpc("getProducts", authToken=admin_token)
    entry = next(p for p in r.json() if p["id"] == catalog["entry"])
    assert child_entry not in [v["id"] for v in entry["productTypes"]]
    assert [v["productPrice"] for v in entry["productTypes"]] == [40, 50]
    assert len(entry["sessions"]) == 3


@pytest.mark.asyncio
async def test_session_tagging(rpc: Rpc, admin_token: str, catalog: dict[str, Any]) -> None:
    tag = {
        "authToken": admin_token,
        "productId": catalog["food"],
        "sessionId": catalog["sessions"][0],
    }
    r = await rpc("addProductToSession", **tag)
    assert r.status_code == 409
    assert r.json()["error"]["message"] == "Product is already tagged to this session"

    r = await rpc("removeProductFromSession", **tag)
    assert r.json() == {"success": True}

    r = await rpc("removeProductFromSession", **tag)
    assert r.status_code == 404

    r = await rpc("addProductToSession", **tag)
    assert r.status_code == 200
    mapping = r.json()["mapping"]
    assert mapping["product"]["productCode"] == "FOOD-001"
    assert mapping["session"]["event"]["eventName"] == "Autumn Festival"


@pytest.mark.asyncio
async def test_inactive_products_are_not_public(
    rpc: Rpc, admin_token: str, catalog: dict[str, Any]
) -> None:
    r = await rpc(
        "updateProduct", authToken=admin_token, productId=catalog["food"], status="INACTIVE"
    )
    assert r.json()["product"]["status"] == "INACTIVE"

    r = await rpc("getPublicProducts")
    assert [p["productCode"] for p in r.json()] == ["ENTRY-001"]


@pytest.mark.asyncio
async def test_delete_unordered_product(
    rpc: Rpc, admin_token: str, catalog: dict[str, Any]
) -> None:
    r = await rpc("deleteProduct", authToken=admin_token, productId=catalog["food"])
    assert r.json() == {"success": True}

    r = await rpc("getProducts", authToken=admin_token)
    assert [p["productCode"] for p in r.json()] == ["ENTRY-001"]
