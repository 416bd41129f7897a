from __future__ import annotations

from typing import Any

import pytest

from conftest import Rpc, entry_pick, food_pick


async def _guest_order(rpc: Rpc, member: dict[str, Any], catalog: dict[str, Any]) -> dict:
    r = await rpc(
        "guestRegistration",
        guestName="Walk In",
        adults=1,
        memberId=member["user"]["member"]["id"],
        eventId=catalog["event"],
        sessionSelections=[
            {
                "sessionId": catalog["sessions"][0],
                "productSelections": [
                    entry_pick(catalog, "Adult", 1),
                    food_pick(catalog, "Adult", 1),
                ],
            }
        ],
    )
    assert r.status_code == 200, r.text
    return r.json()["order"]


@pytest.mark.asyncio
async def test_admin_lists_orders_with_lines(
    rpc: Rpc, admin_token: str, member: dict[str, Any], catalog: dict[str, Any]
) -> None:
    order = await _guest_order(rpc, member, catalog)

    r = await rpc("getOrders", authToken=admin_token)
    (listed,) = r.json()
    assert listed["id"] == order["id"]
    assert listed["status"] == "PENDING"
    assert listed["guest"]["guestName"] == "Walk In"
    assert {ln["product"]["productCode"] for ln in listed["orderLines"]} == {
        "ENTRY-001",
        "FOOD-001",
    }


@pytest.mark.asyncio
async def test_members_cannot_see_orders(rpc: Rpc, member_token: str) -> None:
    r = await rpc("getOrders", authToken=member_token)
    assert r.status_code == 403


@pytest.mark.asyncio
async def test_update_order_status_and_cost(
    rpc: Rpc, admin_token: str, member: dict[str, Any], catalog: dict[str, Any]
) -> None:
    order = await _guest_order(rpc, member, catalog)

    r = await rpc(
        "updateOrder", authToken=admin_token, orderId=order["id"], status="CONFIRMED", totalCost=10
    )
    assert r.status_code == 200
    assert r.json()["order"]["status"] == "CONFIRMED"
    assert r.json()["order"]["totalCost"] == 10


@pytest.mark.asyncio
async def test_replacing_lines_drops_zero_quantities_and_reprices(
    rpc: Rpc, admin_token: str, member: dict[str, Any], catalog: dict[str, Any]
) -> None:
    order = await _guest_order(rpc, member, catalog)
    session_id = catalog["sessions"][1]

    r = await rpc(
        "updateOrder",
        authToken=admin_token,
        orderId=order["id"],
        orderLines=[
            {**entry_pick(catalog, "Adult", 2), "sessionId": session_id},
            {**food_pick(catalog, "Adult", 0), "sessionId": session_id},
        ],
    )
    assert r.status_code == 200, r.text
    updated = r.json()["order"]
    assert [(ln["quantity"], ln["sessionId"]) for ln in updated["orderLines"]] == [
        (2, session_id)
    ]
    assert updated["totalCost"] == 100


@pytest.mark.asyncio
async def test_update_order_rejects_unknown_references(
    rpc: Rpc, admin_token: str, member: dict[str, Any], catalog: dict[str, Any]
) -> None:
    order = await _guest_order(rpc, member, catalog)
    r = await rpc(
        "updateOrder",
        authToken=admin_token,
        orderId=order["id"],
        orderLines=[{"productId": catalog["entry"], "quantity": 1, "sessionId": 9999}],
    )
    assert r.status_code == 404
    assert r.json()["error"]["message"] == "Session not found"


@pytest.mark.asyncio
async def test_update_order_rejects_variant_of_another_product(
    rpc: Rpc, admin_token: str, member: dict[str, Any], catalog: dict[str, Any]
) -> None:
    order = await _guest_order(rpc, member, catalog)
    mixed = {**food_pick(catalog, "Adult", 1), "productId": catalog["entry"]}
    r = await rpc(
        "updateOrder",
        authToken=admin_token,
        orderId=order["id"],
        orderLines=[{**mixed, "sessionId": catalog["sessions"][0]}],
    )
    assert r.status_code == 400
    assert r.json()["error"]["message"] == (
        "Product type does not belong to the selected product"
    )

    r = await rpc("getOrders", authToken=admin_token)
    (unchanged,) = r.json()
    assert unchanged["totalCost"] == order["totalCost"]
    assert len(unchanged["orderLines"]) == 2


@pytest.mark.asyncio
async def test_delete_order_frees_capacity(
    rpc: Rpc, admin_token: str, member: dict[str, Any], catalog: dict[str, Any]
) -> None:
    order = await _guest_order(rpc, member, catalog)

    r = await rpc("deleteOrder", authToken=admin_token, orderId=order["id"])
    assert r.json() == {"success": True}

    r = await rpc("getSessions", authToken=admin_token, eventId=catalog["event"])
    assert all(s["currentRegistrations"] == 0 for s in r.json())

    r = await rpc("deleteOrder", authToken=admin_token, orderId=order["id"])
    assert r.status_code == 404
