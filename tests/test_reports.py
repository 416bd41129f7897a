from __future__ import annotations

from typing import Any

import pytest

from conftest import Rpc, entry_pick, food_pick


async def _register(rpc: Rpc, member: dict[str, Any], catalog: dict[str, Any]) -> None:
    r = await rpc(
        "guestRegistration",
        guestName="Report Guest",
        guestEmail="report@example.com",
        adults=2,
        children=1,
        memberId=member["user"]["member"]["id"],
        eventId=catalog["event"],
        sessionSelections=[
            {
                "sessionId": catalog["sessions"][0],
                "productSelections": [
                    entry_pick(catalog, "Adult", 2),
                    entry_pick(catalog, "Children", 1),
                    food_pick(catalog, "Adult", 2),
                    food_pick(catalog, "Children", 1),
                ],
            },
            {
                "sessionId": catalog["sessions"][1],
                "productSelections": [food_pick(catalog, "Adult", 1, subtype="PACKET")],
            },
        ],
    )
    assert r.status_code == 200, r.text


@pytest.mark.asyncio
async def test_products_export(rpc: Rpc, member_token: str, catalog: dict[str, Any]) -> None:
    r = await rpc("exportToExcel", authToken=member_token, exportType="products")
    assert r.status_code == 200
    body = r.json()
    assert body["exportType"] == "products"
    assert body["headers"] == ["Product Code", "Product Name", "Type", "Status", "Variations Count"]
    assert sorted(row[0] for row in body["data"]) == ["ENTRY-001", "FOOD-001"]
    assert body["timestamp"].endswith("Z")


@pytest.mark.asyncio
async def test_events_export_is_admin_only(
    rpc: Rpc, admin_token: str, member_token: str, catalog: dict[str, Any]
) -> None:
    r = await rpc("exportToExcel", authToken=member_token, exportType="events")
    assert r.status_code == 403

    r = await rpc("exportToExcel", authToken=admin_token, exportType="events")
    (row,) = r.json()["data"]
    assert row[0] == "Autumn Festival"
    assert row[3] == "1 Hall Road"
    assert row[4] == 3


@pytest.mark.asyncio
async def test_registrations_export_has_one_row_per_line(
    rpc: Rpc, admin_token: str, member: dict[str, Any], catalog: dict[str, Any]
) -> None:
    await _register(rpc, member, catalog)

    r = await rpc(
        "exportToExcel", authToken=admin_token, exportType="registrations", eventId=catalog["event"]
    )
    body = r.json()
    assert len(body["headers"]) == 27
    assert len(body["data"]) == 5
    first = dict(zip(body["headers"], body["data"][0]))
    assert first["Guest Name"] == "Report Guest"
    assert first["Total Family Size"] == 3
    assert first["Member Name"] == "N/A"


@pytest.mark.asyncio
async def test_food_exports(
    rpc: Rpc, admin_token: str, member: dict[str, Any], catalog: dict[str, Any]
) -> None:
    await _register(rpc, member, catalog)

    r = await rpc(
        "exportToExcel",
        authToken=admin_token,
        exportType="foodSessionWise",
        eventId=catalog["event"],
    )
    rows = {row[1]: row for row in r.json()["data"]}
    # Event, Session, Date, Time, Veg, Non-Veg, Chicken, Mutton, Fish, Total
    assert rows["Breakfast"][4:] == [3, 0, 0, 0, 0, 3]
    assert rows["Lunch"][4:] == [0, 1, 1, 0, 0, 1]
    assert rows["Gala"][4:] == [0, 0, 0, 0, 0, 0]

    r = await rpc(
        "exportToExcel",
        authToken=admin_token,
        exportType="foodFamilyWise",
        eventId=catalog["event"],
    )
    rows = {row[1]: row for row in r.json()["data"]}
    # Event, Session, Name, Email, Adults, Children, Elders, Veg, Non-Veg, ...
    assert rows["Breakfast"][2:7] == ["Report Guest", "report@example.com", 2, 1, 0]
    assert rows["Lunch"][4:9] == [0, 0, 0, 0, 1]


@pytest.mark.asyncio
async def test_expense_export_follows_visibility(
    rpc: Rpc, admin_token: str, member_token: str, catalog: dict[str, Any]
) -> None:
    for token, vendor in ((member_token, "Bakery"), (admin_token, "Florist")):
        r = await rpc(
            "createExpense",
            authToken=token,
            expenseType="Supplies",
            vendor=vendor,
            amount=10,
            eventId=catalog["event"],
        )
        assert r.status_code == 200

    r = await rpc("exportToExcel", authToken=member_token, exportType="expenses")
    assert [row[3] for row in r.json()["data"]] == ["Bakery"]

    r = await rpc("exportToExcel", authToken=admin_token, exportType="expenses")
    assert {row[3] for row in r.json()["data"]} == {"Bakery", "Florist"}
