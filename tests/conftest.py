"""
tests.conftest

Shared fixtures: an app per test on a temporary SQLite file, an httpx client
over ASGITransport, and helpers to log in and build a small catalog.
"""

from __future__ import annotations

from collections.abc import AsyncIterator, Awaitable, Callable
from datetime import timedelta
from typing import Any

import httpx
import pytest
import pytest_asyncio

from eventdesk.api.app import create_app
from eventdesk.services.clock import today
from eventdesk.settings import Settings

ADMIN_EMAIL = "admin@eventmanagement.com"
ADMIN_PASSWORD = "admin-pass-123"

Rpc = Callable[..., Awaitable[httpx.Response]]


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        env="test",
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'eventdesk.db'}",
        jwt_secret="test-secret",
        admin_email=ADMIN_EMAIL,
        admin_password=ADMIN_PASSWORD,
    )


@pytest_asyncio.fixture
async def client(settings: Settings) -> AsyncIterator[httpx.AsyncClient]:
    app = create_app(settings=settings)
    # httpx ASGITransport does not manage lifespan; enter it explicitly.
    async with app.router.lifespan_context(app):
        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
            yield c


@pytest.fixture
def rpc(client: httpx.AsyncClient) -> Rpc:
    async def call(procedure: str, **body: Any) -> httpx.Response:
        return await client.post(f"/rpc/{procedure}", json=body)

    return call


@pytest_asyncio.fixture
async def admin_token(rpc: Rpc) -> str:
    r = await rpc("login", email=ADMIN_EMAIL, password=ADMIN_PASSWORD)
    assert r.status_code == 200, r.text
    return r.json()["token"]


@pytest_asyncio.fixture
async def member(rpc: Rpc) -> dict[str, Any]:
    r = await rpc(
        "register",
        memberName="Jane Doe",
        memberEmail="jane@example.com",
        memberPhone="555-0100",
        adults=2,
        children=1,
        password="secret-pw",
    )
    assert r.status_code == 200, r.text
    return r.json()


@pytest.fixture
def member_token(member: dict[str, Any]) -> str:
    return member["token"]


def day(offset: int) -> str:
    return (today() + timedelta(days=offset)).isoformat()


@pytest_asyncio.fixture
async def catalog(rpc: Rpc, admin_token: str) -> dict[str, Any]:
    """Venue, an upcoming three-session event, and Entry/Food products tagged to it."""
    ids: dict[str, Any] = {}

    r = await rpc(
        "createVenue",
        authToken=admin_token,
        venueAddress="1 Hall Road",
        venueCapacity=300,
        venueDetails="Main hall",
    )
    assert r.status_code == 200, r.text
    ids["venue"] = r.json()["venue"]["id"]

    r = await rpc(
        "createEvent",
        authToken=admin_token,
        eventName="Autumn Festival",
        startDate=day(10),
        endDate=day(12),
        venueId=ids["venue"],
    )
    assert r.status_code == 200, r.text
    ids["event"] = r.json()["event"]["id"]

    ids["sessions"] = []
    for name, offset, capacity in (("Breakfast", 10, 100), ("Lunch", 11, 100), ("Gala", 12, 3)):
        r = await rpc(
            "createSession",
            authToken=admin_token,
            sessionName=name,
            sessionDate=f"{day(offset)}T10:00:00",
            startTime="10:00",
            endTime="12:00",
            sessionBalanceCapacity=capacity,
            eventId=ids["event"],
        )
        assert r.status_code == 200, r.text
        ids["sessions"].append(r.json()["session"]["id"])

    r = await rpc(
        "createProduct",
        authToken=admin_token,
        productCode="ENTRY-001",
        productName="Entry",
        productType="Entry",
        productTypes=[
            _variant("Adult", "NONE", "NONE", 50, "NONE"),
            _variant("Children", "NONE", "NONE", 25, "NONE"),
            _variant("Elder", "NONE", "NONE", 40, "NONE"),
        ],
    )
    assert r.status_code == 200, r.text
    entry = r.json()["product"]
    ids["entry"] = entry["id"]
    ids["entry_variants"] = {v["productSize"]: v["id"] for v in entry["productTypes"]}

    r = await rpc(
        "createProduct",
        authToken=admin_token,
        productCode="FOOD-001",
        productName="Meal",
        productType="Food",
        productTypes=[
            _variant("Adult", "VEG", "NONE", 30, "DINE-IN"),
            _variant("Children", "VEG", "NONE", 15, "DINE-IN"),
            _variant("Adult", "NON-VEG", "CHICKEN", 35, "PACKET"),
        ],
    )
    assert r.status_code == 200, r.text
    food = r.json()["product"]
    ids["food"] = food["id"]
    ids["food_variants"] = {
        (v["productSize"], v["productSubtype"]): v["id"] for v in food["productTypes"]
    }

    for session_id in ids["sessions"]:
        for product_id in (ids["entry"], ids["food"]):
            r = await rpc(
                "addProductToSession",
                authToken=admin_token,
                productId=product_id,
                sessionId=session_id,
            )
            assert r.status_code == 200, r.text
    return ids


def _variant(size: str, choice: str, pref: str, price: float, subtype: str) -> dict[str, Any]:
    return {
        "productSize": size,
        "productChoice": choice,
        "productPref": pref,
        "productPrice": price,
        "productSubtype": subtype,
    }


def entry_pick(catalog: dict[str, Any], size: str, quantity: int) -> dict[str, Any]:
    return {
        "productId": catalog["entry"],
        "productTypeId": catalog["entry_variants"][size],
        "quantity": quantity,
    }


def food_pick(
    catalog: dict[str, Any], size: str, quantity: int, subtype: str = "DINE-IN"
) -> dict[str, Any]:
    return {
        "productId": catalog["food"],
        "productTypeId": catalog["food_variants"][(size, subtype)],
        "quantity": quantity,
    }
