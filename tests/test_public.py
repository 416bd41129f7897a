from __future__ import annotations

from typing import Any

import pytest

from conftest import Rpc, day


@pytest.mark.asyncio
async def test_public_events_hide_finished_ones(
    rpc: Rpc, admin_token: str, catalog: dict[str, Any]
) -> None:
    r = await rpc(
        "createEvent",
        authToken=admin_token,
        eventName="Last Week",
        startDate=day(-7),
        endDate=day(-6),
        venueId=catalog["venue"],
    )
    assert r.status_code == 200

    r = await rpc("getPublicEvents")
    events = r.json()
    assert [e["eventName"] for e in events] == ["Autumn Festival"]
    assert events[0]["venue"]["venueAddress"] == "1 Hall Road"
    assert len(events[0]["sessions"]) == 3


@pytest.mark.asyncio
async def test_public_sessions_need_an_event(rpc: Rpc, catalog: dict[str, Any]) -> None:
    r = await rpc("getPublicSessions")
    assert r.json() == []

    r = await rpc("getPublicSessions", eventId=catalog["event"])
    sessions = r.json()
    assert [s["sessionName"] for s in sessions] == ["Breakfast", "Lunch", "Gala"]
    assert sessions[0]["availableSpots"] == 100
    entry = next(p for p in sessions[0]["products"] if p["productCode"] == "ENTRY-001")
    assert {v["productSize"] for v in entry["productTypes"]} == {"Adult", "Children", "Elder"}


@pytest.mark.asyncio
async def test_public_members_expose_identity_only(
    rpc: Rpc, admin_token: str, member: dict[str, Any]
) -> None:
    r = await rpc("getPublicMembers")
    members = r.json()
    assert [m["memberName"] for m in members] == ["Jane Doe", "System Administrator"]
    assert set(members[0]) == {"id", "memberName", "memberEmail"}
