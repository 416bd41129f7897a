from __future__ import annotations

from typing import Any

import pytest

from conftest import Rpc, day


async def _venue(rpc: Rpc, token: str) -> int:
    r = await rpc("createVenue", authToken=token, venueAddress="2 Park Lane", venueCapacity=50)
    assert r.status_code == 200, r.text
    return r.json()["venue"]["id"]


@pytest.mark.asyncio
async def test_venue_crud(rpc: Rpc, admin_token: str) -> None:
    venue_id = await _venue(rpc, admin_token)

    r = await rpc("updateVenue", authToken=admin_token, venueId=venue_id, venueCapacity=75)
    assert r.json()["venue"]["venueCapacity"] == 75
    assert r.json()["venue"]["venueAddress"] == "2 Park Lane"

    r = await rpc("deleteVenue", authToken=admin_token, venueId=venue_id)
    assert r.json() == {"success": True}

    r = await rpc("deleteVenue", authToken=admin_token, venueId=venue_id)
    assert r.status_code == 404


@pytest.mark.asyncio
async def test_venue_with_events_cannot_be_deleted(
    rpc: Rpc, admin_token: str, catalog: dict[str, Any]
) -> None:
    r = await rpc("deleteVenue", authToken=admin_token, venueId=catalog["venue"])
    assert r.status_code == 400
    assert r.json()["error"]["message"] == "Cannot delete venue with existing events"

    r = await rpc("getVenues", authToken=admin_token)
    (venue,) = r.json()
    assert [e["eventName"] for e in venue["events"]] == ["Autumn Festival"]


@pytest.mark.asyncio
async def test_member_cannot_create_venue(rpc: Rpc, member_token: str) -> None:
    r = await rpc("createVenue", authToken=member_token, venueAddress="x", venueCapacity=1)
    assert r.status_code == 403


@pytest.mark.asyncio
async def test_event_date_and_venue_rules(rpc: Rpc, admin_token: str) -> None:
    venue_id = await _venue(rpc, admin_token)

    r = await rpc(
        "createEvent",
        authToken=admin_token,
        eventName="Backwards",
        startDate=day(5),
        endDate=day(4),
        venueId=venue_id,
    )
    assert r.status_code == 400
    assert r.json()["error"]["message"] == "End date must be on or after start date"

    r = await rpc(
        "createEvent",
        authToken=admin_token,
        eventName="Nowhere",
        startDate=day(5),
        endDate=day(5),
        venueId=venue_id + 100,
    )
    assert r.status_code == 404

    r = await rpc(
        "createEvent",
        authToken=admin_token,
        eventName="One Day",
        startDate=day(5),
        endDate=day(5),
        venueId=venue_id,
    )
    assert r.status_code == 200
    event = r.json()["event"]
    assert event["venue"]["id"] == venue_id
    assert event["sessions"] == []

    r = await rpc(
        "updateEvent", authToken=admin_token, eventId=event["id"], endDate=day(4)
    )
    assert r.status_code == 400


@pytest.mark.asyncio
async def test_session_must_fall_within_event_days(
    rpc: Rpc, admin_token: str, catalog: dict[str, Any]
) -> None:
    base = {
        "authToken": admin_token,
        "sessionName": "Late Show",
        "startTime": "21:00",
        "endTime": "23:30",
        "sessionBalanceCapacity": 10,
        "eventId": catalog["event"],
    }
    r = await rpc("createSession", sessionDate=f"{day(13)}T09:00:00", **base)
    assert r.status_code == 400
    assert r.json()["error"]["message"] == "Session date must be within event date range"

    # Evening of the last day is still inside the range.
    r = await rpc("createSession", sessionDate=f"{day(12)}T21:00:00", **base)
    assert r.status_code == 200
    session_id = r.json()["session"]["id"]

    r = await rpc(
        "updateSession",
        authToken=admin_token,
        sessionId=session_id,
        sessionDate=f"{day(9)}T21:00:00",
    )
    assert r.status_code == 400

    r = await rpc(
        "updateSession", authToken=admin_token, sessionId=session_id, sessionBalanceCapacity=20
    )
    assert r.json()["session"]["sessionBalanceCapacity"] == 20

    r = await rpc("deleteSession", authToken=admin_token, sessionId=session_id)
    assert r.json() == {"success": True}


@pytest.mark.asyncio
async def test_get_events_and_sessions(
    rpc: Rpc, member_token: str, catalog: dict[str, Any]
) -> None:
    r = await rpc("getEvents", authToken=member_token)
    (event,) = r.json()
    assert [s["sessionName"] for s in event["sessions"]] == ["Breakfast", "Lunch", "Gala"]
    assert event["expenses"] == []

    r = await rpc("getSessions", authToken=member_token, eventId=catalog["event"])
    sessions = r.json()
    assert len(sessions) == 3
    gala = sessions[-1]
    assert gala["currentRegistrations"] == 0
    assert gala["availableSpots"] == 3
    assert gala["isFull"] is False
    assert {p["productCode"] for p in gala["products"]} == {"ENTRY-001", "FOOD-001"}


@pytest.mark.asyncio
async def test_delete_event_without_registrations_removes_sessions(
    rpc: Rpc, admin_token: str, catalog: dict[str, Any]
) -> None:
    r = await rpc("deleteEvent", authToken=admin_token, eventId=catalog["event"])
    assert r.json() == {"success": True}

    r = await rpc("getSessions", authToken=admin_token)
    assert r.json() == []
