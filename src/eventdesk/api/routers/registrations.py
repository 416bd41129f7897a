"""
eventdesk.api.routers.registrations

Event registration procedures.

Responsibilities:
- Public guest registration sponsored by a member.
- Member self-registration (entry free, food charged).
- Order count for dashboards.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from eventdesk.api.deps import db_session, gate_dep
from eventdesk.api.schemas import (
    AuthedRequest,
    GuestRegistrationRequest,
    MemberRegistrationRequest,
    SessionSelection,
)
from eventdesk.api.serializers import guest_out, member_out, order_out
from eventdesk.auth.gate import AccessGate
from eventdesk.services.orders import OrderService
from eventdesk.services.registrations import (
    GuestDetails,
    Party,
    ProductPick,
    RegistrationService,
    SessionPick,
)

router = APIRouter(prefix="/rpc", tags=["registrations"])


def _selections(raw: list[SessionSelection]) -> list[SessionPick]:
    return [
        SessionPick(
            session_id=sel.session_id,
            opt_out_of_food=sel.opt_out_of_food,
            picks=[
                ProductPick(
                    product_id=p.product_id, variant_id=p.product_type_id, quantity=p.quantity
                )
                for p in sel.product_selections
            ],
        )
        for sel in raw
    ]


@router.post("/guestRegistration")
async def guest_registration(
    body: GuestRegistrationRequest,
    session: AsyncSession = Depends(db_session),
) -> dict[str, Any]:
    result = await RegistrationService(session=session).register_guest(
        sponsor_member_id=body.member_id,
        event_id=body.event_id,
        guest=GuestDetails(
            name=body.guest_name,
            email=body.guest_email,
            phone=body.guest_phone,
            location=body.guest_location,
        ),
        party=Party(
            adults=body.adults, children=body.children, infants=body.infants, elder=body.elder
        ),
        selections=_selections(body.session_selections),
    )
    quote = result.quote
    return {
        "success": True,
        "transactionId": result.transaction_id,
        "totalCost": quote.total_cost,
        "discountApplied": quote.discount_applied,
        "discountAmount": quote.discount_amount,
        "entryCost": quote.entry_cost,
        "foodCost": quote.food_cost,
        "guest": guest_out(result.guest) if result.guest is not None else None,
        "order": order_out(result.order),
    }


@router.post("/memberRegistration")
async def member_registration(
    body: MemberRegistrationRequest,
    gate: AccessGate = Depends(gate_dep),
    session: AsyncSession = Depends(db_session),
) -> dict[str, Any]:
    principal = await gate.require_member(body.auth_token)
    party = Party(
        adults=body.adults, children=body.children, infants=body.infants, elder=body.elder
    )
    result = await RegistrationService(session=session).register_member(
        principal=principal,
        event_id=body.event_id,
        party=party,
        selections=_selections(body.session_selections),
    )
    member = member_out(result.member) if result.member is not None else None
    if member is not None:
        # The party registered for this event, which may differ from the stored profile.
        member["familyDetails"] = {
            "adults": party.adults,
            "children": party.children,
            "infants": party.infants,
            "elder": party.elder,
        }
    return {
        "success": True,
        "transactionId": result.transaction_id,
        "totalCost": result.quote.total_cost,
        "member": member,
        "order": order_out(result.order),
    }


@router.post("/getRegistrationCount")
async def get_registration_count(
    body: AuthedRequest,
    gate: AccessGate = Depends(gate_dep),
    session: AsyncSession = Depends(db_session),
) -> dict[str, int]:
    await gate.require_authenticated(body.auth_token)
    return {"count": await OrderService(session=session).count()}
