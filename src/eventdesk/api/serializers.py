"""
eventdesk.api.serializers

ORM-to-wire projections.

Responsibilities:
- Render persisted rows with the camelCase field names clients use.
- Include a relationship only when the repository loaded it (never trigger
  lazy loads under an AsyncSession).
"""

from __future__ import annotations

from typing import Any

from sqlalchemy import inspect

from eventdesk.db.models import (
    Event,
    EventSession,
    Expense,
    Guest,
    Member,
    Order,
    OrderLine,
    Product,
    ProductSessionMap,
    ProductVariant,
    RecordStatus,
    User,
    Venue,
)
from eventdesk.services.events import SessionLoad

Json = dict[str, Any]


def _loaded(obj: Any, attr: str) -> bool:
    return attr not in inspect(obj).unloaded


def member_out(m: Member) -> Json:
    return {
        "id": m.id,
        "memberName": m.name,
        "memberEmail": m.email,
        "memberPhone": m.phone,
        "adults": m.adults,
        "children": m.children,
        "infants": m.infants,
        "elder": m.elder,
        "createdAt": m.created_at,
        "updatedAt": m.updated_at,
    }


def user_out(u: User) -> Json:
    return {
        "id": u.id,
        "email": u.email,
        "role": u.role,
        "memberId": u.member_id,
        "member": member_out(u.member) if u.member is not None else None,
        "createdAt": u.created_at,
    }


def venue_out(v: Venue) -> Json:
    out: Json = {
        "id": v.id,
        "venueAddress": v.address,
        "venueCapacity": v.capacity,
        "venueDetails": v.details,
        "createdAt": v.created_at,
        "updatedAt": v.updated_at,
    }
    if _loaded(v, "events"):
        out["events"] = [
            {
                "id": e.id,
                "eventName": e.name,
                "startDate": e.start_date,
                "endDate": e.end_date,
            }
            for e in v.events
        ]
    return out


def _event_brief(e: Event) -> Json:
    return {"id": e.id, "eventName": e.name, "startDate": e.start_date, "endDate": e.end_date}


def session_out(s: EventSession) -> Json:
    out: Json = {
        "id": s.id,
        "sessionName": s.name,
        "sessionDate": s.session_date,
        "startTime": s.start_time,
        "endTime": s.end_time,
        "sessionDetails": s.details,
        "sessionBalanceCapacity": s.capacity,
        "eventId": s.event_id,
    }
    if _loaded(s, "event"):
        out["event"] = _event_brief(s.event)
    if _loaded(s, "product_maps"):
        out["products"] = [product_out(m.product) for m in s.product_maps]
    return out


def session_load_out(load: SessionLoad) -> Json:
    return {
        **session_out(load.session),
        "currentRegistrations": load.current_registrations,
        "availableSpots": load.available_spots,
        "isFull": load.is_full,
    }


def event_out(e: Event) -> Json:
    out: Json = {
        "id": e.id,
        "eventName": e.name,
        "startDate": e.start_date,
        "endDate": e.end_date,
        "eventDetails": e.details,
        "venueId": e.venue_id,
        "createdAt": e.created_at,
        "updatedAt": e.updated_at,
    }
    if _loaded(e, "venue"):
        out["venue"] = venue_out(e.venue)
    if _loaded(e, "sessions"):
        out["sessions"] = [session_out(s) for s in e.sessions]
    if _loaded(e, "expenses"):
        out["expenses"] = [
            {"id": x.id, "amount": x.amount, "status": x.status} for x in e.expenses
        ]
    return out


def variant_out(v: ProductVariant) -> Json:
    return {
        "id": v.id,
        "productId": v.product_id,
        "productSize": v.size,
        "productChoice": v.choice,
        "productPref": v.preference,
        "productPrice": v.price,
        "productSubtype": v.subtype,
        "status": v.status,
    }


def product_out(p: Product) -> Json:
    out: Json = {
        "id": p.id,
        "productCode": p.code,
        "productName": p.name,
        "productDesc": p.description,
        "productType": p.kind,
        "status": p.status,
        "createdAt": p.created_at,
    }
    if _loaded(p, "variants"):
        out["productTypes"] = [
            variant_out(v) for v in p.variants if v.status == RecordStatus.active
        ]
    if _loaded(p, "session_maps"):
        out["sessions"] = [
            session_out(m.session) for m in p.session_maps if _loaded(m, "session")
        ]
    return out


def session_map_out(m: ProductSessionMap) -> Json:
    return {
        "id": m.id,
        "sessionId": m.session_id,
        "productId": m.product_id,
        "product": product_out(m.product),
        "session": session_out(m.session),
    }


def expense_out(x: Expense) -> Json:
    out: Json = {
        "id": x.id,
        "expenseType": x.expense_type,
        "vendor": x.vendor,
        "amount": x.amount,
        "receiptFile": x.receipt_file,
        "status": x.status,
        "incurredBy": x.incurred_by,
        "eventId": x.event_id,
        "createdAt": x.created_at,
        "updatedAt": x.updated_at,
    }
    if _loaded(x, "member"):
        out["member"] = member_out(x.member)
    if _loaded(x, "event"):
        out["event"] = _event_brief(x.event)
    return out


def guest_out(g: Guest) -> Json:
    return {
        "id": g.id,
        "guestName": g.name,
        "guestEmail": g.email,
        "guestPhone": g.phone,
        "guestLocation": g.location,
        "adults": g.adults,
        "children": g.children,
        "infants": g.infants,
        "elder": g.elder,
        "memberId": g.member_id,
        "createdAt": g.created_at,
    }


def order_line_out(ln: OrderLine) -> Json:
    return {
        "id": ln.id,
        "productId": ln.product_id,
        "productTypeId": ln.product_variant_id,
        "sessionId": ln.session_id,
        "quantity": ln.quantity,
        "product": product_out(ln.product),
        "productType": variant_out(ln.variant) if ln.variant is not None else None,
        "session": session_out(ln.session) if ln.session is not None else None,
    }


def order_out(o: Order) -> Json:
    return {
        "id": o.id,
        "transactionId": o.transaction_id,
        "totalCost": o.total_cost,
        "status": o.status,
        "guestId": o.guest_id,
        "memberId": o.member_id,
        "guest": guest_out(o.guest) if o.guest is not None else None,
        "member": member_out(o.member) if o.member is not None else None,
        "orderLines": [order_line_out(ln) for ln in o.lines],
        "createdAt": o.created_at,
    }
