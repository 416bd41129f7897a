"""
eventdesk.services.pricing

Registration pricing rules.

Responsibilities:
- Apply the multi-session entry discount for guest registrations.
- Price member registrations (entry free, food at list price).
- Generate transaction ids.
"""

from __future__ import annotations

import secrets
import time
from dataclasses import dataclass

# Entry discount by number of distinct sessions selected, when not all of them.
SESSION_COUNT_DISCOUNTS: dict[int, float] = {4: 0.25, 3: 0.20, 2: 0.10}
ALL_SESSIONS_DISCOUNT = 0.30


@dataclass(frozen=True, slots=True)
class Quote:
    entry_subtotal: float
    entry_cost: float
    food_cost: float
    discount_rate: float

    @property
    def discount_amount(self) -> float:
        return round(self.entry_subtotal - self.entry_cost, 2)

    @property
    def discount_applied(self) -> bool:
        return self.discount_amount > 0

    @property
    def total_cost(self) -> float:
        return round(self.entry_cost + self.food_cost, 2)


def entry_discount_rate(*, selected_sessions: int, event_sessions: int) -> float:
    if selected_sessions <= 0:
        return 0.0
    if selected_sessions == event_sessions:
        return ALL_SESSIONS_DISCOUNT
    if selected_sessions > event_sessions:
        return 0.0
    return SESSION_COUNT_DISCOUNTS.get(selected_sessions, 0.0)


def quote_guest(
    *,
    entry_subtotal: float,
    food_subtotal: float,
    selected_sessions: int,
    event_sessions: int,
) -> Quote:
    rate = entry_discount_rate(
        selected_sessions=selected_sessions, event_sessions=event_sessions
    )
    if entry_subtotal <= 0:
        rate = 0.0
    return Quote(
        entry_subtotal=round(entry_subtotal, 2),
        entry_cost=round(entry_subtotal * (1 - rate), 2),
        food_cost=round(food_subtotal, 2),
        discount_rate=rate,
    )


def quote_member(*, food_subtotal: float) -> Quote:
    # Members are not charged for entry.
    return Quote(
        entry_subtotal=0.0,
        entry_cost=0.0,
        food_cost=round(food_subtotal, 2),
        discount_rate=0.0,
    )


def new_transaction_id(prefix: str) -> str:
    return f"{prefix}-{int(time.time() * 1000)}-{secrets.token_hex(4).upper()}"


# --- Module Notes -----------------------------------------------------------
# Food is never discounted. The discount reported to clients is whatever tier
# applied, not only the all-sessions tier.
