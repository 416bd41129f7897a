from __future__ import annotations

import re

import pytest

from eventdesk.services.pricing import (
    entry_discount_rate,
    new_transaction_id,
    quote_guest,
    quote_member,
)


@pytest.mark.parametrize(
    ("selected", "total", "rate"),
    [
        (1, 5, 0.0),
        (2, 5, 0.10),
        (3, 5, 0.20),
        (4, 5, 0.25),
        (5, 5, 0.30),
        (2, 2, 0.30),
        (6, 8, 0.0),
        (0, 3, 0.0),
    ],
)
def test_entry_discount_tiers(selected: int, total: int, rate: float) -> None:
    assert entry_discount_rate(selected_sessions=selected, event_sessions=total) == rate


def test_guest_quote_discounts_entry_only() -> None:
    quote = quote_guest(
        entry_subtotal=200, food_subtotal=60, selected_sessions=4, event_sessions=6
    )
    assert quote.entry_cost == 150
    assert quote.discount_amount == 50
    assert quote.discount_applied is True
    assert quote.total_cost == 210


def test_guest_quote_without_entry_has_no_discount() -> None:
    quote = quote_guest(entry_subtotal=0, food_subtotal=45, selected_sessions=3, event_sessions=3)
    assert quote.discount_applied is False
    assert quote.total_cost == 45


def test_member_quote_is_food_only() -> None:
    quote = quote_member(food_subtotal=64.5)
    assert quote.entry_cost == 0
    assert quote.total_cost == 64.5


def test_transaction_id_format() -> None:
    assert re.fullmatch(r"TXN-\d{13}-[0-9A-F]{8}", new_transaction_id("TXN"))
    assert new_transaction_id("MBR") != new_transaction_id("MBR")
