from __future__ import annotations

from datetime import UTC, date, datetime


def utcnow() -> datetime:
    # Naive UTC, matching what the schema stores.
    return datetime.now(tz=UTC).replace(tzinfo=None)


def today() -> date:
    return utcnow().date()


def naive_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone(UTC).replace(tzinfo=None)
