"""UTC time helpers.

Timestamps are stored as naive UTC datetimes; anything timezone-aware is
converted on the way in so comparisons never mix the two.
"""

from datetime import datetime, timezone


def utc_now() -> datetime:
    """Current time as a naive UTC datetime."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_naive_utc(value: datetime | None) -> datetime | None:
    """Normalize a datetime to naive UTC. Naive values are assumed to be UTC."""
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)
