"""Logic for filtering out expired pages."""

from datetime import datetime

from gallery_audit.placeholder_visit import Posting


def to_local_naive(value: datetime) -> datetime:
    """Convert an offset-aware datetime to naive local time."""
    if value.tzinfo is None:
        return value
    return value.astimezone().replace(tzinfo=None)


def is_expired(posting: Posting, now: datetime | None = None) -> bool:
    """Return True when the page's expiry date is at or before ``now``.

    Offset-aware and naive values are compared in naive local time.
    """
    if posting.expiry_date is None:
        return False
    now = now or datetime.now()
    return to_local_naive(posting.expiry_date) <= to_local_naive(now)
