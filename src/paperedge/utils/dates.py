"""Calendar-day helpers.

Wager and ledger dates are ``YYYY-MM-DD`` strings with no timezone. Zero-padded
ISO strings sort lexicographically in chronological order, so comparisons in
the engine stay on the strings and never go through ``datetime``.
"""

from __future__ import annotations

import re
from datetime import date

_ISO_DAY = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def is_iso_day(value: str) -> bool:
    """True if ``value`` is a well-formed ``YYYY-MM-DD`` calendar day."""
    if not isinstance(value, str) or not _ISO_DAY.match(value):
        return False
    try:
        date.fromisoformat(value)
    except ValueError:
        return False
    return True


def to_iso_day(value: date | str) -> str:
    """Normalize a ``date`` (or ISO string) to ``YYYY-MM-DD``."""
    if isinstance(value, date):
        return value.isoformat()
    return str(value)[:10]


def in_day_range(day: str, start: str | None = None, end: str | None = None) -> bool:
    """Inclusive calendar-day range check; either bound may be omitted.

    ``end`` covers the whole day: any timestamp suffix on ``day`` is ignored.
    """
    day = day[:10]
    if start is not None and day < start:
        return False
    if end is not None and day > end:
        return False
    return True


def year_bounds(year: int) -> tuple[str, str]:
    """Return ``("YYYY-01-01", "YYYY-12-31")`` for ``year``."""
    return f"{year:04d}-01-01", f"{year:04d}-12-31"
