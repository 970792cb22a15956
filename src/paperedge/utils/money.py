"""Presentation-boundary rounding for currency and percentages.

Aggregates are accumulated as plain floats and rounded once, here, right
before display. Python's built-in ``round`` uses banker's rounding, so these
helpers go through :class:`decimal.Decimal` with ``ROUND_HALF_UP``.
"""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal
from numbers import Real


def round_half_up(value: float, places: int = 2) -> float:
    """Round ``value`` to ``places`` decimals, halves away from zero.

    The float is converted through ``repr`` so that ``2.675`` rounds to
    ``2.68`` rather than the ``2.67`` its binary representation implies.
    """
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(repr(float(value))).quantize(quantum, rounding=ROUND_HALF_UP))


def round_currency(value: float) -> float:
    """Round a currency amount to cents."""
    return round_half_up(value, 2)


def format_currency(amount: float) -> str:
    """Format as ``$1,234.56`` / ``-$1,234.56``."""
    rounded = round_currency(amount)
    sign = "-" if rounded < 0 else ""
    return f"{sign}${abs(rounded):,.2f}"


def format_percentage(value: float) -> str:
    """Format a percentage with one decimal, e.g. ``52.4%``."""
    return f"{round_half_up(value, 1):.1f}%"


def is_positive_amount(value: object) -> bool:
    """True for a finite number greater than zero (bools excluded)."""
    if isinstance(value, bool) or not isinstance(value, Real):
        return False
    return math.isfinite(value) and value > 0
