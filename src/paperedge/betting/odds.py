"""American odds math: validation, conversion, returns and payouts.

Every function here is pure: no I/O, no logging, no side effects.

Sign convention: positive odds are the profit on a 100 stake (``+150`` wins
150 on 100), negative odds are the stake needed to profit 100 (``-110``
risks 110 to win 100). Numeric helpers assume valid odds; check with
:func:`is_valid_american_odds` first. Nothing is clamped.
"""

from __future__ import annotations

import math
from numbers import Integral


def is_valid_american_odds(odds: object) -> bool:
    """Return True if ``odds`` is a usable American odds value.

    Valid odds are integers ``>= 100`` or ``< -100``. ``+100`` is the only
    even-money boundary allowed; ``-100``, zero and anything strictly between
    are rejected. Floats with an integral value (``150.0``) are accepted,
    booleans are not. Never raises.
    """
    if isinstance(odds, bool):
        return False
    if isinstance(odds, Integral):
        value = int(odds)
    elif isinstance(odds, float):
        if not math.isfinite(odds) or not odds.is_integer():
            return False
        value = int(odds)
    else:
        return False
    return value >= 100 or value < -100


def calculate_return(odds: int, stake: float) -> float:
    """Profit on a winning bet, excluding the returned stake.

    calculate_return(150, 100)  → 150.0
    calculate_return(-110, 110) → 100.0
    """
    if odds > 0:
        return odds / 100 * stake
    return 100 / abs(odds) * stake


def calculate_payout(odds: int, stake: float) -> float:
    """Total payout on a winning bet: stake plus profit."""
    return stake + calculate_return(odds, stake)


def american_to_decimal(odds: int) -> float:
    """Convert American odds to decimal odds. +150 → 2.5, -200 → 1.5."""
    if odds > 0:
        return odds / 100 + 1
    return 100 / abs(odds) + 1


def decimal_to_american(decimal_odds: float) -> int:
    """Convert decimal odds to the nearest American integer.

    Values of 2.0 and above map to positive (underdog) odds, anything below
    to negative (favorite) odds. Intended for display.
    """
    if decimal_odds >= 2:
        return round((decimal_odds - 1) * 100)
    return round(-100 / (decimal_odds - 1))


def implied_probability_pct(odds: int) -> float:
    """Implied win probability as a percentage in (0, 100).

    Negative odds (favorites): |odds| / (|odds| + 100)
    Positive odds (underdogs): 100 / (odds + 100)
    """
    if odds > 0:
        return 100 / (odds + 100) * 100
    return abs(odds) / (abs(odds) + 100) * 100


def parse_american_odds(text: str) -> int | None:
    """Parse user-entered odds such as ``"+150"``, ``"-110"`` or ``"150"``.

    An unsigned number is read as positive. Returns None for blanks,
    non-integers and a zero magnitude. The result is not range-checked.
    """
    trimmed = (text or "").strip()
    sign = 1
    if trimmed.startswith("+"):
        trimmed = trimmed[1:]
    elif trimmed.startswith("-"):
        sign = -1
        trimmed = trimmed[1:]
    if not (trimmed.isascii() and trimmed.isdecimal()):
        return None
    magnitude = int(trimmed)
    if magnitude <= 0:
        return None
    return sign * magnitude


def format_odds(odds: int) -> str:
    """Format odds for display with an explicit ``+`` on positive values."""
    return f"+{odds}" if odds > 0 else f"{odds}"
