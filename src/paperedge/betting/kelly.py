"""Kelly criterion stake sizing against a sharp reference line.

The reference ("sharp") book's implied probability stands in for the true
win probability. The edge is how much that probability exceeds the implied
probability of the line actually being bet. Full Kelly for a win/loss bet is::

    f* = (b * p - q) / b

where ``b`` is the profit per unit at the bettable odds, ``p`` the reference
probability and ``q = 1 - p``. The recommendation caps full Kelly at the
max-bet percentage of bankroll, then scales by the Kelly fraction.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from paperedge.betting.odds import (
    american_to_decimal,
    implied_probability_pct,
    is_valid_american_odds,
)
from paperedge.betting.records import Invalid, Result
from paperedge.config import settings
from paperedge.utils.logging import get_logger
from paperedge.utils.money import is_positive_amount

log = get_logger(__name__)


class EdgeStatus(str, Enum):
    POSITIVE_EDGE = "positiveEdge"
    NEGATIVE_EDGE = "negativeEdge"


@dataclass(frozen=True)
class KellyInput:
    """Two quotes on the same outcome plus bankroll settings.

    ``max_bet_pct`` is a percent of bankroll (5.0 = 5%). ``kelly_fraction``
    multiplies full Kelly (1.0 = full, 0.25 = quarter). Either left as None
    falls back to the configured default.
    """

    bettable_odds: int
    reference_odds: int
    bankroll: float
    max_bet_pct: float | None = None
    kelly_fraction: float | None = None


@dataclass(frozen=True)
class KellyResult:
    """Kelly sizing outcome."""

    edge_pct: float  # reference implied minus bettable implied, percentage points
    recommended_stake: float
    expected_value: float  # for display only
    status: EdgeStatus
    bettable_implied_pct: float
    reference_implied_pct: float
    full_kelly_pct: float  # full Kelly as a percent of bankroll (may be negative)
    max_bet_reached: bool  # final stake sits at the cap


def validate_kelly(
    inputs: KellyInput,
    max_bet_pct: float,
    kelly_fraction: float,
) -> dict[str, str]:
    """Field-level validation errors for a Kelly calculation (empty if valid)."""
    errors: dict[str, str] = {}
    if not is_valid_american_odds(inputs.bettable_odds):
        errors["bettable_odds"] = "Please enter valid American odds (e.g., +100, -110)"
    if not is_valid_american_odds(inputs.reference_odds):
        errors["reference_odds"] = "Please enter valid American odds (e.g., +100, -110)"
    if not is_positive_amount(inputs.bankroll):
        errors["bankroll"] = "Please enter a valid positive bankroll amount"
    if not is_positive_amount(max_bet_pct) or max_bet_pct > 100:
        errors["max_bet_pct"] = "Please enter a valid percentage between 0.1% and 100%"
    if not is_positive_amount(kelly_fraction) or kelly_fraction > 1:
        errors["kelly_fraction"] = "Please enter a valid fraction between 0.1 and 1.0"
    return errors


def solve_kelly(inputs: KellyInput) -> Result[KellyResult]:
    """Recommend a stake for the bettable line.

    A non-positive edge yields ``NEGATIVE_EDGE`` and a zero stake. A positive
    edge yields ``min(full_kelly_stake, cap) * kelly_fraction`` where
    ``cap = bankroll * max_bet_pct / 100``; the result never exceeds the cap.

    Returns :class:`Invalid` for bad odds, a non-positive bankroll, or
    out-of-range sizing settings.
    """
    max_bet_pct = (
        inputs.max_bet_pct if inputs.max_bet_pct is not None else settings.max_bet_pct
    )
    kelly_fraction = (
        inputs.kelly_fraction if inputs.kelly_fraction is not None else settings.kelly_fraction
    )

    errors = validate_kelly(inputs, max_bet_pct, kelly_fraction)
    if errors:
        log.info("kelly_rejected", fields=sorted(errors))
        return Invalid(errors)

    bettable_implied = implied_probability_pct(inputs.bettable_odds)
    reference_implied = implied_probability_pct(inputs.reference_odds)
    p = reference_implied / 100
    edge = p - bettable_implied / 100

    b = american_to_decimal(inputs.bettable_odds) - 1
    full_kelly = (b * p - (1 - p)) / b
    full_kelly_stake = inputs.bankroll * full_kelly
    cap = inputs.bankroll * max_bet_pct / 100

    if edge <= 0:
        stake = 0.0
        status = EdgeStatus.NEGATIVE_EDGE
    else:
        stake = min(full_kelly_stake, cap) * kelly_fraction
        stake = min(max(stake, 0.0), cap)
        status = EdgeStatus.POSITIVE_EDGE

    expected_value = stake * (p * b - (1 - p))

    log.debug("kelly_solved", edge=edge, stake=stake, status=status.value)
    return KellyResult(
        edge_pct=edge * 100,
        recommended_stake=stake,
        expected_value=expected_value,
        status=status,
        bettable_implied_pct=bettable_implied,
        reference_implied_pct=reference_implied,
        full_kelly_pct=full_kelly * 100,
        max_bet_reached=status is EdgeStatus.POSITIVE_EDGE and stake >= cap,
    )
