"""Small bet-planning calculators: stake to win N units, and parlays."""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass

from paperedge.betting.odds import (
    american_to_decimal,
    decimal_to_american,
    implied_probability_pct,
    is_valid_american_odds,
)
from paperedge.betting.records import Invalid, Result
from paperedge.utils.money import is_positive_amount


@dataclass(frozen=True)
class UnitBetResult:
    wager: float
    target_win: float
    total_winnings: float  # wager + target_win
    units_to_win: float


@dataclass(frozen=True)
class ParlayResult:
    combined_decimal_odds: float
    combined_american_odds: int
    total_payout: float
    profit: float
    overall_probability_pct: float
    leg_probabilities_pct: tuple[float, ...]


def stake_to_win(target_win: float, odds: int) -> float:
    """Stake needed at ``odds`` for a profit of ``target_win``.

    Inverse of :func:`~paperedge.betting.odds.calculate_return`.
    """
    if odds < 0:
        return target_win * abs(odds) / 100
    return target_win * 100 / odds


def solve_unit_bet(unit_size: float, units_to_win: float, odds: int) -> Result[UnitBetResult]:
    """How much to wager to win ``units_to_win`` units of ``unit_size``."""
    errors: dict[str, str] = {}
    if not is_positive_amount(unit_size):
        errors["unit_size"] = "Please enter a valid unit size"
    if not is_positive_amount(units_to_win):
        errors["units_to_win"] = "Please enter a valid number of units"
    if not is_valid_american_odds(odds):
        errors["odds"] = "Please enter valid American odds"
    if errors:
        return Invalid(errors)

    target_win = unit_size * units_to_win
    wager = stake_to_win(target_win, odds)
    return UnitBetResult(
        wager=wager,
        target_win=target_win,
        total_winnings=wager + target_win,
        units_to_win=units_to_win,
    )


def solve_parlay(leg_odds: Sequence[int], wager: float) -> Result[ParlayResult]:
    """Combine two or more legs into a single parlay price and payout."""
    errors: dict[str, str] = {}
    if not is_positive_amount(wager):
        errors["wager"] = "Please enter a valid wager amount"
    if len(leg_odds) < 2:
        errors["legs"] = "Please enter odds for at least 2 legs"
    elif not all(is_valid_american_odds(o) for o in leg_odds):
        errors["legs"] = "Please enter valid American odds for all legs"
    if errors:
        return Invalid(errors)

    combined = math.prod(american_to_decimal(o) for o in leg_odds)
    payout = wager * combined
    return ParlayResult(
        combined_decimal_odds=combined,
        combined_american_odds=decimal_to_american(combined),
        total_payout=payout,
        profit=payout - wager,
        overall_probability_pct=1 / combined * 100,
        leg_probabilities_pct=tuple(implied_probability_pct(o) for o in leg_odds),
    )
