"""Hedge and arbitrage stake solvers.

Given an existing bet, :func:`solve_hedge` finds the opposing stake that
makes the payout identical whichever side wins. :func:`solve_arbitrage`
splits a fresh total stake across two sides in proportion to their implied
probabilities.
"""

from __future__ import annotations

from dataclasses import dataclass

from paperedge.betting.odds import american_to_decimal, is_valid_american_odds
from paperedge.betting.records import Invalid, Result
from paperedge.utils.logging import get_logger
from paperedge.utils.money import is_positive_amount

log = get_logger(__name__)


@dataclass(frozen=True)
class HedgeInput:
    """An existing bet and the odds available on the other side."""

    original_stake: float
    original_odds: int
    hedge_odds: int


@dataclass(frozen=True)
class HedgeResult:
    """Outcome of an equal-payout hedge (full precision)."""

    hedge_stake: float
    original_side_return: float  # total payout if the original side wins
    hedge_side_return: float  # total payout if the hedge side wins
    guaranteed_profit: float  # worst-case profit net of both stakes
    max_possible_profit: float
    profit_margin_pct: float
    is_profitable: bool


@dataclass(frozen=True)
class ArbitrageResult:
    """Stake split across two opposing sides."""

    side_a_stake: float
    side_b_stake: float
    side_a_return: float
    side_b_return: float
    guaranteed_profit: float
    profit_margin_pct: float
    is_arbitrage: bool


def validate_hedge(inputs: HedgeInput) -> dict[str, str]:
    """Field-level validation errors for a hedge calculation (empty if valid)."""
    errors: dict[str, str] = {}
    if not is_positive_amount(inputs.original_stake):
        errors["original_stake"] = "Please enter a valid original bet amount"
    if not is_valid_american_odds(inputs.original_odds):
        errors["original_odds"] = "Please enter valid original odds"
    if not is_valid_american_odds(inputs.hedge_odds):
        errors["hedge_odds"] = "Please enter valid hedge odds"
    elif american_to_decimal(inputs.hedge_odds) <= 1:
        errors["hedge_odds"] = "Hedge odds must pay more than the stake"
    return errors


def solve_hedge(inputs: HedgeInput) -> Result[HedgeResult]:
    """Size a hedge so both outcomes pay the same.

    With decimal odds ``d0`` (original) and ``dH`` (hedge)::

        original_side_return = S0 * d0
        hedge_stake          = (original_side_return - S0) / (dH - 1)
        hedge_side_return    = hedge_stake * dH
        guaranteed_profit    = min(returns) - (S0 + hedge_stake)

    Returns :class:`Invalid` if the stake is not positive or either odds
    value is not valid American odds.
    """
    errors = validate_hedge(inputs)
    if errors:
        log.info("hedge_rejected", fields=sorted(errors))
        return Invalid(errors)

    stake = inputs.original_stake
    original_decimal = american_to_decimal(inputs.original_odds)
    hedge_decimal = american_to_decimal(inputs.hedge_odds)

    original_return = stake * original_decimal
    hedge_stake = (original_return - stake) / (hedge_decimal - 1)
    hedge_return = hedge_stake * hedge_decimal

    total_invested = stake + hedge_stake
    guaranteed = min(original_return, hedge_return) - total_invested
    max_profit = max(original_return - hedge_stake, hedge_return - stake)

    log.debug("hedge_solved", hedge_stake=hedge_stake, guaranteed_profit=guaranteed)
    return HedgeResult(
        hedge_stake=hedge_stake,
        original_side_return=original_return,
        hedge_side_return=hedge_return,
        guaranteed_profit=guaranteed,
        max_possible_profit=max_profit,
        profit_margin_pct=guaranteed / total_invested * 100,
        is_profitable=guaranteed > 0,
    )


def solve_arbitrage(
    total_stake: float,
    side_a_odds: int,
    side_b_odds: int,
) -> Result[ArbitrageResult]:
    """Split ``total_stake`` across both sides to equalize their payouts.

    Each side gets ``implied_i / sum(implied) * total_stake``. An arbitrage
    exists when the implied probabilities sum to less than one.
    """
    errors: dict[str, str] = {}
    if not is_positive_amount(total_stake):
        errors["total_stake"] = "Please enter a valid total stake"
    if not is_valid_american_odds(side_a_odds):
        errors["side_a_odds"] = "Please enter valid odds"
    if not is_valid_american_odds(side_b_odds):
        errors["side_b_odds"] = "Please enter valid odds"
    if errors:
        log.info("arbitrage_rejected", fields=sorted(errors))
        return Invalid(errors)

    decimal_a = american_to_decimal(side_a_odds)
    decimal_b = american_to_decimal(side_b_odds)
    implied_a = 1 / decimal_a
    implied_b = 1 / decimal_b
    total_implied = implied_a + implied_b

    stake_a = implied_a / total_implied * total_stake
    stake_b = implied_b / total_implied * total_stake
    return_a = stake_a * decimal_a
    return_b = stake_b * decimal_b
    guaranteed = min(return_a, return_b) - total_stake

    return ArbitrageResult(
        side_a_stake=stake_a,
        side_b_stake=stake_b,
        side_a_return=return_a,
        side_b_return=return_b,
        guaranteed_profit=guaranteed,
        profit_margin_pct=guaranteed / total_stake * 100,
        is_arbitrage=total_implied < 1,
    )
