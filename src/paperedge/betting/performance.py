"""Performance metrics over wager collections.

Win rate, P&L, ROI, units and bankroll projection for a notebook, plus the
cross-notebook rollups shown on the account dashboard.

All amounts accumulate at full float precision. Rounding to cents happens
once, in the summary builders, via :func:`paperedge.utils.money.round_currency`.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

import numpy as np
import pandas as pd

from paperedge.betting.records import (
    COMPLETED_STATUSES,
    DECIDED_STATUSES,
    Notebook,
    Wager,
    WagerStatus,
)
from paperedge.utils.logging import get_logger
from paperedge.utils.money import round_currency, round_half_up

log = get_logger(__name__)


@dataclass(frozen=True)
class NotebookSummary:
    """Headline numbers for one notebook (display-rounded)."""

    notebook_id: str | None
    name: str
    total_bets: int
    pending_bets: int
    bets_won: int
    bets_lost: int
    bets_pushed: int
    win_rate: float  # percent of completed bets
    total_staked: float  # won + lost stakes only
    total_pl: float
    roi_pct: float
    units_won: float
    starting_bankroll: float
    current_bankroll: float


@dataclass(frozen=True)
class DashboardSummary:
    """Account-wide rollup across every notebook."""

    total_bets: int
    win_rate: float
    total_pl: float
    roi_pct: float
    active_notebooks: int
    pending_bets: int


def _status(wager: Wager) -> WagerStatus:
    return WagerStatus(wager.status)


def _wager_pl(wager: Wager) -> float:
    """P&L contribution of a single wager."""
    status = _status(wager)
    if status is WagerStatus.WON:
        return wager.profit_amount or 0.0
    if status is WagerStatus.LOST:
        return -wager.stake_amount
    return 0.0


def win_rate(wagers: Iterable[Wager]) -> float:
    """Percent of completed (won/lost/push) wagers that won.

    Pending wagers are excluded from the denominator. Returns 0 when nothing
    has settled.
    """
    completed = 0
    won = 0
    for wager in wagers:
        status = _status(wager)
        if status in COMPLETED_STATUSES:
            completed += 1
            if status is WagerStatus.WON:
                won += 1
    if completed == 0:
        return 0.0
    return won / completed * 100


def total_pl(wagers: Iterable[Wager]) -> float:
    """Sum of profits on won bets minus stakes on lost bets.

    A won wager with no recorded profit contributes nothing. Push and pending
    contribute nothing.
    """
    return sum((_wager_pl(w) for w in wagers), 0.0)


def total_staked(wagers: Iterable[Wager]) -> float:
    """Total stake on decided (won/lost) wagers."""
    return sum(
        (w.stake_amount for w in wagers if _status(w) in DECIDED_STATUSES),
        0.0,
    )


def roi(wagers: Iterable[Wager]) -> float:
    """Return on investment as a percent of decided stake.

    Pushes are excluded from both numerator and denominator. Returns 0 when
    no stake has been decided.
    """
    wagers = list(wagers)
    staked = total_staked(wagers)
    if staked == 0:
        return 0.0
    return total_pl(wagers) / staked * 100


def units_won(pl: float, unit_size: float) -> float:
    """Express a P&L amount in betting units."""
    if unit_size <= 0:
        raise ValueError(f"unit_size must be positive, got {unit_size}")
    return pl / unit_size


def project_bankroll(starting_bankroll: float, wagers: Iterable[Wager]) -> float:
    """Bankroll after every settled wager: starting bankroll plus total P&L."""
    return starting_bankroll + total_pl(wagers)


def bankroll_curve(starting_bankroll: float, wagers: Iterable[Wager]) -> pd.DataFrame:
    """Running bankroll by calendar day over settled wagers.

    Returns
    -------
    DataFrame with columns ``date``, ``daily_pl``, ``bankroll`` in ascending
    date order. Empty when nothing has settled.
    """
    settled = [w for w in wagers if _status(w) in COMPLETED_STATUSES]
    if not settled:
        return pd.DataFrame(columns=["date", "daily_pl", "bankroll"])

    frame = pd.DataFrame(
        {"date": [w.date for w in settled], "pl": [_wager_pl(w) for w in settled]}
    )
    daily = frame.groupby("date", sort=True)["pl"].sum()
    return pd.DataFrame(
        {
            "date": daily.index.to_list(),
            "daily_pl": daily.to_numpy(),
            "bankroll": starting_bankroll + np.cumsum(daily.to_numpy()),
        }
    )


def summarize_wagers(
    wagers: Sequence[Wager],
    unit_size: float = 100.0,
    starting_bankroll: float = 0.0,
    name: str = "",
    notebook_id: str | None = None,
) -> NotebookSummary:
    """Compute display-ready metrics for a collection of wagers."""
    counts = {status: 0 for status in WagerStatus}
    for wager in wagers:
        counts[_status(wager)] += 1

    pl = total_pl(wagers)
    summary = NotebookSummary(
        notebook_id=notebook_id,
        name=name,
        total_bets=len(wagers),
        pending_bets=counts[WagerStatus.PENDING],
        bets_won=counts[WagerStatus.WON],
        bets_lost=counts[WagerStatus.LOST],
        bets_pushed=counts[WagerStatus.PUSH],
        win_rate=round_half_up(win_rate(wagers), 2),
        total_staked=round_currency(total_staked(wagers)),
        total_pl=round_currency(pl),
        roi_pct=round_half_up(roi(wagers), 2),
        units_won=round_half_up(units_won(pl, unit_size), 2),
        starting_bankroll=round_currency(starting_bankroll),
        current_bankroll=round_currency(starting_bankroll + pl),
    )
    log.debug("wagers_summarized", notebook=notebook_id, bets=summary.total_bets)
    return summary


def summarize_notebook(notebook: Notebook) -> NotebookSummary:
    """Summary for a single notebook using its own unit size and bankroll."""
    return summarize_wagers(
        notebook.wagers,
        unit_size=notebook.unit_size,
        starting_bankroll=notebook.starting_bankroll,
        name=notebook.name,
        notebook_id=notebook.id,
    )


def summarize_account(notebooks: Sequence[Notebook]) -> DashboardSummary:
    """Dashboard rollup over every wager in every notebook."""
    all_wagers = [w for nb in notebooks for w in nb.wagers]
    pending = sum(1 for w in all_wagers if _status(w) is WagerStatus.PENDING)
    return DashboardSummary(
        total_bets=len(all_wagers),
        win_rate=round_half_up(win_rate(all_wagers), 2),
        total_pl=round_currency(total_pl(all_wagers)),
        roi_pct=round_half_up(roi(all_wagers), 2),
        active_notebooks=len(notebooks),
        pending_bets=pending,
    )


def top_notebooks(notebooks: Sequence[Notebook], limit: int = 3) -> list[NotebookSummary]:
    """Best notebooks by P&L, skipping notebooks with no wagers."""
    ranked = sorted(
        (
            (total_pl(nb.wagers), nb)
            for nb in notebooks
            if nb.wagers
        ),
        key=lambda pair: pair[0],
        reverse=True,
    )
    return [summarize_notebook(nb) for _, nb in ranked[:limit]]


def recent_wagers(notebooks: Sequence[Notebook], limit: int = 5) -> list[Wager]:
    """Most recent wagers across notebooks, newest date first."""
    all_wagers = [w for nb in notebooks for w in nb.wagers]
    return sorted(all_wagers, key=lambda w: w.date, reverse=True)[:limit]


def clean_win_rate(rate: float) -> float:
    """Win rate for display: one decimal, kept inside [0.1, 99.9] unless zero."""
    if rate == 0:
        return 0.0
    if rate < 0.1:
        return 0.1
    if rate > 99.9:
        return 99.9
    return round_half_up(rate, 1)


def clean_roi(value: float) -> float:
    """ROI for display: one decimal, with near-zero noise shown as 0."""
    if abs(value) < 0.1:
        return 0.0
    return round_half_up(value, 1)


def wagers_to_dataframe(wagers: Iterable[Wager]) -> pd.DataFrame:
    """Convert wagers to a DataFrame with a computed ``pl`` column."""
    rows = [
        {
            "id": w.id,
            "notebook_id": w.notebook_id,
            "date": w.date,
            "description": w.description,
            "american_odds": w.american_odds,
            "stake_amount": w.stake_amount,
            "status": _status(w).value,
            "profit_amount": w.profit_amount,
            "pl": _wager_pl(w),
        }
        for w in wagers
    ]
    if not rows:
        return pd.DataFrame()
    return pd.DataFrame(rows)
