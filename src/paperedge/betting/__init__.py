"""Wagering engine: odds math, performance rollups, hedge/Kelly sizing, search."""

from paperedge.betting.hedge import HedgeInput, HedgeResult, solve_arbitrage, solve_hedge
from paperedge.betting.kelly import EdgeStatus, KellyInput, KellyResult, solve_kelly
from paperedge.betting.ledger import DailyRollup, apply_casino_update, rollup_by_date
from paperedge.betting.performance import (
    DashboardSummary,
    NotebookSummary,
    roi,
    summarize_notebook,
    total_pl,
    units_won,
    win_rate,
)
from paperedge.betting.query import QueryResult, SortOrder, search_wagers
from paperedge.betting.records import (
    CasinoFields,
    Invalid,
    LedgerEntry,
    Notebook,
    SearchFilters,
    Wager,
    WagerStatus,
)

__all__ = [
    "CasinoFields",
    "DailyRollup",
    "DashboardSummary",
    "EdgeStatus",
    "HedgeInput",
    "HedgeResult",
    "Invalid",
    "KellyInput",
    "KellyResult",
    "LedgerEntry",
    "Notebook",
    "NotebookSummary",
    "QueryResult",
    "SearchFilters",
    "SortOrder",
    "Wager",
    "WagerStatus",
    "apply_casino_update",
    "roi",
    "rollup_by_date",
    "search_wagers",
    "solve_arbitrage",
    "solve_hedge",
    "solve_kelly",
    "summarize_notebook",
    "total_pl",
    "units_won",
    "win_rate",
]
