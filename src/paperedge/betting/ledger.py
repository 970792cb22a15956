"""Daily account ledger rollups.

Groups per-account daily P&L entries by calendar day and sums them over date
ranges. Casino accounts never store an independently edited amount: their
net daily earnings are derived from the deposit, withdrawal and in-casino
balance fields every time any of those changes.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field, replace

import pandas as pd

from paperedge.betting.records import CasinoFields, LedgerEntry
from paperedge.utils.dates import in_day_range, year_bounds
from paperedge.utils.logging import get_logger

log = get_logger(__name__)

_DERIVING_FIELDS = ("deposited", "withdrew", "in_casino_balance")


@dataclass(frozen=True)
class DailyRollup:
    """All account entries for one calendar day."""

    total: float
    by_account: dict[str, LedgerEntry] = field(default_factory=dict)


def net_daily_earnings(casino: CasinoFields) -> float:
    """``(withdrew + in_casino_balance) - deposited``; missing values count as 0."""
    withdrew = casino.withdrew or 0.0
    in_casino = casino.in_casino_balance or 0.0
    deposited = casino.deposited or 0.0
    return (withdrew + in_casino) - deposited


def casino_entry(account_id: str, date: str, casino: CasinoFields) -> LedgerEntry:
    """Build a casino ledger entry with its amount derived from ``casino``."""
    return LedgerEntry(
        account_id=account_id,
        date=date,
        amount=net_daily_earnings(casino),
        casino=casino,
    )


def with_derived_amount(entry: LedgerEntry) -> LedgerEntry:
    """Re-derive a stored casino entry's amount; other entries pass through."""
    if entry.casino is None:
        return entry
    return casino_entry(entry.account_id, entry.date, entry.casino)


def apply_casino_update(entry: LedgerEntry, **changes: object) -> LedgerEntry:
    """Return a copy of ``entry`` with casino fields changed.

    ``amount`` is always recomputed from the resulting deposit, withdrawal and
    balance fields, overwriting whatever was stored before. An ``amount`` in
    ``changes`` is ignored.

    Raises
    ------
    TypeError
        If ``changes`` names a field that ``CasinoFields`` does not have.
    """
    changes.pop("amount", None)
    casino = replace(entry.casino or CasinoFields(), **changes)
    if any(name in changes for name in _DERIVING_FIELDS):
        log.debug(
            "casino_amount_rederived",
            account_id=entry.account_id,
            date=entry.date,
        )
    return casino_entry(entry.account_id, entry.date, casino)


def rollup_by_date(entries: Iterable[LedgerEntry]) -> dict[str, DailyRollup]:
    """Group entries by date with a daily total and per-account breakdown.

    If the same account appears twice on one day, the later entry replaces
    the earlier one, matching the account/date upsert the store performs.
    Casino entries are counted at their derived amount, not the stored one.
    """
    by_date: dict[str, dict[str, LedgerEntry]] = {}
    for entry in map(with_derived_amount, entries):
        by_date.setdefault(entry.date, {})[entry.account_id] = entry

    return {
        day: DailyRollup(
            total=sum((e.amount or 0.0 for e in accounts.values()), 0.0),
            by_account=accounts,
        )
        for day, accounts in sorted(by_date.items())
    }


def total(
    entries: Iterable[LedgerEntry],
    date_from: str | None = None,
    date_to: str | None = None,
    account_id: str | None = None,
) -> float:
    """Sum of ``amount`` over an inclusive date range, optionally one account."""
    return sum(
        (
            e.amount or 0.0
            for e in map(with_derived_amount, entries)
            if (account_id is None or e.account_id == account_id)
            and in_day_range(e.date, date_from, date_to)
        ),
        0.0,
    )


def all_time_total(entries: Iterable[LedgerEntry], account_id: str | None = None) -> float:
    """Sum of every entry, optionally for a single account."""
    return total(entries, account_id=account_id)


def year_total(
    entries: Iterable[LedgerEntry],
    year: int,
    account_id: str | None = None,
) -> float:
    """Sum of entries dated within calendar ``year``."""
    start, end = year_bounds(year)
    return total(entries, date_from=start, date_to=end, account_id=account_id)


def ledger_to_dataframe(entries: Iterable[LedgerEntry]) -> pd.DataFrame:
    """Flatten ledger entries (casino fields included) into a DataFrame."""
    rows = []
    for e in entries:
        casino = e.casino or CasinoFields()
        rows.append({
            "account_id": e.account_id,
            "date": e.date,
            "amount": e.amount,
            "deposited": casino.deposited,
            "withdrew": casino.withdrew,
            "in_casino_balance": casino.in_casino_balance,
            "promo_value_usd": casino.promo_value_usd,
            "tokens_received": casino.tokens_received,
            "deposit_method": casino.deposit_method,
            "note": casino.note,
        })
    if not rows:
        return pd.DataFrame()
    return pd.DataFrame(rows).sort_values(["date", "account_id"]).reset_index(drop=True)
