"""CSV loaders that turn exported notebook and ledger tables into records.

Rows that cannot become a valid record are logged and skipped so one bad
line does not hide the rest of a notebook.
"""

from __future__ import annotations

from pathlib import Path

import pandas as pd

from paperedge.betting.ledger import casino_entry
from paperedge.betting.odds import is_valid_american_odds
from paperedge.betting.records import (
    AccountKind,
    CasinoFields,
    LedgerEntry,
    Wager,
    WagerStatus,
)
from paperedge.utils.dates import is_iso_day, to_iso_day
from paperedge.utils.logging import get_logger

log = get_logger(__name__)

# Alternate column names found in exported tables.
_WAGER_ALIASES = {
    "odds": "american_odds",
    "wager_amount": "stake_amount",
    "return_amount": "profit_amount",
}
_LEDGER_ALIASES = {
    "deposited_usd": "deposited",
    "withdrew_usd": "withdrew",
    "in_casino": "in_casino_balance",
    "usd_value": "promo_value_usd",
}
_CASINO_NUMERIC = ("deposited", "withdrew", "in_casino_balance", "promo_value_usd")
_CASINO_TEXT = ("tokens_received", "deposit_method", "note")


def _read_csv(path: Path | str) -> pd.DataFrame:
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"CSV not found: {path}")
    return pd.read_csv(path, dtype={"id": str, "account_id": str, "notebook_id": str})


def _optional_float(value: object) -> float | None:
    if value is None or pd.isna(value):
        return None
    return float(value)


def _optional_str(value: object) -> str | None:
    if value is None or pd.isna(value):
        return None
    return str(value)


def wagers_from_frame(df: pd.DataFrame) -> list[Wager]:
    """Build wagers from a DataFrame, skipping rows that fail validation."""
    df = df.rename(columns=_WAGER_ALIASES)
    wagers: list[Wager] = []
    skipped = 0

    for idx, row in enumerate(df.to_dict(orient="records")):
        try:
            odds = row["american_odds"]
            stake = float(row["stake_amount"])
            day = to_iso_day(row["date"])
            status = WagerStatus((_optional_str(row.get("status")) or "pending").strip().lower())
        except (KeyError, TypeError, ValueError) as exc:
            log.warning("wager_row_skipped", row=idx, error=str(exc))
            skipped += 1
            continue

        if not is_valid_american_odds(odds) or not stake > 0 or not is_iso_day(day):
            log.warning("wager_row_skipped", row=idx, odds=odds, stake=stake, date=day)
            skipped += 1
            continue

        wagers.append(
            Wager(
                id=_optional_str(row.get("id")) or str(idx),
                date=day,
                description=_optional_str(row.get("description")) or "",
                american_odds=int(odds),
                stake_amount=stake,
                status=status,
                profit_amount=(
                    _optional_float(row.get("profit_amount"))
                    if status is WagerStatus.WON
                    else None
                ),
                notebook_id=_optional_str(row.get("notebook_id")),
            )
        )

    log.info("wagers_loaded", rows=len(df), loaded=len(wagers), skipped=skipped)
    return wagers


def load_wagers(path: Path | str) -> list[Wager]:
    """Read a notebook CSV export into wagers."""
    return wagers_from_frame(_read_csv(path))


def ledger_from_frame(df: pd.DataFrame) -> list[LedgerEntry]:
    """Build ledger entries; casino rows get their amount re-derived.

    A row is treated as casino when its ``kind`` column says so, or when
    there is no ``kind`` column and any deposit/withdrawal/balance value is
    present.
    """
    df = df.rename(columns=_LEDGER_ALIASES)
    entries: list[LedgerEntry] = []

    for idx, row in enumerate(df.to_dict(orient="records")):
        day = to_iso_day(row.get("date", ""))
        account_id = _optional_str(row.get("account_id"))
        if account_id is None or not is_iso_day(day):
            log.warning("ledger_row_skipped", row=idx, account_id=account_id, date=day)
            continue

        casino_values = {name: _optional_float(row.get(name)) for name in _CASINO_NUMERIC}
        kind = _optional_str(row.get("kind"))
        if kind is not None:
            is_casino = kind.strip().lower() == AccountKind.CASINO.value
        else:
            is_casino = any(
                casino_values[name] is not None
                for name in ("deposited", "withdrew", "in_casino_balance")
            )

        if is_casino:
            casino = CasinoFields(
                **casino_values,
                **{name: _optional_str(row.get(name)) for name in _CASINO_TEXT},
            )
            entries.append(casino_entry(account_id, day, casino))
        else:
            entries.append(
                LedgerEntry(
                    account_id=account_id,
                    date=day,
                    amount=_optional_float(row.get("amount")) or 0.0,
                )
            )

    log.info("ledger_loaded", rows=len(df), loaded=len(entries))
    return entries


def load_ledger(path: Path | str) -> list[LedgerEntry]:
    """Read a daily account ledger CSV export."""
    return ledger_from_frame(_read_csv(path))
