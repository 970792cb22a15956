"""Value records passed into the engine.

All records are frozen dataclasses built by the caller from persisted data.
The engine reads them and returns new values; it never mutates or retains
them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TypeVar, Union

T = TypeVar("T")


class WagerStatus(str, Enum):
    """Settlement state of a wager."""

    PENDING = "pending"
    WON = "won"
    LOST = "lost"
    PUSH = "push"


#: Statuses that count toward win rate (pending is still open).
COMPLETED_STATUSES = frozenset({WagerStatus.WON, WagerStatus.LOST, WagerStatus.PUSH})

#: Statuses whose stake was actually at risk (push returns the stake).
DECIDED_STATUSES = frozenset({WagerStatus.WON, WagerStatus.LOST})


class AccountKind(str, Enum):
    """Kind of tracked account. Casino accounts derive their daily amount."""

    MAIN = "main"
    OFFSHORE = "offshore"
    CASINO = "casino"
    OTHER = "other"


@dataclass(frozen=True)
class Wager:
    """A single logged bet."""

    id: str
    date: str  # YYYY-MM-DD, no time component
    description: str
    american_odds: int
    stake_amount: float
    status: WagerStatus = WagerStatus.PENDING
    profit_amount: float | None = None  # profit only, set when status == won
    notebook_id: str | None = None


@dataclass(frozen=True)
class CasinoFields:
    """Raw casino transaction fields for one account/day."""

    deposited: float | None = None
    withdrew: float | None = None
    in_casino_balance: float | None = None
    promo_value_usd: float | None = None
    tokens_received: str | None = None
    deposit_method: str | None = None
    note: str | None = None


@dataclass(frozen=True)
class LedgerEntry:
    """Daily P&L entry for one account."""

    account_id: str
    date: str  # YYYY-MM-DD
    amount: float
    casino: CasinoFields | None = None


@dataclass(frozen=True)
class SearchFilters:
    """Optional, AND-combined predicates over a wager collection."""

    text_query: str = ""
    status: WagerStatus | None = None
    date_from: str | None = None
    date_to: str | None = None
    odds_min: int | None = None
    odds_max: int | None = None
    wager_min: float | None = None
    wager_max: float | None = None


@dataclass(frozen=True)
class Invalid:
    """A calculation that could not run because its inputs failed validation.

    ``errors`` maps an input field name to a user-facing message. Solvers
    return this instead of raising so callers can render field-level
    feedback.
    """

    errors: dict[str, str] = field(default_factory=dict)

    def __bool__(self) -> bool:
        return False


#: Either a computed value or the validation failure that prevented it.
Result = Union[T, Invalid]


def is_invalid(result: object) -> bool:
    """True if ``result`` is an :class:`Invalid` validation failure."""
    return isinstance(result, Invalid)


@dataclass(frozen=True)
class Notebook:
    """A named collection of wagers with its own bankroll and unit size."""

    id: str
    name: str
    wagers: tuple[Wager, ...] = ()
    starting_bankroll: float = 1000.0
    unit_size: float = 100.0
    color: str | None = None
