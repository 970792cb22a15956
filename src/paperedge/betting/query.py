"""Wager search: conjunctive filters and deterministic sort orders.

Filtering and sorting are synchronous pure functions. Any debouncing of
search input belongs to the caller.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from enum import Enum

from paperedge.betting.records import SearchFilters, Wager, WagerStatus
from paperedge.utils.dates import in_day_range
from paperedge.utils.logging import get_logger

log = get_logger(__name__)

Predicate = Callable[[Wager], bool]


class SortOrder(str, Enum):
    DATE_DESC = "date-desc"
    DATE_ASC = "date-asc"
    STATUS = "status"
    WAGER = "wager"


#: Sort priority for the ``status`` order.
STATUS_PRIORITY = {
    WagerStatus.PENDING: 0,
    WagerStatus.WON: 1,
    WagerStatus.LOST: 2,
    WagerStatus.PUSH: 3,
}


@dataclass(frozen=True)
class QueryResult:
    """Filtered, sorted wagers plus counts for "showing X of Y" feedback."""

    wagers: list[Wager]
    total_count: int
    filtered_count: int


def build_predicates(filters: SearchFilters) -> list[Predicate]:
    """One predicate per filter field that is set; unset fields add nothing."""
    predicates: list[Predicate] = []

    query = (filters.text_query or "").strip().lower()
    if query:
        predicates.append(lambda w: query in w.description.lower())

    if filters.status is not None:
        status = WagerStatus(filters.status)
        predicates.append(lambda w: WagerStatus(w.status) is status)

    if filters.date_from or filters.date_to:
        start = filters.date_from or None
        end = filters.date_to or None
        predicates.append(lambda w: in_day_range(w.date, start, end))

    if filters.odds_min is not None:
        odds_min = filters.odds_min
        predicates.append(lambda w: w.american_odds >= odds_min)
    if filters.odds_max is not None:
        odds_max = filters.odds_max
        predicates.append(lambda w: w.american_odds <= odds_max)

    if filters.wager_min is not None:
        wager_min = filters.wager_min
        predicates.append(lambda w: w.stake_amount >= wager_min)
    if filters.wager_max is not None:
        wager_max = filters.wager_max
        predicates.append(lambda w: w.stake_amount <= wager_max)

    return predicates


def filter_wagers(wagers: Iterable[Wager], filters: SearchFilters) -> list[Wager]:
    """Wagers that satisfy every set filter, in their original order."""
    predicates = build_predicates(filters)
    return [w for w in wagers if all(p(w) for p in predicates)]


def sort_wagers(wagers: Iterable[Wager], order: SortOrder | str = SortOrder.DATE_DESC) -> list[Wager]:
    """Sort wagers by one of the supported orders.

    Dates compare as ``YYYY-MM-DD`` strings. Secondary keys are applied by
    sorting on the tie-breaker first and relying on sort stability.

    Raises
    ------
    ValueError
        If ``order`` is not a known :class:`SortOrder`.
    """
    order = SortOrder(order)
    by_date_desc = sorted(wagers, key=lambda w: w.date, reverse=True)

    if order is SortOrder.DATE_DESC:
        return by_date_desc
    if order is SortOrder.DATE_ASC:
        return sorted(by_date_desc, key=lambda w: w.date)
    if order is SortOrder.STATUS:
        return sorted(by_date_desc, key=lambda w: STATUS_PRIORITY[WagerStatus(w.status)])
    return sorted(by_date_desc, key=lambda w: w.stake_amount, reverse=True)


def search_wagers(
    wagers: Sequence[Wager],
    filters: SearchFilters | None = None,
    order: SortOrder | str = SortOrder.DATE_DESC,
) -> QueryResult:
    """Filter then sort ``wagers``, reporting total and matched counts."""
    matched = filter_wagers(wagers, filters or SearchFilters())
    result = QueryResult(
        wagers=sort_wagers(matched, order),
        total_count=len(wagers),
        filtered_count=len(matched),
    )
    log.debug("wagers_searched", total=result.total_count, matched=result.filtered_count)
    return result
