"""Tests for wager search: filters and sort orders."""

import itertools

import pytest

from paperedge.betting.query import (
    SortOrder,
    build_predicates,
    filter_wagers,
    search_wagers,
    sort_wagers,
)
from paperedge.betting.records import SearchFilters, WagerStatus


def ids(wagers):
    return [w.id for w in wagers]


class TestFilters:
    def test_empty_filters_return_everything(self, sample_wagers):
        result = search_wagers(sample_wagers, SearchFilters())
        assert result.filtered_count == result.total_count == 5
        assert sorted(ids(result.wagers)) == sorted(ids(sample_wagers))

    def test_no_filters_argument(self, sample_wagers):
        assert search_wagers(sample_wagers).filtered_count == 5

    def test_text_query_case_insensitive(self, sample_wagers):
        matched = filter_wagers(sample_wagers, SearchFilters(text_query="  yankees "))
        assert ids(matched) == ["w1"]

    def test_text_query_substring(self, sample_wagers):
        matched = filter_wagers(sample_wagers, SearchFilters(text_query="ML"))
        assert ids(matched) == ["w1", "w5"]

    def test_status(self, sample_wagers):
        matched = filter_wagers(sample_wagers, SearchFilters(status=WagerStatus.WON))
        assert ids(matched) == ["w1", "w5"]

    def test_status_as_plain_string(self, sample_wagers):
        matched = filter_wagers(sample_wagers, SearchFilters(status="push"))
        assert ids(matched) == ["w3"]

    def test_date_range_inclusive(self, sample_wagers):
        matched = filter_wagers(
            sample_wagers, SearchFilters(date_from="2024-07-02", date_to="2024-07-03")
        )
        assert ids(matched) == ["w2", "w3", "w5"]

    def test_date_to_covers_whole_day(self, wager_factory):
        wagers = [wager_factory(id="late", date="2024-07-02T23:59:59")]
        assert ids(filter_wagers(wagers, SearchFilters(date_to="2024-07-02"))) == ["late"]

    def test_odds_bounds_independent(self, sample_wagers):
        assert ids(filter_wagers(sample_wagers, SearchFilters(odds_min=120))) == ["w3", "w4", "w5"]
        assert ids(filter_wagers(sample_wagers, SearchFilters(odds_max=-110))) == ["w1", "w2"]
        assert ids(filter_wagers(sample_wagers, SearchFilters(odds_min=100, odds_max=150))) == ["w3", "w4"]

    def test_wager_bounds(self, sample_wagers):
        matched = filter_wagers(sample_wagers, SearchFilters(wager_min=40, wager_max=55))
        assert ids(matched) == ["w2", "w3", "w4"]

    def test_conjunctive(self, sample_wagers):
        filters = SearchFilters(status=WagerStatus.WON, odds_min=150)
        assert ids(filter_wagers(sample_wagers, filters)) == ["w5"]

    def test_no_match(self, sample_wagers):
        result = search_wagers(sample_wagers, SearchFilters(text_query="hockey"))
        assert result.wagers == []
        assert result.filtered_count == 0
        assert result.total_count == 5

    def test_predicate_order_does_not_matter(self, sample_wagers):
        filters = SearchFilters(
            text_query="e", date_from="2024-07-01", odds_max=200, wager_min=30
        )
        predicates = build_predicates(filters)
        assert len(predicates) == 4
        expected = None
        for perm in itertools.permutations(predicates):
            matched = [w for w in sample_wagers if all(p(w) for p in perm)]
            if expected is None:
                expected = ids(matched)
            assert ids(matched) == expected


class TestSorting:
    def test_date_desc(self, sample_wagers):
        assert ids(sort_wagers(sample_wagers, SortOrder.DATE_DESC)) == ["w4", "w5", "w2", "w3", "w1"]

    def test_date_asc(self, sample_wagers):
        ordered = sort_wagers(sample_wagers, "date-asc")
        dates = [w.date for w in ordered]
        assert dates == sorted(dates)
        assert ordered[0].id == "w1"
        assert ordered[-1].id == "w4"

    def test_status_groups_then_date_desc(self, wager_factory):
        wagers = [
            wager_factory(id="lost-old", date="2024-01-01", status=WagerStatus.LOST),
            wager_factory(id="pend-old", date="2024-01-02", status=WagerStatus.PENDING),
            wager_factory(id="won-new", date="2024-03-01", status=WagerStatus.WON, profit_amount=1.0),
            wager_factory(id="push", date="2024-02-01", status=WagerStatus.PUSH),
            wager_factory(id="pend-new", date="2024-02-15", status=WagerStatus.PENDING),
            wager_factory(id="won-old", date="2024-01-15", status=WagerStatus.WON, profit_amount=1.0),
        ]
        ordered = sort_wagers(wagers, SortOrder.STATUS)
        assert ids(ordered) == ["pend-new", "pend-old", "won-new", "won-old", "lost-old", "push"]

    def test_wager_desc_then_date_desc(self, wager_factory):
        wagers = [
            wager_factory(id="a", date="2024-01-01", stake_amount=50.0),
            wager_factory(id="b", date="2024-01-03", stake_amount=50.0),
            wager_factory(id="c", date="2024-01-02", stake_amount=200.0),
        ]
        assert ids(sort_wagers(wagers, SortOrder.WAGER)) == ["c", "b", "a"]

    def test_unknown_order(self, sample_wagers):
        with pytest.raises(ValueError):
            sort_wagers(sample_wagers, "odds")

    def test_does_not_mutate_input(self, sample_wagers):
        before = ids(sample_wagers)
        sort_wagers(sample_wagers, SortOrder.WAGER)
        assert ids(sample_wagers) == before

    def test_search_applies_order(self, sample_wagers):
        result = search_wagers(sample_wagers, SearchFilters(status=WagerStatus.WON), SortOrder.DATE_ASC)
        assert ids(result.wagers) == ["w1", "w5"]
