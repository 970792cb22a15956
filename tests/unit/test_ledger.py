"""Tests for daily ledger rollups and casino derivation."""

import pytest

from paperedge.betting.ledger import (
    all_time_total,
    apply_casino_update,
    casino_entry,
    ledger_to_dataframe,
    net_daily_earnings,
    rollup_by_date,
    total,
    with_derived_amount,
    year_total,
)
from paperedge.betting.records import CasinoFields, LedgerEntry


@pytest.fixture
def entries():
    return [
        LedgerEntry(account_id="dk", date="2024-03-01", amount=120.0),
        LedgerEntry(account_id="fd", date="2024-03-01", amount=-40.0),
        LedgerEntry(account_id="dk", date="2024-03-02", amount=-15.5),
        LedgerEntry(account_id="fd", date="2024-12-31", amount=10.0),
        LedgerEntry(account_id="dk", date="2025-01-01", amount=200.0),
    ]


class TestCasinoDerivation:
    def test_net_daily_earnings(self):
        casino = CasinoFields(deposited=100.0, withdrew=50.0, in_casino_balance=80.0)
        assert net_daily_earnings(casino) == pytest.approx(30.0)

    def test_missing_fields_count_as_zero(self):
        assert net_daily_earnings(CasinoFields()) == 0.0
        assert net_daily_earnings(CasinoFields(deposited=25.0)) == pytest.approx(-25.0)

    def test_casino_entry_amount(self):
        entry = casino_entry("stake", "2024-05-01", CasinoFields(deposited=100.0, withdrew=50.0, in_casino_balance=80.0))
        assert entry.amount == pytest.approx(30.0)
        assert entry.casino.deposited == 100.0

    def test_update_rederives_amount(self):
        entry = casino_entry("stake", "2024-05-01", CasinoFields(deposited=100.0, withdrew=50.0, in_casino_balance=80.0))
        updated = apply_casino_update(entry, withdrew=150.0)
        assert updated.amount == pytest.approx(130.0)
        assert updated.casino.deposited == 100.0
        # original untouched
        assert entry.amount == pytest.approx(30.0)

    def test_update_ignores_manual_amount(self):
        entry = casino_entry("stake", "2024-05-01", CasinoFields(deposited=100.0))
        updated = apply_casino_update(entry, amount=9999.0, in_casino_balance=40.0)
        assert updated.amount == pytest.approx(-60.0)

    def test_update_on_plain_entry_starts_from_empty_casino(self):
        entry = LedgerEntry(account_id="stake", date="2024-05-01", amount=500.0)
        updated = apply_casino_update(entry, deposited=20.0)
        assert updated.amount == pytest.approx(-20.0)

    def test_non_deriving_field_keeps_amount(self):
        entry = casino_entry("stake", "2024-05-01", CasinoFields(deposited=10.0, withdrew=30.0))
        updated = apply_casino_update(entry, note="reload bonus", promo_value_usd=5.0)
        assert updated.amount == pytest.approx(20.0)
        assert updated.casino.note == "reload bonus"

    def test_unknown_field_raises(self):
        entry = casino_entry("stake", "2024-05-01", CasinoFields())
        with pytest.raises(TypeError):
            apply_casino_update(entry, bogus=1)

    def test_with_derived_amount_fixes_stale_amount(self):
        stale = LedgerEntry(
            account_id="stake",
            date="2024-05-01",
            amount=12345.0,
            casino=CasinoFields(deposited=100.0, withdrew=40.0),
        )
        assert with_derived_amount(stale).amount == pytest.approx(-60.0)

    def test_with_derived_amount_passthrough(self):
        entry = LedgerEntry(account_id="dk", date="2024-05-01", amount=12.0)
        assert with_derived_amount(entry) is entry


class TestRollup:
    def test_groups_by_date(self, entries):
        rollup = rollup_by_date(entries)
        assert list(rollup) == ["2024-03-01", "2024-03-02", "2024-12-31", "2025-01-01"]
        assert rollup["2024-03-01"].total == pytest.approx(80.0)
        assert set(rollup["2024-03-01"].by_account) == {"dk", "fd"}

    def test_daily_total_matches_accounts(self, entries):
        for day in rollup_by_date(entries).values():
            assert day.total == pytest.approx(sum(e.amount for e in day.by_account.values()))

    def test_later_entry_replaces_same_account_day(self):
        entries = [
            LedgerEntry(account_id="dk", date="2024-03-01", amount=10.0),
            LedgerEntry(account_id="dk", date="2024-03-01", amount=25.0),
        ]
        rollup = rollup_by_date(entries)
        assert rollup["2024-03-01"].total == pytest.approx(25.0)
        assert rollup["2024-03-01"].by_account["dk"].amount == 25.0

    def test_casino_counted_at_derived_amount(self):
        stale = LedgerEntry(
            account_id="stake",
            date="2024-05-01",
            amount=999.0,
            casino=CasinoFields(deposited=100.0, withdrew=40.0, in_casino_balance=0.0),
        )
        day = rollup_by_date([stale])["2024-05-01"]
        assert day.total == pytest.approx(-60.0)
        assert day.by_account["stake"].amount == pytest.approx(-60.0)

    def test_missing_amount_counts_as_zero(self):
        entries = [
            LedgerEntry(account_id="dk", date="2024-03-01", amount=None),
            LedgerEntry(account_id="fd", date="2024-03-01", amount=7.0),
        ]
        assert rollup_by_date(entries)["2024-03-01"].total == pytest.approx(7.0)

    def test_empty(self):
        assert rollup_by_date([]) == {}


class TestTotals:
    def test_inclusive_range(self, entries):
        assert total(entries, "2024-03-01", "2024-03-02") == pytest.approx(64.5)

    def test_open_ended(self, entries):
        assert total(entries, date_from="2024-12-31") == pytest.approx(210.0)
        assert total(entries, date_to="2024-03-01") == pytest.approx(80.0)

    def test_single_account(self, entries):
        assert total(entries, account_id="fd") == pytest.approx(-30.0)

    def test_all_time(self, entries):
        assert all_time_total(entries) == pytest.approx(274.5)
        assert all_time_total(entries, account_id="dk") == pytest.approx(304.5)

    def test_year_total(self, entries):
        assert year_total(entries, 2024) == pytest.approx(74.5)
        assert year_total(entries, 2025) == pytest.approx(200.0)
        assert year_total(entries, 2023) == 0.0

    def test_year_total_single_account(self, entries):
        assert year_total(entries, 2024, account_id="dk") == pytest.approx(104.5)

    def test_casino_totals_use_derived_amount(self, entries):
        stale = LedgerEntry(
            account_id="stake",
            date="2024-05-01",
            amount=999.0,
            casino=CasinoFields(deposited=100.0, withdrew=40.0, in_casino_balance=0.0),
        )
        assert total([stale], "2024-05-01", "2024-05-01") == pytest.approx(-60.0)
        assert all_time_total([stale]) == pytest.approx(-60.0)
        assert year_total([*entries, stale], 2024) == pytest.approx(14.5)


def test_ledger_to_dataframe(entries):
    df = ledger_to_dataframe(reversed(entries))
    assert len(df) == 5
    assert df["date"].tolist()[0] == "2024-03-01"
    assert df["account_id"].tolist()[:2] == ["dk", "fd"]
    assert df["amount"].sum() == pytest.approx(274.5)


def test_ledger_to_dataframe_empty():
    assert ledger_to_dataframe([]).empty
