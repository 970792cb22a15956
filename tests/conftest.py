"""Shared pytest fixtures for PaperEdge tests."""

from __future__ import annotations

import pytest

from paperedge.betting.records import Notebook, Wager, WagerStatus


def make_wager(
    id: str = "w1",
    date: str = "2024-07-15",
    description: str = "Yankees ML",
    american_odds: int = -110,
    stake_amount: float = 110.0,
    status: WagerStatus = WagerStatus.PENDING,
    profit_amount: float | None = None,
    notebook_id: str | None = None,
) -> Wager:
    """Helper to create a Wager for testing."""
    return Wager(
        id=id,
        date=date,
        description=description,
        american_odds=american_odds,
        stake_amount=stake_amount,
        status=status,
        profit_amount=profit_amount,
        notebook_id=notebook_id,
    )


@pytest.fixture
def sample_wagers() -> list[Wager]:
    """A small mixed-status notebook."""
    return [
        make_wager("w1", "2024-07-01", "Yankees ML", -110, 110.0, WagerStatus.WON, 100.0),
        make_wager("w2", "2024-07-02", "Lakers -3.5", -110, 55.0, WagerStatus.LOST),
        make_wager("w3", "2024-07-02", "Chiefs +7", 150, 40.0, WagerStatus.PUSH),
        make_wager("w4", "2024-07-05", "Dodgers over 8.5", 120, 50.0, WagerStatus.PENDING),
        make_wager("w5", "2024-07-03", "Celtics ML", 200, 25.0, WagerStatus.WON, 50.0),
    ]


@pytest.fixture
def sample_notebooks(sample_wagers) -> list[Notebook]:
    """Three notebooks, one of them empty."""
    return [
        Notebook(id="nb1", name="MLB", wagers=tuple(sample_wagers[:2])),
        Notebook(id="nb2", name="NBA", wagers=tuple(sample_wagers[2:])),
        Notebook(id="nb3", name="Empty"),
    ]


@pytest.fixture
def wager_factory():
    """Factory fixture wrapping :func:`make_wager`."""
    return make_wager
