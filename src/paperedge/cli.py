"""PaperEdge CLI, powered by Typer.

Usage::

    paperedge odds convert -110
    paperedge calc hedge --stake 100 --original-odds +150 --hedge-odds -120
    paperedge calc kelly --bettable +100 --reference -150 --bankroll 1000
    paperedge calc unit --unit-size 100 --units 2 --odds -110
    paperedge calc parlay -110 +150 --wager 50
    paperedge notebook summary bets.csv [--unit-size 100]
    paperedge notebook search bets.csv [--query lakers] [--status won] [--sort status]
    paperedge ledger daily ledger.csv [--account acct-1] [--year 2024]
"""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from paperedge.betting.odds import format_odds, parse_american_odds
from paperedge.betting.records import Invalid
from paperedge.config import settings
from paperedge.utils.money import format_currency, format_percentage

app = typer.Typer(name="paperedge", help="PaperEdge wager tracking engine")
console = Console()


def _odds_or_exit(text: str, name: str) -> int:
    odds = parse_american_odds(text)
    if odds is None:
        console.print(f"[red]Could not parse {name} odds: {text!r}[/red]")
        raise typer.Exit(1)
    return odds


def _exit_if_invalid(result: object) -> None:
    if isinstance(result, Invalid):
        for name, message in result.errors.items():
            console.print(f"[red]{name}:[/red] {message}")
        raise typer.Exit(1)


def _pl_style(value: float) -> str:
    if value > 0:
        return "green"
    if value < 0:
        return "red"
    return "dim"


# ── Odds commands ──────────────────────────────────────────────────────

odds_app = typer.Typer(help="Odds conversion commands")
app.add_typer(odds_app, name="odds")


@odds_app.command("convert", context_settings={"ignore_unknown_options": True})
def odds_convert(
    odds: str = typer.Argument(..., help="American odds, e.g. -110 or +150"),
    stake: float = typer.Option(100.0, help="Stake for the return/payout rows"),
) -> None:
    """Show decimal odds, implied probability and payout for American odds."""
    from paperedge.betting.odds import (
        american_to_decimal,
        calculate_payout,
        calculate_return,
        implied_probability_pct,
        is_valid_american_odds,
    )

    value = _odds_or_exit(odds, "American")
    if not is_valid_american_odds(value):
        console.print(f"[red]{format_odds(value)} is not valid American odds[/red]")
        raise typer.Exit(1)

    table = Table(title=f"Odds {format_odds(value)}")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")
    table.add_row("Decimal", f"{american_to_decimal(value):.4f}")
    table.add_row("Implied probability", f"{implied_probability_pct(value):.2f}%")
    table.add_row(f"Profit on {format_currency(stake)}", format_currency(calculate_return(value, stake)))
    table.add_row(f"Payout on {format_currency(stake)}", format_currency(calculate_payout(value, stake)))
    console.print(table)


# ── Calculator commands ──────────────────────────────────────────────────

calc_app = typer.Typer(help="Hedge, Kelly, unit and parlay calculators")
app.add_typer(calc_app, name="calc")


@calc_app.command("hedge")
def calc_hedge(
    stake: float = typer.Option(..., help="Original bet amount"),
    original_odds: str = typer.Option(..., help="Odds on the original bet"),
    hedge_odds: str = typer.Option(..., help="Odds available on the other side"),
) -> None:
    """Size a hedge that pays the same whichever side wins."""
    from paperedge.betting.hedge import HedgeInput, solve_hedge

    result = solve_hedge(
        HedgeInput(
            original_stake=stake,
            original_odds=_odds_or_exit(original_odds, "original"),
            hedge_odds=_odds_or_exit(hedge_odds, "hedge"),
        )
    )
    _exit_if_invalid(result)

    label = "[green]Profitable hedge[/green]" if result.is_profitable else "[red]Negative hedge[/red]"
    console.print(f"\n{label}\n")
    table = Table(title="Hedge")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")
    table.add_row("Hedge stake", format_currency(result.hedge_stake))
    table.add_row("Guaranteed profit", format_currency(result.guaranteed_profit))
    table.add_row("Max possible profit", format_currency(result.max_possible_profit))
    table.add_row("Original side return", format_currency(result.original_side_return))
    table.add_row("Hedge side return", format_currency(result.hedge_side_return))
    table.add_row("Profit margin", format_percentage(result.profit_margin_pct))
    console.print(table)


@calc_app.command("kelly")
def calc_kelly(
    bettable: str = typer.Option(..., help="Odds at the book you will bet"),
    reference: str = typer.Option(..., help="Sharp reference odds on the same side"),
    bankroll: float = typer.Option(..., help="Current bankroll"),
    max_bet_pct: float = typer.Option(None, help="Max bet as percent of bankroll (default: config)"),
    kelly_fraction: float = typer.Option(None, help="Fraction of full Kelly (default: config)"),
) -> None:
    """Recommend a Kelly stake using the reference line as true probability."""
    from paperedge.betting.kelly import EdgeStatus, KellyInput, solve_kelly

    result = solve_kelly(
        KellyInput(
            bettable_odds=_odds_or_exit(bettable, "bettable"),
            reference_odds=_odds_or_exit(reference, "reference"),
            bankroll=bankroll,
            max_bet_pct=max_bet_pct,
            kelly_fraction=kelly_fraction,
        )
    )
    _exit_if_invalid(result)

    if result.status is EdgeStatus.POSITIVE_EDGE:
        console.print("\n[green]Positive edge[/green]\n")
    else:
        console.print("\n[red]No edge, do not bet[/red]\n")

    table = Table(title="Kelly Criterion")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")
    table.add_row("Bettable implied", f"{result.bettable_implied_pct:.2f}%")
    table.add_row("Reference implied", f"{result.reference_implied_pct:.2f}%")
    table.add_row("Edge", f"{result.edge_pct:+.2f}%")
    table.add_row("Full Kelly", f"{result.full_kelly_pct:.2f}%")
    table.add_row("Recommended stake", format_currency(result.recommended_stake))
    table.add_row("Expected value", format_currency(result.expected_value))
    console.print(table)
    if result.max_bet_reached:
        console.print("[yellow]Capped at max bet percentage[/yellow]")


@calc_app.command("unit")
def calc_unit(
    unit_size: float = typer.Option(None, help="Unit size (default: config)"),
    units: float = typer.Option(1.0, help="Units to win"),
    odds: str = typer.Option(..., help="American odds"),
) -> None:
    """How much to wager to win a number of units."""
    from paperedge.betting.calculators import solve_unit_bet

    result = solve_unit_bet(
        unit_size if unit_size is not None else settings.unit_size,
        units,
        _odds_or_exit(odds, "American"),
    )
    _exit_if_invalid(result)
    console.print(
        f"Wager [bold]{format_currency(result.wager)}[/bold] to win "
        f"{format_currency(result.target_win)} ({result.units_to_win:g}u); "
        f"total back {format_currency(result.total_winnings)}"
    )


@calc_app.command("parlay", context_settings={"ignore_unknown_options": True})
def calc_parlay(
    legs: list[str] = typer.Argument(..., help="American odds for each leg"),
    wager: float = typer.Option(100.0, help="Parlay stake"),
) -> None:
    """Combine legs into one parlay price and payout."""
    from paperedge.betting.calculators import solve_parlay

    result = solve_parlay([_odds_or_exit(leg, "leg") for leg in legs], wager)
    _exit_if_invalid(result)

    table = Table(title=f"{len(legs)}-leg parlay")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")
    table.add_row("Combined odds", format_odds(result.combined_american_odds))
    table.add_row("Decimal", f"{result.combined_decimal_odds:.4f}")
    table.add_row("Implied probability", f"{result.overall_probability_pct:.2f}%")
    table.add_row("Payout", format_currency(result.total_payout))
    table.add_row("Profit", format_currency(result.profit))
    console.print(table)


# ── Notebook commands ──────────────────────────────────────────────────

notebook_app = typer.Typer(help="Notebook performance and search commands")
app.add_typer(notebook_app, name="notebook")


@notebook_app.command("summary")
def notebook_summary(
    csv_path: Path = typer.Argument(..., help="Notebook CSV export"),
    unit_size: float = typer.Option(None, help="Unit size (default: config)"),
    starting_bankroll: float = typer.Option(None, help="Starting bankroll (default: config)"),
) -> None:
    """Win rate, P&L, ROI, units and bankroll for a notebook export."""
    from paperedge.betting.performance import clean_roi, clean_win_rate, summarize_wagers
    from paperedge.io import load_wagers

    if not csv_path.exists():
        console.print(f"[red]{csv_path} not found.[/red]")
        raise typer.Exit(1)

    wagers = load_wagers(csv_path)
    s = summarize_wagers(
        wagers,
        unit_size=unit_size if unit_size is not None else settings.unit_size,
        starting_bankroll=(
            starting_bankroll if starting_bankroll is not None else settings.starting_bankroll
        ),
        name=csv_path.stem,
    )

    table = Table(title=f"Notebook: {s.name}")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")
    table.add_row("Bets", f"{s.total_bets} ({s.pending_bets} pending)")
    table.add_row("Record", f"{s.bets_won}-{s.bets_lost}-{s.bets_pushed}")
    table.add_row("Win rate", f"{clean_win_rate(s.win_rate):.1f}%")
    table.add_row("Total P&L", f"[{_pl_style(s.total_pl)}]{format_currency(s.total_pl)}[/]")
    table.add_row("ROI", f"{clean_roi(s.roi_pct):+.1f}%")
    table.add_row("Units", f"{s.units_won:+.1f}u")
    table.add_row("Bankroll", f"{format_currency(s.starting_bankroll)} → {format_currency(s.current_bankroll)}")
    console.print(table)


@notebook_app.command("search")
def notebook_search(
    csv_path: Path = typer.Argument(..., help="Notebook CSV export"),
    query: str = typer.Option("", help="Case-insensitive description search"),
    status: str = typer.Option(None, help="pending / won / lost / push"),
    date_from: str = typer.Option(None, "--from", help="First day, YYYY-MM-DD"),
    date_to: str = typer.Option(None, "--to", help="Last day, YYYY-MM-DD"),
    odds_min: int = typer.Option(None, help="Minimum American odds"),
    odds_max: int = typer.Option(None, help="Maximum American odds"),
    wager_min: float = typer.Option(None, help="Minimum stake"),
    wager_max: float = typer.Option(None, help="Maximum stake"),
    sort: str = typer.Option("date-desc", help="date-desc / date-asc / status / wager"),
) -> None:
    """Filter and sort the wagers in a notebook export."""
    from paperedge.betting.query import SortOrder, search_wagers
    from paperedge.betting.records import SearchFilters, WagerStatus
    from paperedge.io import load_wagers

    if not csv_path.exists():
        console.print(f"[red]{csv_path} not found.[/red]")
        raise typer.Exit(1)

    try:
        order = SortOrder(sort)
        status_value = WagerStatus(status) if status else None
    except ValueError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(1)

    filters = SearchFilters(
        text_query=query,
        status=status_value,
        date_from=date_from,
        date_to=date_to,
        odds_min=odds_min,
        odds_max=odds_max,
        wager_min=wager_min,
        wager_max=wager_max,
    )
    result = search_wagers(load_wagers(csv_path), filters, order)

    table = Table(title=f"Showing {result.filtered_count} of {result.total_count} bets")
    table.add_column("Date")
    table.add_column("Description", style="cyan")
    table.add_column("Odds", justify="right")
    table.add_column("Stake", justify="right")
    table.add_column("Status")
    for w in result.wagers:
        table.add_row(
            w.date,
            w.description,
            format_odds(w.american_odds),
            format_currency(w.stake_amount),
            WagerStatus(w.status).value,
        )
    console.print(table)


# ── Ledger commands ──────────────────────────────────────────────────

ledger_app = typer.Typer(help="Daily account ledger commands")
app.add_typer(ledger_app, name="ledger")


@ledger_app.command("daily")
def ledger_daily(
    csv_path: Path = typer.Argument(..., help="Ledger CSV export"),
    account: str = typer.Option(None, help="Only this account id"),
    year: int = typer.Option(None, help="Also show the total for this year"),
) -> None:
    """Daily totals with per-account breakdown, plus all-time and year totals."""
    from paperedge.betting.ledger import all_time_total, rollup_by_date, year_total
    from paperedge.io import load_ledger

    if not csv_path.exists():
        console.print(f"[red]{csv_path} not found.[/red]")
        raise typer.Exit(1)

    entries = load_ledger(csv_path)
    if account:
        entries = [e for e in entries if e.account_id == account]

    table = Table(title="Daily P&L")
    table.add_column("Date")
    table.add_column("Accounts")
    table.add_column("Total", justify="right")
    for day, rollup in rollup_by_date(entries).items():
        breakdown = ", ".join(
            f"{acct_id} {format_currency(e.amount)}" for acct_id, e in rollup.by_account.items()
        )
        table.add_row(day, breakdown, f"[{_pl_style(rollup.total)}]{format_currency(rollup.total)}[/]")
    console.print(table)

    console.print(f"All-time: [bold]{format_currency(all_time_total(entries, account))}[/bold]")
    if year is not None:
        console.print(f"{year}: [bold]{format_currency(year_total(entries, year, account))}[/bold]")


if __name__ == "__main__":
    app()
