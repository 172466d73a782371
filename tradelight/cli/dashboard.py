"""Dashboard commands for TradeLight CLI.

Handles the P&L calendar, recent trades, statistics and goal progress.
"""

from datetime import date, datetime
from typing import Optional

import click
from rich.columns import Columns
from rich.panel import Panel
from rich.progress_bar import ProgressBar
from rich.table import Table

from tradelight.cli.common import (
    _get_day_log_store,
    _get_settings,
    _require_user,
    console,
    money,
    pnl_style,
)

_TONE_STYLES = {"win": "green", "loss": "red", "flat": "blue", "none": "dim"}

MONTH = click.DateTime(formats=["%Y-%m"])


def _load_logs():
    """Load and sort every day log of the signed-in user."""
    from tradelight.journal.day_log_store import sort_logs_desc

    user = _require_user()
    return sort_logs_desc(_get_day_log_store().load_all(user.uid))


def build_calendar(logs, year: int, month: int, today: Optional[date] = None) -> Table:
    """Render a month of daily results as a table."""
    from tradelight.analytics import WEEKDAY_LABELS, calendar_month, summarize

    table = Table(title=f"{date(year, month, 1):%B %Y}", show_lines=True)
    for label in WEEKDAY_LABELS:
        table.add_column(label, justify="center", min_width=9)

    for week in calendar_month(summarize(logs), year, month, today=today):
        row = []
        for cell in week:
            day_label = f"[bold]{cell.date.day}[/bold]" if cell.is_today else str(cell.date.day)
            if not cell.in_month:
                row.append(f"[dim]{cell.date.day}[/dim]")
                continue
            if cell.summary is None or not cell.summary.is_logged:
                row.append(day_label)
                continue
            style = _TONE_STYLES[cell.tone]
            trades = cell.summary.trade_count
            row.append(
                f"{day_label}\n[{style}]{money(cell.summary.pnl)}[/{style}]\n"
                f"[dim]{trades} trade{'s' if trades != 1 else ''}[/dim]"
            )
        table.add_row(*row)
    return table


def build_recent(logs, limit: int = 10) -> Table:
    """Render the recent-trade feed."""
    from tradelight.analytics import flatten

    table = Table(title="Recent Trades")
    table.add_column("Date")
    table.add_column("Instrument", style="accent")
    table.add_column("P&L", justify="right")

    entries = flatten(logs)[:limit]
    for entry in entries:
        if entry.is_no_trade:
            result = "[dim]No Trade[/dim]"
        else:
            style = pnl_style(entry.pnl)
            result = f"[{style}]{money(entry.pnl, 2)}[/{style}]"
        table.add_row(f"{entry.date.day} {entry.date:%b}", entry.instrument, result)
    if not entries:
        table.add_row("[dim]No recent trades[/dim]", "", "")
    return table


def build_stats(logs) -> Columns:
    """Render net P&L, average win and win rate cards."""
    from tradelight.analytics import stats as compute_stats

    result = compute_stats(logs)
    net_style = pnl_style(result.net_pnl)
    return Columns([
        Panel(f"[bold {net_style}]{money(result.net_pnl)}[/bold {net_style}]", title="Net P&L"),
        Panel(f"[bold]{money(result.avg_win)}[/bold]", title="Avg Trade Win"),
        Panel(f"[bold]{result.win_rate:.0f}%[/bold]", title="Win Rate"),
    ])


def build_progress(logs, goal: int) -> Panel:
    """Render progress toward the logged-days goal."""
    from tradelight.analytics import progress as compute_progress

    result = compute_progress(logs, goal)
    bar = ProgressBar(total=goal, completed=min(result.logged_day_count, goal), width=40)
    return Panel(
        bar,
        title=f"LOG {goal} DAYS  {result.logged_day_count}/{goal}",
        subtitle=f"{result.percent_of_goal:.0f}%",
    )


@click.command()
@click.option("--month", type=MONTH, default=None, help="Month to show (YYYY-MM, default current).")
def dashboard(month: Optional[datetime]) -> None:
    """Show the calendar, recent trades, stats and goal progress."""
    logs = _load_logs()
    when = month or datetime.now()
    console.print(build_calendar(logs, when.year, when.month))
    console.print(build_recent(logs))
    console.print(build_stats(logs))
    console.print(build_progress(logs, _get_settings().goal_days))


@click.command()
@click.option("--month", type=MONTH, default=None, help="Month to show (YYYY-MM, default current).")
@click.option("--prev", "offset", flag_value=-1, help="Show the previous month.")
@click.option("--next", "offset", flag_value=1, help="Show the next month.")
def calendar(month: Optional[datetime], offset: Optional[int]) -> None:
    """Show the P&L calendar for a month."""
    from tradelight.analytics import shift_month

    when = month or datetime.now()
    year, month_number = shift_month(when.year, when.month, offset or 0)
    console.print(build_calendar(_load_logs(), year, month_number))


@click.command()
@click.option("--limit", type=int, default=10, show_default=True, help="Number of entries.")
def recent(limit: int) -> None:
    """Show the most recent trades."""
    console.print(build_recent(_load_logs(), limit))


@click.command()
def stats() -> None:
    """Show net P&L, average win, win rate and goal progress."""
    logs = _load_logs()
    console.print(build_stats(logs))
    console.print(build_progress(logs, _get_settings().goal_days))
