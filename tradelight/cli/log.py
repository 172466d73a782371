"""Day logging commands for TradeLight CLI.

Handles recording a day's trade and viewing a logged day.
"""

from datetime import date, datetime
from pathlib import Path
from typing import Optional

import click
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from tradelight.cli.common import (
    _get_data_store,
    _get_day_log_store,
    _get_settings,
    _require_user,
    console,
    fail,
    money,
    pnl_style,
)
from tradelight.models.trade import CHART_PERFORMANCE_OPTIONS, INSTRUMENT_POINT_VALUES


def parse_session_option(value: str) -> tuple[str, str, str, str]:
    """Parse ``NAME=ACTION[:DIRECTION[:SWEEP]]``.

    Example: ``"New York=reversal:down:high"``.

    Raises:
        click.BadParameter: If the value has no ``=`` or too many parts.
    """
    name, sep, rest = value.partition("=")
    if not sep or not name.strip() or not rest.strip():
        raise click.BadParameter(f"Expected NAME=ACTION[:DIRECTION[:SWEEP]], got {value!r}")
    parts = [part.strip().lower() for part in rest.split(":")]
    if len(parts) > 3:
        raise click.BadParameter(f"Too many parts in {value!r}")
    parts += ["none"] * (3 - len(parts))
    return name.strip(), parts[0], parts[1], parts[2]


def render_day(day_log) -> None:
    """Print one day log."""
    trade = day_log.trades[0]
    style = pnl_style(day_log.total_pnl)

    summary = Table(show_header=False, box=None, padding=(0, 2))
    summary.add_column("Field", style="dim")
    summary.add_column("Value")
    summary.add_row("P&L", f"[bold {style}]{money(day_log.total_pnl, 2)}[/bold {style}]")
    summary.add_row("Instrument", trade.instrument)
    if trade.model:
        summary.add_row("Model", trade.model)
    if trade.total_points is not None:
        summary.add_row("Points", f"{trade.total_points:g}")
    if trade.contracts is not None:
        summary.add_row("Contracts", f"{trade.contracts:g}")
    if trade.trade_tp is not None or trade.trade_sl is not None:
        tp = "-" if trade.trade_tp is None else f"{trade.trade_tp:g}"
        sl = "-" if trade.trade_sl is None else f"{trade.trade_sl:g}"
        summary.add_row("TP / SL", f"{tp} / {sl}")
    if trade.entry_time or trade.exit_time:
        summary.add_row("Entry / Exit", f"{trade.entry_time or '-'} / {trade.exit_time or '-'}")
    if trade.chart_performance:
        summary.add_row("Chart", trade.chart_performance)
    if trade.has_image:
        caption = f" - {trade.analysis_text}" if trade.analysis_text else ""
        summary.add_row("Screenshot", f"attached{caption}")
    if day_log.notes:
        summary.add_row("Notes", day_log.notes)

    console.print(Panel(
        summary,
        title=f"[bold]Recap for {day_log.date.month}/{day_log.date.day}/{day_log.date:%y}[/bold]",
        border_style=style if style != "white" else "blue",
    ))

    annotated = [s for s in trade.sessions if s.action != "none"]
    if annotated:
        sessions = Table(title="Sessions")
        sessions.add_column("Session", style="accent")
        sessions.add_column("Action")
        sessions.add_column("Direction")
        sessions.add_column("Sweep")
        for session in annotated:
            direction = session.direction if session.is_directional else "-"
            sweep = session.sweep if session.sweep != "none" else "-"
            sessions.add_row(session.session_name, session.action, direction, sweep)
        console.print(sessions)


@click.command()
@click.option(
    "--date", "day",
    type=click.DateTime(formats=["%Y-%m-%d"]),
    default=None,
    help="Day to log (YYYY-MM-DD, default today).",
)
@click.option("--instrument", type=click.Choice(list(INSTRUMENT_POINT_VALUES)), help="Traded instrument.")
@click.option("--points", type=float, help="Total points captured.")
@click.option("--contracts", type=float, help="Number of contracts.")
@click.option("--pnl", type=float, help="P&L override (0 re-enables auto calculation).")
@click.option("--model", "setup", help="Setup/model name (added to your list if new).")
@click.option("--notes", help="Notes for the day.")
@click.option("--entry", "entry_time", help="Entry time, e.g. 09:35.")
@click.option("--exit", "exit_time", help="Exit time, e.g. 10:10.")
@click.option("--tp", type=float, help="Take-profit in points.")
@click.option("--sl", type=float, help="Stop-loss in points.")
@click.option(
    "--image",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Chart screenshot to attach.",
)
@click.option("--caption", help="Short description of the screenshot.")
@click.option("--clear-image", is_flag=True, default=False, help="Remove the screenshot.")
@click.option("--chart", type=click.Choice(list(CHART_PERFORMANCE_OPTIONS)), help="Chart performance.")
@click.option(
    "--session", "sessions",
    multiple=True,
    help="Session annotation NAME=ACTION[:DIRECTION[:SWEEP]] (repeatable).",
)
def log(
    day: Optional[datetime],
    instrument: Optional[str],
    points: Optional[float],
    contracts: Optional[float],
    pnl: Optional[float],
    setup: Optional[str],
    notes: Optional[str],
    entry_time: Optional[str],
    exit_time: Optional[str],
    tp: Optional[float],
    sl: Optional[float],
    image: Optional[Path],
    caption: Optional[str],
    clear_image: bool,
    chart: Optional[str],
    sessions: tuple[str, ...],
) -> None:
    """Record or update the trade for a day.

    The day is loaded (cache first, then your saved log), the given fields
    are applied, and the result is saved. P&L is calculated from points,
    contracts and the instrument's point value unless --pnl is given.

    \b
    Examples:
      tradelight log --instrument NQ --points 5 --contracts 2
      tradelight log --date 2024-03-01 --pnl -150 --model "ORB"
      tradelight log --image chart.png --session "London=displacement:up:high"
    """
    from tradelight.journal.autosave import AutoSaver
    from tradelight.journal.editor import DayLogEditor
    from tradelight.journal.setups import SetupCatalog

    parsed_sessions = [parse_session_option(value) for value in sessions]

    user = _require_user()
    settings = _get_settings()
    store = _get_day_log_store()
    target = day.date() if day else date.today()

    autosaver = AutoSaver(store, user.uid, delay=settings.autosave_delay)
    editor = DayLogEditor(store.load(user.uid, target), autosaver)

    try:
        if instrument:
            editor.set_instrument(instrument)
        if points is not None:
            editor.set_total_points(points)
        if contracts is not None:
            editor.set_contracts(contracts)
        if pnl is not None:
            editor.set_pnl(pnl)
        if setup is not None:
            if setup.strip():
                SetupCatalog(_get_data_store()).add_model(setup)
            editor.set_model(setup)
        if notes is not None:
            editor.set_notes(notes)
        if entry_time is not None:
            editor.set_entry_time(entry_time)
        if exit_time is not None:
            editor.set_exit_time(exit_time)
        if tp is not None:
            editor.set_take_profit(tp)
        if sl is not None:
            editor.set_stop_loss(sl)
        if clear_image:
            editor.clear_image()
        if image is not None:
            editor.attach_image_file(image)
        if caption is not None:
            editor.set_caption(caption)
        if chart is not None:
            editor.set_chart_performance(chart)
        for name, action, direction, sweep in parsed_sessions:
            editor.set_session(name, action, direction, sweep)
    except ValueError as e:
        autosaver.cancel()
        fail("Invalid Entry", escape(str(e)))

    if not editor.flush():
        raise SystemExit(1)

    render_day(editor.day_log)
    console.print("[dim]Saved.[/dim]")


@click.command()
@click.option(
    "--date", "day",
    type=click.DateTime(formats=["%Y-%m-%d"]),
    default=None,
    help="Day to show (YYYY-MM-DD, default today).",
)
def show(day: Optional[datetime]) -> None:
    """Show the log for a day."""
    user = _require_user()
    store = _get_day_log_store()
    render_day(store.load(user.uid, day.date() if day else date.today()))
