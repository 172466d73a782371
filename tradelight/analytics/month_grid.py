"""Month grid for the P&L calendar."""

import calendar
from datetime import date
from typing import Mapping, Optional

from tradelight.models.summary import CalendarCell, CellTone, DaySummary

WEEKDAY_LABELS = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")

_SUNDAY_FIRST = calendar.Calendar(firstweekday=calendar.SUNDAY)


def cell_tone(summary: Optional[DaySummary]) -> CellTone:
    """Highlight for a day: green win, red loss, neutral for a logged flat day."""
    if summary is None or not summary.is_logged:
        return "none"
    if summary.pnl > 0:
        return "win"
    if summary.pnl < 0:
        return "loss"
    return "flat"


def calendar_month(
    summaries: Mapping[str, DaySummary],
    year: int,
    month: int,
    today: Optional[date] = None,
) -> list[list[CalendarCell]]:
    """Weeks (Sunday to Saturday) covering a month.

    Leading and trailing days of neighbouring months are included so every
    week is complete.

    Args:
        summaries: Output of ``summarize``.
        year: Calendar year.
        month: Month number (1-12).
        today: Day to flag as today (defaults to ``date.today()``).
    """
    today = today or date.today()
    weeks = []
    for week in _SUNDAY_FIRST.monthdatescalendar(year, month):
        cells = []
        for day in week:
            summary = summaries.get(day.isoformat())
            cells.append(
                CalendarCell(
                    date=day,
                    in_month=day.month == month,
                    is_today=day == today,
                    summary=summary,
                    tone=cell_tone(summary),
                )
            )
        weeks.append(cells)
    return weeks


def shift_month(year: int, month: int, delta: int) -> tuple[int, int]:
    """Move ``delta`` months forward (negative for back)."""
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1
