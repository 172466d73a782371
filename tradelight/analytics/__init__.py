"""Dashboard analytics for TradeLight."""

from tradelight.analytics.aggregation import (
    DEFAULT_GOAL_DAYS,
    flatten,
    progress,
    stats,
    summarize,
)
from tradelight.analytics.month_grid import (
    WEEKDAY_LABELS,
    calendar_month,
    cell_tone,
    shift_month,
)

__all__ = [
    "DEFAULT_GOAL_DAYS",
    "flatten",
    "progress",
    "stats",
    "summarize",
    "WEEKDAY_LABELS",
    "calendar_month",
    "cell_tone",
    "shift_month",
]
