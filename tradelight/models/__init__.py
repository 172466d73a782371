"""Data models for TradeLight."""

from tradelight.models.session import SESSION_NAMES, SessionEntry
from tradelight.models.trade import (
    CHART_PERFORMANCE_OPTIONS,
    DEFAULT_INSTRUMENT,
    INSTRUMENT_POINT_VALUES,
    Trade,
)
from tradelight.models.day_log import DayLog, day_key
from tradelight.models.summary import (
    CalendarCell,
    DaySummary,
    FeedEntry,
    Progress,
    TradeStats,
)
from tradelight.models.user import User

__all__ = [
    "SESSION_NAMES",
    "SessionEntry",
    "CHART_PERFORMANCE_OPTIONS",
    "DEFAULT_INSTRUMENT",
    "INSTRUMENT_POINT_VALUES",
    "Trade",
    "DayLog",
    "day_key",
    "CalendarCell",
    "DaySummary",
    "FeedEntry",
    "Progress",
    "TradeStats",
    "User",
]
