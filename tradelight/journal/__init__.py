"""Day log persistence and editing for TradeLight."""

from tradelight.journal.autosave import AutoSaver
from tradelight.journal.day_log_store import DayLogStore, cache_key, sort_logs_desc
from tradelight.journal.editor import DayLogEditor
from tradelight.journal.setups import SetupCatalog

__all__ = [
    "AutoSaver",
    "DayLogStore",
    "cache_key",
    "sort_logs_desc",
    "DayLogEditor",
    "SetupCatalog",
]
