"""DayLog data model."""

from datetime import date as date_type
from datetime import datetime
from typing import Any, Mapping, Optional

from pydantic import BaseModel, Field, field_validator

from tradelight.models.trade import Trade


def to_day(value: Any) -> Optional[date_type]:
    """Normalize a date-like value to its calendar day.

    Accepts ``date``, ``datetime`` (time of day and offset are discarded) and
    ISO strings. Returns None for anything else.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date_type):
        return value
    if isinstance(value, str) and value:
        try:
            return datetime.fromisoformat(value.replace("Z", "+00:00")).date()
        except ValueError:
            return None
    return None


def day_key(value: Any) -> str:
    """Canonical ``YYYY-MM-DD`` key for a date-like value.

    Raises:
        ValueError: If the value cannot be read as a date.
    """
    day = to_day(value)
    if day is None:
        raise ValueError(f"Not a date: {value!r}")
    return day.isoformat()


class DayLog(BaseModel):
    """Represents one user's journal record for a calendar day."""

    date: date_type = Field(..., description="Calendar day of the log")
    notes: str = Field(default="", description="Free-text notes for the day")
    trades: list[Trade] = Field(default_factory=lambda: [Trade()])

    model_config = {"frozen": True}

    @field_validator("date", mode="before")
    @classmethod
    def _truncate_to_day(cls, value: Any) -> Any:
        return to_day(value) or value

    @property
    def day_key(self) -> str:
        return self.date.isoformat()

    @property
    def total_pnl(self) -> float:
        return sum(trade.pnl for trade in self.trades)

    @property
    def has_image(self) -> bool:
        return any(trade.has_image for trade in self.trades)

    @property
    def is_logged(self) -> bool:
        """A day counts as logged when it has a result or is an imaged no-trade day."""
        return is_logged_day(self.total_pnl, self.has_image)

    @classmethod
    def blank(cls, day: Any) -> "DayLog":
        """Fresh record for a day with no saved data."""
        return cls(date=day)

    @classmethod
    def from_record(cls, record: Mapping[str, Any], fallback_date: Any = None) -> "DayLog":
        """Build a day log from a cached or stored record.

        Missing fields are filled from the defaults table, each trade is
        normalized with ``Trade.from_record`` and session lists are projected
        onto the canonical sessions.

        Args:
            record: Loaded mapping (camelCase or snake_case keys).
            fallback_date: Day to use when the record carries no usable date.

        Raises:
            ValueError: If neither the record nor ``fallback_date`` has a date.
        """
        day = to_day(record.get("date")) or to_day(fallback_date)
        if day is None:
            raise ValueError("Day log record has no date")

        raw_trades = record.get("trades")
        if isinstance(raw_trades, (list, tuple)) and raw_trades:
            trades = [Trade.from_record(item) for item in raw_trades]
        else:
            trades = [Trade()]

        notes = record.get("notes")
        return cls(date=day, notes=notes if isinstance(notes, str) else "", trades=trades)


def is_logged_day(total_pnl: float, has_image: bool) -> bool:
    """Non-zero result, or an attached image on a zero-result day."""
    return total_pnl != 0 or (has_image and total_pnl == 0)
