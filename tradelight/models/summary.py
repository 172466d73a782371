"""Derived view models for the dashboard."""

from datetime import date as date_type
from typing import Literal, Optional

from pydantic import BaseModel, Field


class DaySummary(BaseModel):
    """Aggregated result of one calendar day."""

    pnl: float = Field(default=0.0, description="Summed P&L of the day")
    trade_count: int = Field(default=0, ge=0, description="Number of trade entries")
    is_logged: bool = Field(default=False, description="Whether the day counts as logged")

    model_config = {"frozen": True}


class FeedEntry(BaseModel):
    """One row of the recent-trade feed."""

    date: date_type = Field(..., description="Day of the trade")
    instrument: str = Field(default="", description="Traded symbol")
    pnl: float = Field(default=0.0, description="Trade P&L")
    is_no_trade: bool = Field(default=False, description="Documented no-trade day")

    model_config = {"frozen": True}


class TradeStats(BaseModel):
    """Scalar statistics across all trades."""

    net_pnl: float = Field(default=0.0, description="Sum of all P&L")
    avg_win: float = Field(default=0.0, description="Mean P&L of winning trades")
    win_rate: float = Field(default=0.0, ge=0, le=100, description="Win rate percentage")

    model_config = {"frozen": True}


class Progress(BaseModel):
    """Progress toward the logged-days goal."""

    logged_day_count: int = Field(default=0, ge=0, description="Distinct logged days")
    goal: int = Field(..., gt=0, description="Target number of logged days")
    percent_of_goal: float = Field(default=0.0, ge=0, description="Percent of goal, uncapped")

    model_config = {"frozen": True}


CellTone = Literal["win", "loss", "flat", "none"]


class CalendarCell(BaseModel):
    """One day cell of the month calendar."""

    date: date_type
    in_month: bool
    is_today: bool = False
    summary: Optional[DaySummary] = None
    tone: CellTone = "none"

    model_config = {"frozen": True}

    @property
    def day_key(self) -> str:
        return self.date.isoformat()
