"""Trade data model."""

from typing import Any, Mapping, Optional

from pydantic import BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel

from tradelight.models.session import SessionEntry, backfill_sessions, default_sessions

INSTRUMENT_POINT_VALUES: dict[str, float] = {
    "MNQ": 2,
    "NQ": 20,
    "ES": 50,
    "MES": 5,
}
DEFAULT_INSTRUMENT = "NQ"

CHART_PERFORMANCE_OPTIONS = (
    "Consolidation",
    "Small Move",
    "Hit TP",
    "Hit SL",
    "Hit SL and then TP",
    "Expansion Up",
    "Expansion Down",
)

# Value used when a stored field is missing or null. Applied on every load path.
FIELD_DEFAULTS: dict[str, Any] = {
    "instrument": DEFAULT_INSTRUMENT,
    "model": "",
    "pnl": 0.0,
    "entry_time": "",
    "exit_time": "",
    "contracts": None,
    "trade_tp": None,
    "trade_sl": None,
    "total_points": None,
    "analysis_image": "",
    "analysis_text": "",
    "chart_performance": "",
}

_NUMERIC_FIELDS = ("pnl", "contracts", "trade_tp", "trade_sl", "total_points")


def point_value(instrument: Optional[str]) -> float:
    """Dollar value of one point for an instrument (0 when unknown)."""
    return INSTRUMENT_POINT_VALUES.get(instrument or "", 0)


def derive_pnl(
    instrument: Optional[str],
    total_points: Optional[float],
    contracts: Optional[float],
) -> float:
    """Compute P&L as points * point value * contracts."""
    return float((total_points or 0) * point_value(instrument or DEFAULT_INSTRUMENT) * (contracts or 0))


def coerce_number(value: Any, default: Optional[float] = None) -> Optional[float]:
    """Coerce a stored value to float, falling back to ``default``.

    Empty strings and unparseable values are treated like missing values.
    """
    if value is None or value == "" or isinstance(value, bool):
        return default
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


class Trade(BaseModel):
    """Represents one trade recorded on a day log."""

    instrument: str = Field(default=DEFAULT_INSTRUMENT, min_length=1, description="Traded symbol")
    model: str = Field(default="", description="Setup/strategy label")
    pnl: float = Field(default=0.0, description="Realized P&L")
    entry_time: str = Field(default="", description="Entry time of day")
    exit_time: str = Field(default="", description="Exit time of day")
    contracts: Optional[float] = Field(default=None, description="Number of contracts")
    trade_tp: Optional[float] = Field(default=None, description="Take-profit in points")
    trade_sl: Optional[float] = Field(default=None, description="Stop-loss in points")
    total_points: Optional[float] = Field(default=None, description="Points captured")
    analysis_image: str = Field(default="", description="Chart screenshot as a data URL")
    analysis_text: str = Field(default="", description="Caption for the screenshot")
    chart_performance: str = Field(default="", description="Outcome pattern label")
    sessions: list[SessionEntry] = Field(default_factory=default_sessions)

    model_config = {
        "frozen": True,
        "populate_by_name": True,
        "alias_generator": to_camel,
        "protected_namespaces": (),
    }

    @field_validator("sessions", mode="before")
    @classmethod
    def _canonical_sessions(cls, value: Any) -> list[SessionEntry]:
        return backfill_sessions(value)

    @property
    def has_image(self) -> bool:
        return bool(self.analysis_image)

    @property
    def derived_pnl(self) -> float:
        return derive_pnl(self.instrument, self.total_points, self.contracts)

    @classmethod
    def from_record(cls, record: Any) -> "Trade":
        """Build a trade from a loaded record, applying ``FIELD_DEFAULTS``.

        Accepts camelCase (stored) or snake_case keys. Non-mapping input
        yields a blank trade.
        """
        if isinstance(record, Trade):
            return record
        if not isinstance(record, Mapping):
            return cls()

        values: dict[str, Any] = {}
        for name, default in FIELD_DEFAULTS.items():
            raw = record.get(to_camel(name), record.get(name))
            if name in _NUMERIC_FIELDS:
                values[name] = coerce_number(raw, default)
            elif raw is None or raw == "":
                values[name] = default
            else:
                values[name] = str(raw)
        values["sessions"] = record.get("sessions")
        return cls(**values)
