"""SessionEntry data model."""

from typing import Any, Iterable, Literal, Mapping, Optional

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

SESSION_NAMES = ("Asia", "London", "New York", "Lunch", "PM")

SESSION_ACTIONS = ("none", "consolidation", "displacement", "retracement", "reversal")
SESSION_DIRECTIONS = ("none", "up", "down")
SESSION_SWEEPS = ("none", "high", "low", "both")

SessionAction = Literal["none", "consolidation", "displacement", "retracement", "reversal"]
SessionDirection = Literal["none", "up", "down"]
SessionSweep = Literal["none", "high", "low", "both"]


class SessionEntry(BaseModel):
    """Annotation of what price did during one trading session window."""

    session_name: str = Field(..., min_length=1, description="Canonical session name")
    action: SessionAction = Field(default="none", description="Price action label")
    direction: SessionDirection = Field(
        default="none", description="Expansion direction (directional actions only)"
    )
    sweep: SessionSweep = Field(default="none", description="Liquidity sweep side")

    model_config = {"frozen": True, "populate_by_name": True, "alias_generator": to_camel}

    @property
    def is_directional(self) -> bool:
        """Whether ``direction`` carries meaning for this action."""
        return self.action not in ("none", "consolidation")


def default_sessions() -> list[SessionEntry]:
    """One blank entry per canonical session, in canonical order."""
    return [SessionEntry(session_name=name) for name in SESSION_NAMES]


def _pick(value: Any, allowed: tuple[str, ...]) -> str:
    return value if value in allowed else "none"


def backfill_sessions(loaded: Optional[Iterable[Any]]) -> list[SessionEntry]:
    """Project loaded sessions onto the canonical template.

    Sessions matching a canonical name keep their values, missing names get
    defaults and unknown names are dropped. Invalid enum values fall back to
    ``none`` rather than failing the whole record.

    Args:
        loaded: Session entries as models or raw mappings (may be None).

    Returns:
        Exactly one entry per canonical session, in canonical order.
    """
    by_name: dict[str, Mapping[str, Any]] = {}
    for item in loaded or []:
        if isinstance(item, SessionEntry):
            item = item.model_dump()
        if not isinstance(item, Mapping):
            continue
        name = item.get("session_name", item.get("sessionName"))
        if name in SESSION_NAMES and name not in by_name:
            by_name[name] = item

    sessions = []
    for name in SESSION_NAMES:
        saved = by_name.get(name, {})
        sessions.append(
            SessionEntry(
                session_name=name,
                action=_pick(saved.get("action"), SESSION_ACTIONS),
                direction=_pick(saved.get("direction"), SESSION_DIRECTIONS),
                sweep=_pick(saved.get("sweep"), SESSION_SWEEPS),
            )
        )
    return sessions
