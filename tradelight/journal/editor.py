"""In-memory editing of a day log."""

import base64
import mimetypes
from pathlib import Path
from typing import Any, Optional

from tradelight.journal.autosave import AutoSaver
from tradelight.models.day_log import DayLog, to_day
from tradelight.models.session import SESSION_NAMES, SessionEntry
from tradelight.models.trade import (
    CHART_PERFORMANCE_OPTIONS,
    INSTRUMENT_POINT_VALUES,
    Trade,
    coerce_number,
)


class DayLogEditor:
    """Editable state of one day, the model behind the log form.

    Edits apply to the first trade of the day. P&L is derived from points,
    contracts and the instrument's point value until the user types a P&L
    of their own; typing zero or clearing the field switches derivation back
    on. Every edit is handed to the attached ``AutoSaver``.
    """

    def __init__(self, day_log: DayLog, autosaver: Optional[AutoSaver] = None):
        """Initialize the editor.

        Args:
            day_log: Loaded log to edit.
            autosaver: Receives every edited version (optional).
        """
        self._day_log = day_log
        self._autosaver = autosaver
        self.pnl_manually_set = False

    @property
    def day_log(self) -> DayLog:
        return self._day_log

    @property
    def trade(self) -> Trade:
        return self._day_log.trades[0]

    def _commit(self, day_log: DayLog) -> None:
        self._day_log = day_log
        if self._autosaver is not None:
            self._autosaver.schedule(day_log)

    def _update_trade(self, **changes: Any) -> None:
        trades = list(self._day_log.trades)
        trades[0] = trades[0].model_copy(update=changes)
        self._commit(self._day_log.model_copy(update={"trades": trades}))

    def _update_pnl(self) -> None:
        if self.pnl_manually_set:
            return
        calculated = self.trade.derived_pnl
        if self.trade.pnl != calculated:
            self._update_trade(pnl=calculated)

    # ==================== Day ====================

    def set_date(self, day: Any) -> None:
        normalized = to_day(day)
        if normalized is None:
            raise ValueError(f"Not a date: {day!r}")
        self._commit(self._day_log.model_copy(update={"date": normalized}))

    def set_notes(self, notes: str) -> None:
        self._commit(self._day_log.model_copy(update={"notes": notes or ""}))

    # ==================== Result ====================

    def set_instrument(self, instrument: str) -> None:
        """Select the traded instrument and re-derive P&L.

        Raises:
            ValueError: If the instrument is not one of the supported symbols.
        """
        if instrument not in INSTRUMENT_POINT_VALUES:
            raise ValueError(
                f"Unknown instrument: {instrument}. Must be one of {list(INSTRUMENT_POINT_VALUES)}"
            )
        self._update_trade(instrument=instrument)
        self._update_pnl()

    def set_total_points(self, points: Any) -> None:
        self._update_trade(total_points=coerce_number(points))
        self._update_pnl()

    def set_contracts(self, contracts: Any) -> None:
        self._update_trade(contracts=coerce_number(contracts))
        self._update_pnl()

    def set_pnl(self, value: Any) -> None:
        """Type a P&L by hand.

        A non-zero value pins the P&L. Zero or empty releases it and the
        derived value is applied again.
        """
        pnl = coerce_number(value, 0.0)
        self._update_trade(pnl=pnl)
        self.pnl_manually_set = pnl != 0
        self._update_pnl()

    def set_take_profit(self, points: Any) -> None:
        self._update_trade(trade_tp=coerce_number(points))

    def set_stop_loss(self, points: Any) -> None:
        self._update_trade(trade_sl=coerce_number(points))

    def set_entry_time(self, value: Optional[str]) -> None:
        self._update_trade(entry_time=value or "")

    def set_exit_time(self, value: Optional[str]) -> None:
        self._update_trade(exit_time=value or "")

    # ==================== Analysis ====================

    def set_model(self, name: Optional[str]) -> None:
        self._update_trade(model=(name or "").strip())

    def on_model_deleted(self, name: str) -> None:
        """Clear the selected setup if it was just deleted from the catalog."""
        if self.trade.model == name:
            self._update_trade(model="")

    def attach_image(self, data: bytes, mime_type: str) -> None:
        """Attach a chart screenshot, stored as a base64 data URL.

        Raises:
            ValueError: If the content is empty or not an image type.
        """
        if not mime_type or not mime_type.startswith("image/"):
            raise ValueError(f"Not an image type: {mime_type!r}")
        if not data:
            raise ValueError("Image is empty")
        encoded = base64.b64encode(data).decode("ascii")
        self._update_trade(analysis_image=f"data:{mime_type};base64,{encoded}")

    def attach_image_file(self, path: Path) -> None:
        """Attach a screenshot from a file on disk."""
        mime_type, _ = mimetypes.guess_type(str(path))
        self.attach_image(Path(path).read_bytes(), mime_type or "")

    def clear_image(self) -> None:
        self._update_trade(analysis_image="", analysis_text="")

    def set_caption(self, text: Optional[str]) -> None:
        self._update_trade(analysis_text=text or "")

    def set_chart_performance(self, label: Optional[str]) -> None:
        """Set the outcome pattern label (empty clears it).

        Raises:
            ValueError: If the label is not a known option.
        """
        label = label or ""
        if label and label not in CHART_PERFORMANCE_OPTIONS:
            raise ValueError(
                f"Unknown chart performance: {label}. Must be one of {list(CHART_PERFORMANCE_OPTIONS)}"
            )
        self._update_trade(chart_performance=label)

    def set_session(
        self,
        name: str,
        action: str,
        direction: str = "none",
        sweep: str = "none",
    ) -> None:
        """Annotate one session window.

        Direction is dropped for non-directional actions and sweep is dropped
        when the action is ``none``.

        Raises:
            ValueError: If the session name or any label is invalid.
        """
        if name not in SESSION_NAMES:
            raise ValueError(f"Unknown session: {name}. Must be one of {list(SESSION_NAMES)}")
        entry = SessionEntry(session_name=name, action=action, direction=direction, sweep=sweep)
        if not entry.is_directional:
            entry = entry.model_copy(update={"direction": "none"})
        if entry.action == "none":
            entry = entry.model_copy(update={"sweep": "none"})

        sessions = [
            entry if session.session_name == name else session
            for session in self.trade.sessions
        ]
        self._update_trade(sessions=sessions)

    # ==================== Saving ====================

    def flush(self) -> bool:
        """Save the current state immediately (e.g. when leaving the day).

        Returns:
            False if the save failed, True otherwise.
        """
        if self._autosaver is None:
            return True
        return self._autosaver.flush(self._day_log)
