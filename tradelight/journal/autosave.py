"""Debounced autosave for the day log being edited."""

import logging
import threading
from typing import Callable, Optional

from tradelight.journal.day_log_store import DayLogStore
from tradelight.models.day_log import DayLog

logger = logging.getLogger(__name__)

TimerFactory = Callable[[float, Callable[[], None]], threading.Timer]


class AutoSaver:
    """Coalesces bursts of edits into a single save.

    Each ``schedule`` call replaces the pending value and restarts the quiet
    period. The save runs once no edit has arrived for ``delay`` seconds.
    ``flush`` saves the latest value right away.
    """

    DEFAULT_DELAY = 2.0

    def __init__(
        self,
        store: DayLogStore,
        user_id: str,
        delay: float = DEFAULT_DELAY,
        timer_factory: TimerFactory = threading.Timer,
    ):
        """Initialize the autosaver.

        Args:
            store: Store that performs the writes.
            user_id: Owner of the edited logs.
            delay: Quiet period in seconds before a scheduled save runs.
            timer_factory: Builds the timer, ``threading.Timer`` by default.
        """
        if delay < 0:
            raise ValueError("delay must be non-negative")
        self._store = store
        self._user_id = user_id
        self._delay = delay
        self._timer_factory = timer_factory
        self._lock = threading.Lock()
        # Held from taking the pending value until its save returns, so saves
        # land in the order they were taken.
        self._write_lock = threading.Lock()
        self._latest: Optional[DayLog] = None
        self._timer: Optional[threading.Timer] = None
        self.write_count = 0

    @property
    def delay(self) -> float:
        return self._delay

    @property
    def pending(self) -> bool:
        with self._lock:
            return self._latest is not None

    def schedule(self, day_log: DayLog) -> None:
        """Queue ``day_log`` for saving after the quiet period."""
        with self._lock:
            self._latest = day_log
            if self._timer is not None:
                self._timer.cancel()
            self._timer = self._timer_factory(self._delay, self._on_timer)
            self._timer.daemon = True
            self._timer.start()

    def _take_pending(self) -> Optional[DayLog]:
        with self._lock:
            day_log, self._latest = self._latest, None
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None
            return day_log

    def _write(self, day_log: DayLog) -> bool:
        saved = self._store.save(self._user_id, day_log)
        with self._lock:
            self.write_count += 1
        return saved

    def _on_timer(self) -> None:
        with self._write_lock:
            day_log = self._take_pending()
            if day_log is not None:
                self._write(day_log)

    def flush(self, day_log: Optional[DayLog] = None) -> bool:
        """Save the pending value now.

        Waits for a write already in flight before issuing this one.

        Args:
            day_log: Latest state to save, replacing any pending value.

        Returns:
            False if the save failed, True otherwise (including when nothing
            was pending).
        """
        with self._write_lock:
            pending = self._take_pending()
            if day_log is None:
                day_log = pending
            if day_log is None:
                self._store.wait_for_writes()
                return True
            logger.debug("Flushing pending save for %s", day_log.day_key)
            return self._write(day_log)

    def cancel(self) -> None:
        """Drop the pending value without saving it."""
        self._take_pending()

    def __enter__(self) -> "AutoSaver":
        return self

    def __exit__(self, *exc_info) -> None:
        self.flush()
