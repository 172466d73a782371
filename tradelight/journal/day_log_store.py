"""Local-first load and save of day logs.

A day log lives in two places: the local cache (one JSON entry per day,
``dayLog-YYYY-MM-DD``) and the remote document store
(``users/{uid}/tradeLogs/{YYYY-MM-DD}``). Loads read the cache first and
fall back to the remote document. Saves always write the remote document and
then refresh the cache, so the cache only ever holds state the remote store
has accepted.
"""

import json
import logging
import sqlite3
import threading
from typing import Any, Callable, Iterable, Optional

from tradelight.db.store import DataStore
from tradelight.journal.codec import from_document, to_document
from tradelight.models.day_log import DayLog, day_key, to_day
from tradelight.remote.base import (
    BaseDocumentStore,
    RemoteStoreError,
    day_log_collection,
    day_log_path,
)

logger = logging.getLogger(__name__)

CACHE_KEY_PREFIX = "dayLog-"

Notifier = Callable[[str, str], None]


def cache_key(key: str) -> str:
    """Local cache key for a day key."""
    return f"{CACHE_KEY_PREFIX}{key}"


def _log_notification(title: str, message: str) -> None:
    logger.warning("%s: %s", title, message)


def sort_logs_desc(logs: Iterable[DayLog]) -> list[DayLog]:
    """Most recent day first."""
    return sorted(logs, key=lambda log: log.date, reverse=True)


class DayLogStore:
    """Loads and saves day logs through the local cache and the remote store."""

    def __init__(
        self,
        remote: BaseDocumentStore,
        cache: DataStore,
        notifier: Optional[Notifier] = None,
    ):
        """Initialize the day log store.

        Args:
            remote: Remote document store.
            cache: DataStore holding the local cache.
            notifier: Called with (title, message) for failures the user
                should see. Defaults to logging a warning.
        """
        self._remote = remote
        self._cache = cache
        self._notify = notifier or _log_notification
        self._write_lock = threading.Lock()

    # ==================== Cache ====================

    def _read_cache(self, key: str) -> Optional[DayLog]:
        """Cached log for a day key, or None on a miss or corrupt entry."""
        raw = self._cache.get_item(cache_key(key))
        if raw is None:
            return None
        try:
            record = json.loads(raw)
            if not isinstance(record, dict):
                raise ValueError(f"expected an object, got {type(record).__name__}")
            return DayLog.from_record(record, fallback_date=key)
        except ValueError as e:
            logger.warning("Ignoring unreadable cache entry %s: %s", cache_key(key), e)
            return None

    def _write_cache(self, day_log: DayLog) -> None:
        try:
            self._cache.set_item(
                cache_key(day_log.day_key), day_log.model_dump_json(by_alias=True)
            )
        except sqlite3.Error as e:
            logger.warning("Could not update cache for %s: %s", day_log.day_key, e)

    def clear_cache(self, day: Any) -> None:
        """Drop the cached copy of a day so the next load reads the remote store."""
        self._cache.remove_item(cache_key(day_key(day)))

    # ==================== Load / Save ====================

    def load(self, user_id: str, day: Any) -> DayLog:
        """Load the log for one day.

        A readable cache entry wins. Otherwise the remote document is fetched
        and cached; if there is none, a blank log for the day is returned.

        Args:
            user_id: Owner of the log.
            day: Date or datetime of the day to load.

        Returns:
            The day log with all five canonical sessions present.
        """
        key = day_key(day)
        cached = self._read_cache(key)
        if cached is not None:
            logger.debug("Loaded %s from cache", key)
            return cached

        try:
            document = self._remote.get(day_log_path(user_id, key))
        except RemoteStoreError as e:
            logger.error("Failed to load day log %s: %s", key, e)
            self._notify("Load Failed", "Could not load your saved log.")
            document = None

        if document is None:
            return DayLog.blank(to_day(day))

        try:
            loaded = DayLog.from_record(from_document(document, self._remote), fallback_date=key)
        except ValueError as e:
            logger.warning("Ignoring malformed remote document %s: %s", key, e)
            return DayLog.blank(to_day(day))

        self._write_cache(loaded)
        logger.debug("Loaded %s from remote store", key)
        return loaded

    def save(self, user_id: str, day_log: DayLog) -> bool:
        """Write a day log to the remote store, then to the cache.

        The remote write merges into the existing document. If it fails the
        user is notified and the cache is left as it was.

        Args:
            user_id: Owner of the log.
            day_log: Log to save.

        Returns:
            True if the remote write succeeded, False otherwise.
        """
        path = day_log_path(user_id, day_log.day_key)

        with self._write_lock:
            document = to_document(day_log, self._remote)
            try:
                self._remote.set(path, document, merge=True)
            except RemoteStoreError as e:
                logger.error("Autosave failed for %s: %s", day_log.day_key, e)
                self._notify("Autosave Failed", "Could not save your changes.")
                return False
            self._write_cache(day_log)

        logger.debug("Saved %s", day_log.day_key)
        return True

    def wait_for_writes(self) -> None:
        """Block until any in-flight write has finished."""
        with self._write_lock:
            pass

    def load_all(self, user_id: str) -> list[DayLog]:
        """Load every day log of a user from the remote store.

        The cache is not consulted. Documents come back in store order;
        use ``sort_logs_desc`` before display.

        Args:
            user_id: Owner of the logs.

        Returns:
            Parsed logs. Malformed documents are skipped.
        """
        try:
            documents = self._remote.list_collection(day_log_collection(user_id))
        except RemoteStoreError as e:
            logger.error("Failed to load day logs for %s: %s", user_id, e)
            self._notify("Load Failed", "Could not load your trade logs.")
            return []

        logs = []
        for document in documents:
            try:
                logs.append(DayLog.from_record(from_document(document, self._remote)))
            except ValueError as e:
                logger.warning("Skipping malformed day log: %s", e)
        return logs
