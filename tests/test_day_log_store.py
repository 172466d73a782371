"""Property-based tests for local-first day log loading and saving.

**Feature: trade-journal**
"""

import json
import tempfile
from datetime import date, datetime
from pathlib import Path
from unittest.mock import MagicMock

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from tradelight.db.store import DataStore
from tradelight.journal.day_log_store import DayLogStore, cache_key, sort_logs_desc
from tradelight.journal.codec import to_document
from tradelight.models import SESSION_NAMES, DayLog, Trade
from tradelight.remote import LocalDocumentStore, RemoteStoreError, day_log_path

USER = "user-1"


class FailingDocumentStore(LocalDocumentStore):
    """Local store whose reads and writes can be switched to fail."""

    def __init__(self, data_store: DataStore):
        super().__init__(data_store)
        self.fail_reads = False
        self.fail_writes = False
        self.get_calls = 0

    def get(self, path):
        self.get_calls += 1
        if self.fail_reads:
            raise RemoteStoreError("offline")
        return super().get(path)

    def set(self, path, document, merge=True):
        if self.fail_writes:
            raise RemoteStoreError("offline")
        super().set(path, document, merge=merge)

    def list_collection(self, path):
        if self.fail_reads:
            raise RemoteStoreError("offline")
        return super().list_collection(path)


@pytest.fixture
def env():
    """Cache, remote store, notifier mock and day log store on one temporary database."""
    with tempfile.TemporaryDirectory() as tmpdir:
        cache = DataStore(Path(tmpdir) / "test.db")
        remote = FailingDocumentStore(cache)
        notifier = MagicMock()
        yield cache, remote, notifier, DayLogStore(remote, cache, notifier=notifier)


def sample_log(day: date = date(2024, 1, 2), pnl: float = 150.0, notes: str = "") -> DayLog:
    return DayLog(date=day, notes=notes, trades=[Trade(instrument="ES", pnl=pnl, total_points=3)])


class TestLoad:
    """Cache first, then the remote store, then a blank log."""

    def test_cache_hit_skips_remote(self, env):
        cache, remote, notifier, store = env
        cache.set_item(cache_key("2024-01-02"), sample_log(notes="cached").model_dump_json(by_alias=True))
        remote.set(day_log_path(USER, "2024-01-02"), to_document(sample_log(notes="remote"), remote))

        loaded = store.load(USER, date(2024, 1, 2))

        assert loaded.notes == "cached"
        assert remote.get_calls == 0

    def test_corrupt_cache_falls_through_to_remote(self, env):
        cache, remote, notifier, store = env
        cache.set_item(cache_key("2024-01-02"), "{not json")
        remote.set(day_log_path(USER, "2024-01-02"), to_document(sample_log(notes="remote"), remote))

        loaded = store.load(USER, date(2024, 1, 2))

        assert loaded.notes == "remote"
        notifier.assert_not_called()

    def test_remote_hit_is_cached(self, env):
        cache, remote, notifier, store = env
        remote.set(day_log_path(USER, "2024-01-02"), to_document(sample_log(), remote))

        loaded = store.load(USER, datetime(2024, 1, 2, 15, 30))

        assert loaded == sample_log()
        cached = json.loads(cache.get_item(cache_key("2024-01-02")))
        assert cached["date"] == "2024-01-02"
        assert cached["trades"][0]["instrument"] == "ES"

    def test_missing_everywhere_gives_blank(self, env):
        cache, remote, notifier, store = env

        loaded = store.load(USER, date(2024, 1, 2))

        assert loaded == DayLog.blank(date(2024, 1, 2))
        assert cache.get_item(cache_key("2024-01-02")) is None

    def test_remote_failure_notifies_and_returns_blank(self, env):
        cache, remote, notifier, store = env
        remote.fail_reads = True

        loaded = store.load(USER, date(2024, 1, 2))

        assert loaded == DayLog.blank(date(2024, 1, 2))
        notifier.assert_called_once_with("Load Failed", "Could not load your saved log.")

    def test_corrupt_remote_document_notifies_and_returns_blank(self, env):
        cache, remote, notifier, store = env
        cache.save_document(day_log_path(USER, "2024-01-02"), f"users/{USER}/tradeLogs", "{not json")

        loaded = store.load(USER, date(2024, 1, 2))

        assert loaded == DayLog.blank(date(2024, 1, 2))
        notifier.assert_called_once_with("Load Failed", "Could not load your saved log.")

    def test_partial_remote_document_backfilled(self, env):
        cache, remote, notifier, store = env
        remote.set(
            day_log_path(USER, "2024-01-02"),
            {
                "date": remote.to_timestamp(datetime(2024, 1, 2)),
                "trades": [{"instrument": "MNQ", "sessions": [{"sessionName": "PM", "action": "reversal"}]}],
            },
        )

        loaded = store.load(USER, date(2024, 1, 2))

        trade = loaded.trades[0]
        assert loaded.notes == ""
        assert trade.pnl == 0.0
        assert [s.session_name for s in trade.sessions] == list(SESSION_NAMES)
        assert trade.sessions[-1].action == "reversal"


class TestSave:
    """Saves write the remote store first and the cache only on success."""

    @given(
        notes=st.text(max_size=50),
        pnl=st.floats(min_value=-10000, max_value=10000, allow_nan=False),
        day=st.dates(min_value=date(2000, 1, 1), max_value=date(2100, 12, 31)),
    )
    @settings(max_examples=30, deadline=None)
    def test_save_then_load_round_trip(self, notes: str, pnl: float, day: date):
        with tempfile.TemporaryDirectory() as tmpdir:
            cache = DataStore(Path(tmpdir) / "test.db")
            store = DayLogStore(LocalDocumentStore(cache), cache)
            log = sample_log(day=day, pnl=pnl, notes=notes)

            assert store.save(USER, log) is True
            assert store.load(USER, day) == log

            store.clear_cache(day)
            assert store.load(USER, day) == log

    def test_failed_save_leaves_cache_untouched(self, env):
        cache, remote, notifier, store = env
        store.save(USER, sample_log(notes="before"))
        remote.fail_writes = True

        saved = store.save(USER, sample_log(notes="after"))

        assert saved is False
        notifier.assert_called_once_with("Autosave Failed", "Could not save your changes.")
        assert json.loads(cache.get_item(cache_key("2024-01-02")))["notes"] == "before"

    def test_save_merges_into_existing_document(self, env):
        cache, remote, notifier, store = env
        path = day_log_path(USER, "2024-01-02")
        remote.set(path, {"sharedWith": ["coach"]})

        store.save(USER, sample_log())

        document = remote.get(path)
        assert document["sharedWith"] == ["coach"]
        assert document["trades"][0]["pnl"] == 150.0


class TestLoadAll:
    """Every remote document, skipping malformed ones, ignoring the cache."""

    def test_load_all_reads_remote_only(self, env):
        cache, remote, notifier, store = env
        store.save(USER, sample_log(day=date(2024, 1, 1)))
        store.save(USER, sample_log(day=date(2024, 1, 3)))
        cache.set_item(cache_key("2024-01-05"), sample_log(day=date(2024, 1, 5)).model_dump_json())

        logs = sort_logs_desc(store.load_all(USER))

        assert [log.date for log in logs] == [date(2024, 1, 3), date(2024, 1, 1)]

    def test_malformed_documents_skipped(self, env):
        cache, remote, notifier, store = env
        store.save(USER, sample_log(day=date(2024, 1, 1)))
        remote.set(day_log_path(USER, "broken"), {"notes": "no date here"})

        logs = store.load_all(USER)

        assert [log.date for log in logs] == [date(2024, 1, 1)]

    def test_failure_notifies_and_returns_empty(self, env):
        cache, remote, notifier, store = env
        remote.fail_reads = True

        assert store.load_all(USER) == []
        notifier.assert_called_once_with("Load Failed", "Could not load your trade logs.")

    def test_other_users_not_included(self, env):
        cache, remote, notifier, store = env
        store.save(USER, sample_log())
        store.save("user-2", sample_log(day=date(2024, 2, 2)))

        assert [log.date for log in store.load_all(USER)] == [date(2024, 1, 2)]
