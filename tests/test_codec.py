"""Property-based tests for the document store boundary.

**Feature: trade-journal**
"""

import tempfile
from datetime import date, datetime, timezone
from pathlib import Path

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from tradelight.db.store import DataStore
from tradelight.journal.codec import from_document, to_document
from tradelight.models import DayLog, Trade
from tradelight.remote import LocalDocumentStore, RemoteStoreError, Timestamp, day_log_path


@pytest.fixture
def remote():
    """Create a local document store on a temporary database."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield LocalDocumentStore(DataStore(Path(tmpdir) / "test.db"))


class TestDateConversion:
    """
    *For any* calendar day, writing it through the store and reading it back
    should give a timestamp whose UTC calendar day is the same day.
    """

    @given(day=st.dates(min_value=date(1971, 1, 1), max_value=date(2999, 12, 31)))
    @settings(max_examples=100, deadline=None)
    def test_day_survives_round_trip(self, day: date):
        with tempfile.TemporaryDirectory() as tmpdir:
            store = LocalDocumentStore(DataStore(Path(tmpdir) / "test.db"))

            store.set("users/u/tradeLogs/x", to_document({"date": day}, store))
            loaded = from_document(store.get("users/u/tradeLogs/x"), store)

            assert isinstance(loaded["date"], datetime)
            assert loaded["date"].astimezone(timezone.utc).date() == day

    def test_nested_dates_converted(self, remote: LocalDocumentStore):
        document = to_document(
            {"a": [{"when": date(2024, 1, 2)}], "b": {"at": datetime(2024, 1, 2, 3, 4)}},
            remote,
        )

        assert isinstance(document["a"][0]["when"], Timestamp)
        assert isinstance(document["b"]["at"], Timestamp)

    def test_none_written_as_null(self, remote: LocalDocumentStore):
        document = to_document(Trade(), remote)

        assert "contracts" in document
        assert document["contracts"] is None

    def test_models_dumped_with_stored_names(self, remote: LocalDocumentStore):
        document = to_document(DayLog.blank(date(2024, 1, 2)), remote)

        assert "trades" in document
        assert "totalPoints" in document["trades"][0]
        assert "sessionName" in document["trades"][0]["sessions"][0]

    def test_timestamp_from_naive_datetime_is_utc(self):
        stamp = Timestamp.from_datetime(datetime(1970, 1, 2))

        assert stamp.seconds == 86400
        assert stamp.to_datetime() == datetime(1970, 1, 2, tzinfo=timezone.utc)


class TestLocalDocumentStore:
    """Writes merge into existing documents and reject raw dates."""

    def test_merge_keeps_absent_fields(self, remote: LocalDocumentStore):
        path = day_log_path("u1", "2024-01-02")
        remote.set(path, {"notes": "first", "extra": 1})
        remote.set(path, {"notes": "second"}, merge=True)

        assert remote.get(path) == {"notes": "second", "extra": 1}

    def test_replace_without_merge(self, remote: LocalDocumentStore):
        path = day_log_path("u1", "2024-01-02")
        remote.set(path, {"notes": "first", "extra": 1})
        remote.set(path, {"notes": "second"}, merge=False)

        assert remote.get(path) == {"notes": "second"}

    def test_missing_document(self, remote: LocalDocumentStore):
        assert remote.get(day_log_path("u1", "2024-01-02")) is None

    def test_raw_date_rejected(self, remote: LocalDocumentStore):
        with pytest.raises(RemoteStoreError):
            remote.set("users/u1/tradeLogs/2024-01-02", {"date": date(2024, 1, 2)})

    def test_list_collection_scoped_to_user(self, remote: LocalDocumentStore):
        remote.set(day_log_path("u1", "2024-01-02"), {"n": 1})
        remote.set(day_log_path("u1", "2024-01-03"), {"n": 2})
        remote.set(day_log_path("u2", "2024-01-02"), {"n": 3})

        assert remote.list_collection("users/u1/tradeLogs") == [{"n": 1}, {"n": 2}]

    def test_empty_user_rejected(self):
        with pytest.raises(ValueError):
            day_log_path("", "2024-01-02")

    @pytest.mark.parametrize("raw", ["{not json", '{"date": {"__timestamp__": 5}}', '{"date": {"__timestamp__": [1]}}'])
    def test_unreadable_document_raises_store_error(self, remote: LocalDocumentStore, raw: str):
        path = day_log_path("u1", "2024-01-02")
        remote._data_store.save_document(path, "users/u1/tradeLogs", raw)

        with pytest.raises(RemoteStoreError):
            remote.get(path)

    def test_unreadable_document_skipped_in_listing(self, remote: LocalDocumentStore):
        remote.set(day_log_path("u1", "2024-01-02"), {"n": 1})
        remote._data_store.save_document(day_log_path("u1", "2024-01-03"), "users/u1/tradeLogs", "{not json")

        assert remote.list_collection("users/u1/tradeLogs") == [{"n": 1}]
