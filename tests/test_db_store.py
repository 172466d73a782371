"""Property-based tests for the database store.

**Feature: trade-journal**
"""

import json
import tempfile
from pathlib import Path

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from tradelight.db.store import DataStore


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        db_path = Path(tmpdir) / "test.db"
        yield DataStore(db_path)


cache_keys = st.text(
    alphabet=st.characters(whitelist_categories=("Ll", "Lu", "Nd"), whitelist_characters="-"),
    min_size=1,
    max_size=30,
)


class TestDatabaseSchemaCompleteness:
    """
    *For any* fresh database, all required tables (local_storage, documents,
    users) should exist.
    """

    def test_schema_completeness(self, temp_db: DataStore):
        """Test that all required tables exist in a fresh database."""
        tables = temp_db.get_tables()

        for table in DataStore.REQUIRED_TABLES:
            assert table in tables, f"Required table '{table}' is missing"

    def test_reopening_keeps_data(self):
        """Opening the same file twice should not reset stored values."""
        with tempfile.TemporaryDirectory() as tmpdir:
            db_path = Path(tmpdir) / "nested" / "test.db"
            DataStore(db_path).set_item("k", "v")

            assert DataStore(db_path).get_item("k") == "v"


class TestLocalStorage:
    """
    *For any* key and value, a stored value should be returned unchanged
    until it is replaced or removed.
    """

    @given(key=cache_keys, value=st.text(max_size=200))
    @settings(max_examples=30, deadline=None)
    def test_set_get_remove(self, key: str, value: str):
        with tempfile.TemporaryDirectory() as tmpdir:
            store = DataStore(Path(tmpdir) / "test.db")

            assert store.get_item(key) is None

            store.set_item(key, value)
            assert store.get_item(key) == value

            store.remove_item(key)
            assert store.get_item(key) is None

    def test_set_replaces_value(self, temp_db: DataStore):
        temp_db.set_item("dayLog-2024-01-02", "old")
        temp_db.set_item("dayLog-2024-01-02", "new")

        assert temp_db.get_item("dayLog-2024-01-02") == "new"

    def test_get_keys_by_prefix(self, temp_db: DataStore):
        temp_db.set_item("dayLog-2024-01-03", "{}")
        temp_db.set_item("dayLog-2024-01-02", "{}")
        temp_db.set_item("trade-models", "[]")

        assert temp_db.get_keys("dayLog-") == ["dayLog-2024-01-02", "dayLog-2024-01-03"]
        assert len(temp_db.get_keys()) == 3


class TestDocuments:
    """Documents are stored per path and listed per collection."""

    def test_list_documents_by_collection(self, temp_db: DataStore):
        temp_db.save_document("users/a/tradeLogs/2024-01-02", "users/a/tradeLogs", '{"n": 1}')
        temp_db.save_document("users/a/tradeLogs/2024-01-03", "users/a/tradeLogs", '{"n": 2}')
        temp_db.save_document("users/b/tradeLogs/2024-01-02", "users/b/tradeLogs", '{"n": 3}')

        docs = [json.loads(raw) for raw in temp_db.list_documents("users/a/tradeLogs")]

        assert docs == [{"n": 1}, {"n": 2}]
        assert temp_db.get_document("users/b/tradeLogs/2024-01-02") == '{"n": 3}'
        assert temp_db.get_document("users/b/tradeLogs/2024-01-09") is None

    def test_stats_count_rows(self, temp_db: DataStore):
        temp_db.set_item("a", "1")
        temp_db.save_document("c/d", "c", "{}")

        stats = temp_db.get_stats()

        assert stats == {"local_storage": 1, "documents": 1, "users": 0}
