"""Property-based tests for the setup catalog.

**Feature: trade-journal**
"""

import tempfile
from pathlib import Path

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from tradelight.db.store import DataStore
from tradelight.journal.setups import SETUPS_KEY, SetupCatalog


@pytest.fixture
def catalog():
    with tempfile.TemporaryDirectory() as tmpdir:
        yield SetupCatalog(DataStore(Path(tmpdir) / "test.db"))


class TestSetupCatalog:
    """
    *For any* sequence of names, the catalog should hold each name once
    (ignoring case) in the order first added.
    """

    @given(names=st.lists(st.sampled_from(["ORB", "orb", "FVG", "Breaker", "fvg", "OTE"]), max_size=10))
    @settings(max_examples=30, deadline=None)
    def test_names_unique_ignoring_case(self, names: list[str]):
        with tempfile.TemporaryDirectory() as tmpdir:
            catalog = SetupCatalog(DataStore(Path(tmpdir) / "test.db"))
            for name in names:
                catalog.add_model(name)

            expected = []
            for name in names:
                if name.lower() not in [e.lower() for e in expected]:
                    expected.append(name)

            assert catalog.list_models() == expected

    def test_blank_name_rejected(self, catalog: SetupCatalog):
        with pytest.raises(ValueError):
            catalog.add_model("   ")

    def test_names_stripped(self, catalog: SetupCatalog):
        catalog.add_model("  Silver Bullet ")

        assert catalog.list_models() == ["Silver Bullet"]

    def test_delete(self, catalog: SetupCatalog):
        catalog.add_model("ORB")
        catalog.add_model("FVG")

        assert catalog.delete_model("ORB") == ["FVG"]
        assert catalog.list_models() == ["FVG"]

    def test_filter_case_insensitive(self, catalog: SetupCatalog):
        for name in ["Opening Range", "FVG", "Range Fade"]:
            catalog.add_model(name)

        assert catalog.filter_models("range") == ["Opening Range", "Range Fade"]
        assert catalog.filter_models("") == ["Opening Range", "FVG", "Range Fade"]

    def test_corrupt_value_reads_empty(self, catalog: SetupCatalog):
        catalog._cache.set_item(SETUPS_KEY, "not json")

        assert catalog.list_models() == []
        catalog.add_model("ORB")
        assert catalog.list_models() == ["ORB"]
