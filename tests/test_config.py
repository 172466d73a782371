"""Tests for settings loading, persistence and change broadcast.

**Feature: trade-journal**
"""

from pathlib import Path
from unittest.mock import MagicMock

import pytest
import toml
from hypothesis import given, settings
from hypothesis import strategies as st

from tradelight.config import (
    FONTS,
    THEMES,
    Settings,
    SettingsManager,
    config_dir,
    db_path,
    get_settings_manager,
    reset_settings_manager,
)


@pytest.fixture
def manager(tmp_path: Path) -> SettingsManager:
    return SettingsManager(tmp_path / "config.toml")


class TestDefaults:
    """A missing or broken config file gives default settings."""

    def test_missing_file(self, manager: SettingsManager):
        current = manager.get()

        assert current.theme == "theme-default"
        assert current.font == "font-body"
        assert current.particles is False
        assert current.particle_density == 40
        assert current.goal_days == 30
        assert current.autosave_delay == 2.0
        assert current.remote_backend == "local"

    def test_broken_file(self, manager: SettingsManager):
        manager.path.write_text("[appearance\ntheme = ")

        assert manager.get() == Settings()

    def test_invalid_value_in_file(self, manager: SettingsManager):
        manager.path.write_text('[appearance]\ntheme = "neon"\n')

        assert manager.get() == Settings()

    def test_sections_read_from_file(self, manager: SettingsManager):
        manager.path.write_text(
            '[appearance]\ntheme = "theme-rose"\nparticles = true\n\n[journal]\ngoal_days = 60\n'
        )

        current = manager.get()

        assert current.theme == "theme-rose"
        assert current.particles is True
        assert current.goal_days == 60


class TestUpdate:
    """
    *For any* valid theme and font, an update should be persisted and
    broadcast to every subscriber.
    """

    @given(theme=st.sampled_from(THEMES), font=st.sampled_from(FONTS))
    @settings(max_examples=20, deadline=None)
    def test_update_persists(self, tmp_path_factory, theme: str, font: str):
        path = tmp_path_factory.mktemp("cfg") / "config.toml"
        manager = SettingsManager(path)

        manager.update(theme=theme, font=font)

        stored = toml.load(path)
        assert stored["appearance"]["theme"] == theme
        assert stored["appearance"]["font"] == font
        assert SettingsManager(path).get().theme == theme

    def test_subscribers_notified(self, manager: SettingsManager):
        listener = MagicMock()
        manager.subscribe(listener)

        updated = manager.update(particles=True, particle_density=80)

        listener.assert_called_once_with(updated)
        assert updated.particle_density == 80

    def test_unsubscribe(self, manager: SettingsManager):
        listener = MagicMock()
        unsubscribe = manager.subscribe(listener)
        unsubscribe()

        manager.update(theme="light")

        listener.assert_not_called()

    def test_failing_listener_does_not_block_others(self, manager: SettingsManager):
        broken = MagicMock(side_effect=RuntimeError("boom"))
        healthy = MagicMock()
        manager.subscribe(broken)
        manager.subscribe(healthy)

        manager.update(theme="theme-zinc")

        healthy.assert_called_once()

    def test_string_values_coerced(self, manager: SettingsManager):
        updated = manager.update(goal_days="45", autosave_delay="0.5")

        assert updated.goal_days == 45
        assert updated.autosave_delay == 0.5

    def test_unknown_key_rejected(self, manager: SettingsManager):
        with pytest.raises(ValueError):
            manager.update(colour="red")

    def test_invalid_value_rejected(self, manager: SettingsManager):
        with pytest.raises(ValueError):
            manager.update(goal_days=0)
        assert manager.get().goal_days == 30
        assert not manager.path.exists()

    def test_reload_notifies(self, manager: SettingsManager):
        listener = MagicMock()
        manager.subscribe(listener)
        manager.path.write_text('[journal]\ngoal_days = 10\n')

        reloaded = manager.reload()

        assert reloaded.goal_days == 10
        listener.assert_called_once_with(reloaded)


class TestPaths:
    """Config and database live under TRADELIGHT_HOME when it is set."""

    def test_home_override(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("TRADELIGHT_HOME", str(tmp_path))

        assert config_dir() == tmp_path
        assert db_path() == tmp_path / "tradelight.db"

    def test_manager_singleton(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("TRADELIGHT_HOME", str(tmp_path))
        reset_settings_manager()
        try:
            first = get_settings_manager()
            assert get_settings_manager() is first
            assert first.path == tmp_path / "config.toml"
        finally:
            reset_settings_manager()
