"""Configuration for TradeLight.

Settings live in ``~/.config/tradelight/config.toml`` (or under
``$TRADELIGHT_HOME``). ``SettingsManager`` is the single process-wide owner
of the current settings; readers subscribe to be told about changes.
"""

import logging
import os
import threading
from pathlib import Path
from typing import Callable, Literal, Optional

import toml
from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

THEMES = ("light", "theme-default", "theme-zinc", "theme-rose", "theme-blue")
FONTS = ("font-body", "font-mono")

# TOML section of each setting
_SECTIONS = {
    "theme": "appearance",
    "font": "appearance",
    "particles": "appearance",
    "particle_density": "appearance",
    "goal_days": "journal",
    "autosave_delay": "journal",
    "remote_backend": "remote",
    "firestore_project": "remote",
}

SettingsListener = Callable[["Settings"], None]


def config_dir() -> Path:
    """Directory holding the config file and database."""
    home = os.environ.get("TRADELIGHT_HOME")
    if home:
        return Path(home)
    return Path.home() / ".config" / "tradelight"


def config_path() -> Path:
    return config_dir() / "config.toml"


def db_path() -> Path:
    return config_dir() / "tradelight.db"


class Settings(BaseModel):
    """User preferences and journal options.

    ``theme`` sets the CLI accent color. ``font``, ``particles`` and
    ``particle_density`` are stored preferences only: they are kept and
    validated for a graphical front-end and have no effect in the terminal.
    """

    theme: Literal["light", "theme-default", "theme-zinc", "theme-rose", "theme-blue"] = Field(
        default="theme-default", description="Color theme"
    )
    font: Literal["font-body", "font-mono"] = Field(default="font-body", description="UI font")
    particles: bool = Field(default=False, description="Animated background particles")
    particle_density: int = Field(default=40, ge=0, le=200, description="Particle count")
    goal_days: int = Field(default=30, gt=0, description="Logged-days goal")
    autosave_delay: float = Field(default=2.0, ge=0, description="Autosave quiet period (seconds)")
    remote_backend: Literal["local", "firestore"] = Field(
        default="local", description="Where day logs are stored"
    )
    firestore_project: str = Field(default="", description="Google Cloud project for Firestore")

    model_config = {"frozen": True}

    @classmethod
    def from_toml(cls, data: dict) -> "Settings":
        """Read settings from the sectioned TOML layout; unknown keys are ignored."""
        values = {}
        for name, section in _SECTIONS.items():
            table = data.get(section, {})
            if isinstance(table, dict) and name in table:
                values[name] = table[name]
        return cls(**values)

    def to_toml(self) -> dict:
        data: dict = {}
        for name, section in _SECTIONS.items():
            data.setdefault(section, {})[name] = getattr(self, name)
        return data


class SettingsManager:
    """Loads, updates and broadcasts settings."""

    def __init__(self, path: Optional[Path] = None):
        """Initialize the settings manager.

        Args:
            path: Config file path. Defaults to ``config_path()``.
        """
        self._path = path or config_path()
        self._lock = threading.Lock()
        self._settings: Optional[Settings] = None
        self._listeners: list[SettingsListener] = []

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> Settings:
        if not self._path.exists():
            return Settings()
        try:
            return Settings.from_toml(toml.load(self._path))
        except (toml.TomlDecodeError, ValueError, OSError) as e:
            logger.warning("Ignoring unreadable config %s: %s", self._path, e)
            return Settings()

    def get(self) -> Settings:
        """Current settings, loaded from disk on first use."""
        with self._lock:
            if self._settings is None:
                self._settings = self._load()
            return self._settings

    def reload(self) -> Settings:
        with self._lock:
            self._settings = self._load()
            settings = self._settings
        self._notify(settings)
        return settings

    def save(self) -> Path:
        """Write the current settings to the config file."""
        settings = self.get()
        self._path.parent.mkdir(parents=True, exist_ok=True)
        with open(self._path, "w") as f:
            toml.dump(settings.to_toml(), f)
        return self._path

    def update(self, **changes) -> Settings:
        """Validate, persist and broadcast changed settings.

        Raises:
            ValueError: If a name is unknown or a value is invalid.
        """
        unknown = set(changes) - set(Settings.model_fields)
        if unknown:
            raise ValueError(f"Unknown settings: {', '.join(sorted(unknown))}")

        with self._lock:
            current = self._settings if self._settings is not None else self._load()
            updated = Settings(**{**current.model_dump(), **changes})
            self._settings = updated
        self.save()
        self._notify(updated)
        return updated

    def subscribe(self, listener: SettingsListener) -> Callable[[], None]:
        """Register a listener called with the new settings on every change.

        Returns:
            A function that removes the listener.
        """
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def _notify(self, settings: Settings) -> None:
        with self._lock:
            listeners = list(self._listeners)
        for listener in listeners:
            try:
                listener(settings)
            except Exception:
                logger.exception("Settings listener %r failed", listener)


_manager: Optional[SettingsManager] = None
_manager_lock = threading.Lock()


def get_settings_manager() -> SettingsManager:
    """The process-wide settings manager."""
    global _manager
    with _manager_lock:
        if _manager is None:
            _manager = SettingsManager()
        return _manager


def reset_settings_manager() -> None:
    """Forget the process-wide manager (the next call re-reads the config path)."""
    global _manager
    with _manager_lock:
        _manager = None
