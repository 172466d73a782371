"""User-defined trade setups ("models") kept in the local cache."""

import json
import logging

from tradelight.db.store import DataStore

logger = logging.getLogger(__name__)

SETUPS_KEY = "trade-models"


class SetupCatalog:
    """The list of setup names offered when tagging a trade."""

    def __init__(self, cache: DataStore):
        self._cache = cache

    def list_models(self) -> list[str]:
        """Saved setup names in insertion order."""
        raw = self._cache.get_item(SETUPS_KEY)
        if raw is None:
            return []
        try:
            names = json.loads(raw)
        except ValueError as e:
            logger.warning("Ignoring unreadable setup list: %s", e)
            return []
        if not isinstance(names, list):
            return []
        return [name for name in names if isinstance(name, str) and name]

    def _write(self, names: list[str]) -> None:
        self._cache.set_item(SETUPS_KEY, json.dumps(names))

    def add_model(self, name: str) -> list[str]:
        """Add a setup name; names already present (ignoring case) are kept once.

        Raises:
            ValueError: If the name is blank.
        """
        name = name.strip()
        if not name:
            raise ValueError("Setup name cannot be empty")
        names = self.list_models()
        if name.lower() not in {existing.lower() for existing in names}:
            names.append(name)
            self._write(names)
        return names

    def delete_model(self, name: str) -> list[str]:
        names = [existing for existing in self.list_models() if existing != name]
        self._write(names)
        return names

    def filter_models(self, query: str) -> list[str]:
        """Setup names containing ``query``, case-insensitively."""
        needle = query.lower()
        return [name for name in self.list_models() if needle in name.lower()]
