"""Local document store backed by the SQLite data store."""

import json
import logging
import sqlite3
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from pydantic import BaseModel, Field

from tradelight.db.store import DataStore
from tradelight.remote.base import BaseDocumentStore, RemoteStoreError

logger = logging.getLogger(__name__)

_TIMESTAMP_TAG = "__timestamp__"
_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


class Timestamp(BaseModel):
    """Native timestamp of the local store: seconds and nanoseconds since epoch (UTC)."""

    seconds: int = Field(..., description="Whole seconds since the Unix epoch")
    nanoseconds: int = Field(default=0, ge=0, lt=1_000_000_000, description="Sub-second part")

    model_config = {"frozen": True}

    @classmethod
    def from_datetime(cls, value: datetime) -> "Timestamp":
        """Build a timestamp; naive datetimes are read as UTC."""
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        delta = value - _EPOCH
        seconds = delta.days * 86400 + delta.seconds
        return cls(seconds=seconds, nanoseconds=delta.microseconds * 1000)

    def to_datetime(self) -> datetime:
        return _EPOCH + timedelta(seconds=self.seconds, microseconds=self.nanoseconds // 1000)


def _encode(value: Any) -> Any:
    if isinstance(value, Timestamp):
        return {_TIMESTAMP_TAG: [value.seconds, value.nanoseconds]}
    if isinstance(value, dict):
        return {key: _encode(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_encode(item) for item in value]
    if hasattr(value, "isoformat"):
        raise RemoteStoreError(
            f"Unsupported value of type {type(value).__name__}; convert dates to Timestamp first"
        )
    return value


def _decode(value: Any) -> Any:
    if isinstance(value, dict):
        if set(value) == {_TIMESTAMP_TAG}:
            seconds, nanoseconds = value[_TIMESTAMP_TAG]
            return Timestamp(seconds=seconds, nanoseconds=nanoseconds)
        return {key: _decode(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_decode(item) for item in value]
    return value


def _parent(path: str) -> str:
    collection, _, doc_id = path.rpartition("/")
    if not collection or not doc_id:
        raise ValueError(f"Invalid document path: {path!r}")
    return collection


class LocalDocumentStore(BaseDocumentStore):
    """Document store for offline use.

    Keeps documents as JSON in the ``documents`` table, so a journal works
    without any hosted service. Behaves like the hosted store at the
    boundary: dates must be converted to ``Timestamp`` and writes merge.
    """

    def __init__(self, data_store: DataStore):
        """Initialize the local document store.

        Args:
            data_store: DataStore instance for persistence.
        """
        self._data_store = data_store

    def get(self, path: str) -> Optional[dict[str, Any]]:
        try:
            raw = self._data_store.get_document(path)
        except sqlite3.Error as e:
            raise RemoteStoreError(f"Failed to read {path}: {e}") from e
        if raw is None:
            return None
        try:
            return _decode(json.loads(raw))
        except (TypeError, ValueError) as e:
            raise RemoteStoreError(f"Unreadable document {path}: {e}") from e

    def set(self, path: str, document: dict[str, Any], merge: bool = True) -> None:
        collection = _parent(path)
        try:
            body = _encode(document)
            if merge:
                existing = self._data_store.get_document(path)
                if existing is not None:
                    body = {**json.loads(existing), **body}
            payload = json.dumps(body)
            self._data_store.save_document(path, collection, payload)
        except (sqlite3.Error, TypeError, ValueError) as e:
            raise RemoteStoreError(f"Failed to write {path}: {e}") from e
        logger.debug("Wrote document %s", path)

    def list_collection(self, path: str) -> list[dict[str, Any]]:
        try:
            rows = self._data_store.list_documents(path)
        except sqlite3.Error as e:
            raise RemoteStoreError(f"Failed to list {path}: {e}") from e
        documents = []
        for raw in rows:
            try:
                documents.append(_decode(json.loads(raw)))
            except (TypeError, ValueError) as e:
                logger.warning("Skipping unreadable document in %s: %s", path, e)
        return documents

    def to_timestamp(self, value: datetime) -> Timestamp:
        return Timestamp.from_datetime(value)

    def from_timestamp(self, value: Any) -> Optional[datetime]:
        if isinstance(value, Timestamp):
            return value.to_datetime()
        return None
