"""Google Cloud Firestore document store."""

import logging
import os
from datetime import datetime, timezone
from typing import Any, Optional

from google.api_core import exceptions as google_exceptions
from google.cloud import firestore

from tradelight.remote.base import BaseDocumentStore, RemoteStoreError

logger = logging.getLogger(__name__)


def require_emulator_or_allow_prod() -> None:
    """Refuse production Firestore unless explicitly allowed.

    Raises:
        RemoteStoreError: If neither FIRESTORE_EMULATOR_HOST nor
            ALLOW_PROD_FIRESTORE=1 is set.
    """
    if (os.getenv("FIRESTORE_EMULATOR_HOST") or "").strip():
        return
    if (os.getenv("ALLOW_PROD_FIRESTORE") or "").strip() == "1":
        return
    raise RemoteStoreError(
        "Refusing to use production Firestore. Set FIRESTORE_EMULATOR_HOST "
        "(e.g. 127.0.0.1:8080) or ALLOW_PROD_FIRESTORE=1."
    )


class FirestoreDocumentStore(BaseDocumentStore):
    """Document store backed by Cloud Firestore.

    Firestore's native timestamp is a timezone-aware datetime
    (``DatetimeWithNanoseconds`` on read).
    """

    def __init__(self, project_id: Optional[str] = None, client: Optional[firestore.Client] = None):
        """Initialize the Firestore store.

        Args:
            project_id: Google Cloud project. Falls back to GOOGLE_CLOUD_PROJECT.
            client: Pre-built client (used as-is, skips the production guard).
        """
        if client is None:
            require_emulator_or_allow_prod()
            project_id = project_id or os.getenv("GOOGLE_CLOUD_PROJECT")
            client = firestore.Client(project=project_id)
        self._client = client

    def get(self, path: str) -> Optional[dict[str, Any]]:
        try:
            snapshot = self._client.document(path).get()
        except google_exceptions.GoogleAPIError as e:
            raise RemoteStoreError(f"Failed to read {path}: {e}") from e
        if not snapshot.exists:
            return None
        return snapshot.to_dict()

    def set(self, path: str, document: dict[str, Any], merge: bool = True) -> None:
        try:
            self._client.document(path).set(document, merge=merge)
        except google_exceptions.GoogleAPIError as e:
            raise RemoteStoreError(f"Failed to write {path}: {e}") from e
        logger.debug("Wrote document %s", path)

    def list_collection(self, path: str) -> list[dict[str, Any]]:
        try:
            return [snapshot.to_dict() for snapshot in self._client.collection(path).stream()]
        except google_exceptions.GoogleAPIError as e:
            raise RemoteStoreError(f"Failed to list {path}: {e}") from e

    def to_timestamp(self, value: datetime) -> datetime:
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value

    def from_timestamp(self, value: Any) -> Optional[datetime]:
        if isinstance(value, datetime):
            return value
        return None
