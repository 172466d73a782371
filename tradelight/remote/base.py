"""Base document store interface for TradeLight."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Optional


class RemoteStoreError(Exception):
    """Raised when a document store read or write fails."""


def day_log_collection(user_id: str) -> str:
    """Collection path holding a user's day logs."""
    if not user_id:
        raise ValueError("user_id is required")
    return f"users/{user_id}/tradeLogs"


def day_log_path(user_id: str, day_key: str) -> str:
    """Document path of one day log."""
    return f"{day_log_collection(user_id)}/{day_key}"


class BaseDocumentStore(ABC):
    """Abstract base class for remote document stores.

    Documents are JSON-like mappings of scalars, lists, nested mappings and
    the store's own timestamp type. Native ``date``/``datetime`` values are
    not accepted; callers convert them with ``to_timestamp`` first.
    """

    @abstractmethod
    def get(self, path: str) -> Optional[dict[str, Any]]:
        """Read one document.

        Args:
            path: Document path.

        Returns:
            The document, or None if it does not exist.

        Raises:
            RemoteStoreError: If the read fails.
        """
        pass

    @abstractmethod
    def set(self, path: str, document: dict[str, Any], merge: bool = True) -> None:
        """Write one document.

        With ``merge`` the fields in ``document`` overwrite stored fields and
        fields absent from ``document`` are left untouched.

        Args:
            path: Document path.
            document: Document body.
            merge: Merge into an existing document instead of replacing it.

        Raises:
            RemoteStoreError: If the write fails.
        """
        pass

    @abstractmethod
    def list_collection(self, path: str) -> list[dict[str, Any]]:
        """Read every document in a collection.

        Args:
            path: Collection path.

        Returns:
            Documents in store order.

        Raises:
            RemoteStoreError: If the read fails.
        """
        pass

    @abstractmethod
    def to_timestamp(self, value: datetime) -> Any:
        """Convert a datetime into the store's native timestamp type."""
        pass

    @abstractmethod
    def from_timestamp(self, value: Any) -> Optional[datetime]:
        """Convert a native timestamp back to a datetime.

        Returns:
            The datetime, or None if ``value`` is not a native timestamp.
        """
        pass
