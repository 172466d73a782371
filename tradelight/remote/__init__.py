"""Remote document stores for TradeLight day logs."""

from tradelight.remote.base import (
    BaseDocumentStore,
    RemoteStoreError,
    day_log_collection,
    day_log_path,
)
from tradelight.remote.local import LocalDocumentStore, Timestamp

__all__ = [
    "BaseDocumentStore",
    "RemoteStoreError",
    "day_log_collection",
    "day_log_path",
    "LocalDocumentStore",
    "Timestamp",
]
