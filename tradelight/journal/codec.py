"""Conversion of journal records across the document store boundary.

Writing walks the record and turns every ``date``/``datetime`` into the
store's native timestamp. A calendar ``date`` becomes midnight UTC of that
day, so reading it back and taking the UTC calendar day gives the same date.
Reading walks the document and turns native timestamps back into
``datetime`` values. ``None`` is always written as an explicit null.
"""

from datetime import date, datetime, time, timezone
from typing import Any

from pydantic import BaseModel

from tradelight.remote.base import BaseDocumentStore


def to_document(value: Any, store: BaseDocumentStore) -> Any:
    """Normalize a record for writing to ``store``.

    Args:
        value: Model, mapping, sequence or scalar.
        store: Target store, which decides the timestamp type.

    Returns:
        A structure of scalars, lists, dicts and store timestamps.
    """
    if value is None:
        return None
    if isinstance(value, BaseModel):
        return to_document(value.model_dump(by_alias=True), store)
    if isinstance(value, datetime):
        return store.to_timestamp(value)
    if isinstance(value, date):
        return store.to_timestamp(datetime.combine(value, time.min, tzinfo=timezone.utc))
    if isinstance(value, dict):
        return {str(key): to_document(item, store) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_document(item, store) for item in value]
    return value


def from_document(value: Any, store: BaseDocumentStore) -> Any:
    """Convert store timestamps in a loaded document back to datetimes.

    Args:
        value: Document or any nested part of it.
        store: Source store, which recognizes its timestamp type.
    """
    converted = store.from_timestamp(value)
    if converted is not None:
        return converted
    if isinstance(value, dict):
        return {key: from_document(item, store) for key, item in value.items()}
    if isinstance(value, list):
        return [from_document(item, store) for item in value]
    return value
