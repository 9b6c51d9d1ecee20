from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Iterator, Optional

from bson import ObjectId
from bson.errors import InvalidId

from ..core.exceptions import ValidationError
from .connection import DatabaseConnection

logger = logging.getLogger(__name__)


@contextmanager
def db_client(conn_factory: DatabaseConnection) -> Iterator[Any]:
    """Yield a fresh client and close it on every exit path."""
    client = conn_factory.connect()
    try:
        yield client
    finally:
        client.close()
        logger.info("Connection closed successfully")


def to_object_id(value: Any, field_name: str = "id") -> ObjectId:
    if isinstance(value, ObjectId):
        return value
    try:
        return ObjectId(str(value))
    except (InvalidId, TypeError):
        raise ValidationError(f"Invalid {field_name}: {value!r}") from None


def id_str(value: Any) -> Optional[str]:
    return str(value) if value is not None else None

