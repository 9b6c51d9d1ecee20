from __future__ import annotations

from ..core.constants import CLASS_COLLECTION
from ..database.connection import DatabaseConnection
from ..database.mongo_base import to_object_id
from .repository import ClassRepository


class MongoClassRepository(ClassRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def exists(self, class_id: str) -> bool:
        col = self._conn_factory.database()[CLASS_COLLECTION]
        return col.count_documents({"_id": to_object_id(class_id, "classId")}, limit=1) > 0
