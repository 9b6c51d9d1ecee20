from __future__ import annotations

from dataclasses import dataclass

from .attendance.mongo_attendance_repository import MongoAttendanceRepository
from .attendance.service import AttendanceService
from .classes.mongo_class_repository import MongoClassRepository
from .database.connection import DBConfig, DatabaseConnection


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection

    attendance_repo: MongoAttendanceRepository
    classes_repo: MongoClassRepository

    attendance_service: AttendanceService


def build_container(*, mongo_config: dict) -> Container:
    config = DBConfig(
        uri=str(mongo_config["uri"]),
        database=mongo_config.get("database") or None,
        options=dict(mongo_config.get("options") or {}),
    )
    conn = DatabaseConnection.get_instance(config)

    attendance_repo = MongoAttendanceRepository(conn)
    classes_repo = MongoClassRepository(conn)

    attendance_service = AttendanceService(attendance_repo, classes_repo)

    return Container(
        conn=conn,
        attendance_repo=attendance_repo,
        classes_repo=classes_repo,
        attendance_service=attendance_service,
    )
