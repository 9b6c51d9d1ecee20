from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus
from .model import AttendanceRecord, ClassAttendance, StudentMark


class AttendanceRepository(Protocol):
    def create(
        self,
        *,
        class_id: str,
        date: datetime,
        subject: Optional[str],
        teacher_id: Optional[str],
        records: Sequence[StudentMark],
    ) -> ClassAttendance:
        """Insert a sheet; raises DuplicateRecordError for an existing class/date/subject."""

        raise NotImplementedError

    def find_by_class_and_range(self, *, class_id: str, start: datetime, end: datetime) -> Sequence[ClassAttendance]:
        raise NotImplementedError

    def find_by_class_and_date(self, *, class_id: str, date: datetime) -> Sequence[ClassAttendance]:
        raise NotImplementedError

    def update_records(self, *, attendance_id: str, records: Sequence[StudentMark]) -> Optional[ClassAttendance]:
        raise NotImplementedError

    def upsert_mark(
        self,
        *,
        class_id: str,
        student_id: str,
        date: datetime,
        status: AttendanceStatus,
    ) -> ClassAttendance:
        raise NotImplementedError

    def records_for_student(self, student_id: str) -> Sequence[AttendanceRecord]:
        raise NotImplementedError
