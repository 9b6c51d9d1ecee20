from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Iterable, Mapping, Optional, Sequence

from ..classes.repository import ClassRepository
from ..common.datetime_utils import as_day_start
from ..common.validators import require_non_empty, require_status
from ..core.enums import AttendanceStatus
from ..core.exceptions import NotFoundError, ValidationError
from .model import AttendanceRecord, AttendanceStats, ClassAttendance, StudentMark, status_value
from .period import MonthYearSelection
from .repository import AttendanceRepository
from .stats import compute_stats

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StudentAttendanceView:
    records: Sequence[AttendanceRecord]
    stats: AttendanceStats
    rows: Sequence[dict]
    selection: MonthYearSelection

    def as_dict(self) -> dict:
        return {
            "stats": self.stats.as_dict(),
            "rows": list(self.rows),
            "selection": self.selection.as_dict(),
        }


class AttendanceService:
    def __init__(self, attendance: AttendanceRepository, classes: ClassRepository):
        self._attendance = attendance
        self._classes = classes

    def _require_class(self, class_id: str) -> str:
        class_id = require_non_empty(class_id, "classId")
        if not self._classes.exists(class_id):
            raise NotFoundError("Class not found")
        return class_id

    @staticmethod
    def _to_marks(records: Iterable[Mapping[str, Any]]) -> list[StudentMark]:
        if records is None:
            raise ValidationError("records is required")
        if not isinstance(records, (list, tuple)):
            raise ValidationError("records must be a list")
        marks = []
        for r in records:
            if not isinstance(r, Mapping):
                raise ValidationError(f"Invalid attendance entry: {r!r}")
            marks.append(
                StudentMark(
                    student_id=require_non_empty(r.get("student"), "student"),
                    status=require_status(r.get("status")).value,
                    remark=r.get("remark"),
                )
            )
        return marks

    def create_attendance(
        self,
        *,
        class_id: str,
        on: date,
        subject: Optional[str],
        teacher_id: Optional[str],
        records: Iterable[Mapping[str, Any]],
    ) -> ClassAttendance:
        class_id = self._require_class(class_id)
        marks = self._to_marks(records)
        sheet = self._attendance.create(
            class_id=class_id,
            date=as_day_start(on),
            subject=subject,
            teacher_id=teacher_id,
            records=marks,
        )
        logger.info("Attendance %s created for class %s (%d records)", sheet.attendance_id, class_id, len(marks))
        return sheet

    def get_attendance(self, *, class_id: str, start: date, end: date) -> Sequence[ClassAttendance]:
        if start > end:
            raise ValidationError("startDate must not be after endDate")
        return self._attendance.find_by_class_and_range(
            class_id=require_non_empty(class_id, "classId"),
            start=as_day_start(start),
            end=as_day_start(end),
        )

    def get_class_attendance_on(self, *, class_id: str, on: date) -> Sequence[ClassAttendance]:
        return self._attendance.find_by_class_and_date(
            class_id=require_non_empty(class_id, "classId"),
            date=as_day_start(on),
        )

    def update_attendance(self, attendance_id: str, records: Iterable[Mapping[str, Any]]) -> ClassAttendance:
        sheet = self._attendance.update_records(
            attendance_id=require_non_empty(attendance_id, "attendanceId"),
            records=self._to_marks(records),
        )
        if sheet is None:
            raise NotFoundError("Attendance record not found")
        return sheet

    def mark_attendance(self, *, class_id: str, student_id: str, on: date, status: Any) -> ClassAttendance:
        return self._attendance.upsert_mark(
            class_id=require_non_empty(class_id, "classId"),
            student_id=require_non_empty(student_id, "studentId"),
            date=as_day_start(on),
            status=require_status(status),
        )

    def get_student_view(
        self,
        student_id: str,
        selection: Optional[MonthYearSelection] = None,
    ) -> StudentAttendanceView:
        """Stats and table rows for one student.

        The month/year selection is returned for display but does not filter
        the records: stats always cover the full history.
        """
        selection = selection or MonthYearSelection()
        records = list(self._attendance.records_for_student(require_non_empty(student_id, "studentId")))
        return StudentAttendanceView(
            records=records,
            stats=compute_stats(records),
            rows=[self._to_ui(r) for r in records],
            selection=selection,
        )

    def _to_ui(self, r: AttendanceRecord) -> dict:
        status = status_value(r.status)
        label = str(status).capitalize()

        # Anything not present/absent renders like late.
        css = {
            AttendanceStatus.PRESENT.value: "bg-green-100 text-green-800",
            AttendanceStatus.ABSENT.value: "bg-red-100 text-red-800",
        }.get(status, "bg-yellow-100 text-yellow-800")

        day = r.date.date() if isinstance(r.date, datetime) else r.date
        return {
            "date": day.strftime("%Y-%m-%d"),
            "status": label,
            "css_class": css,
            "remark": r.remark or "-",
            "subject": r.subject,
        }
