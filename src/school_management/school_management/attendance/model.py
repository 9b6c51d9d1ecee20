from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional, Union

from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """One student's attendance on a given day.

    ``status`` is kept as stored so values outside AttendanceStatus are not lost.
    """

    date: Union[date, datetime]
    status: str
    remark: Optional[str] = None
    subject: Optional[str] = None


def status_value(status) -> str:
    if isinstance(status, AttendanceStatus):
        return status.value
    return status


@dataclass(frozen=True)
class StudentMark:
    """A student's mark on a class sheet; ``status`` is the stored string."""

    student_id: str
    status: str
    remark: Optional[str] = None


@dataclass(frozen=True)
class ClassAttendance:
    """Attendance sheet of one class for a date and subject."""

    attendance_id: str
    class_id: str
    date: datetime
    subject: Optional[str]
    teacher_id: Optional[str]
    records: tuple[StudentMark, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class AttendanceStats:
    total: int
    present: int
    absent: int
    late: int
    attendance_rate: Union[str, int]

    def as_dict(self) -> dict:
        return {
            "total": self.total,
            "present": self.present,
            "absent": self.absent,
            "late": self.late,
            "attendanceRate": self.attendance_rate,
        }
