from __future__ import annotations

from datetime import datetime
from typing import Optional

import pytest

from src.school_management.school_management.attendance.model import (
    AttendanceRecord,
    ClassAttendance,
    StudentMark,
)
from src.school_management.school_management.attendance.service import AttendanceService
from src.school_management.school_management.core.exceptions import DuplicateRecordError


class InMemoryClasses:
    def __init__(self, class_ids=()):
        self._ids = set(class_ids)

    def exists(self, class_id: str) -> bool:
        return class_id in self._ids


class InMemoryAttendance:
    def __init__(self):
        self._next_id = 1
        self.sheets: dict[str, ClassAttendance] = {}
        # student_id -> records fed straight to the student view
        self.student_records: dict[str, list[AttendanceRecord]] = {}

    def _new_id(self) -> str:
        sid = f"a{self._next_id}"
        self._next_id += 1
        return sid

    def create(self, *, class_id, date, subject, teacher_id, records):
        for s in self.sheets.values():
            if (s.class_id, s.date, s.subject) == (class_id, date, subject):
                raise DuplicateRecordError("Attendance record already exists for this class, date and subject")
        sheet = ClassAttendance(
            attendance_id=self._new_id(),
            class_id=class_id,
            date=date,
            subject=subject,
            teacher_id=teacher_id,
            records=tuple(records),
        )
        self.sheets[sheet.attendance_id] = sheet
        return sheet

    def find_by_class_and_range(self, *, class_id, start, end):
        return sorted(
            (s for s in self.sheets.values() if s.class_id == class_id and start <= s.date <= end),
            key=lambda s: s.date,
        )

    def find_by_class_and_date(self, *, class_id, date):
        return [s for s in self.sheets.values() if s.class_id == class_id and s.date == date]

    def update_records(self, *, attendance_id, records) -> Optional[ClassAttendance]:
        sheet = self.sheets.get(attendance_id)
        if not sheet:
            return None
        updated = ClassAttendance(
            attendance_id=sheet.attendance_id,
            class_id=sheet.class_id,
            date=sheet.date,
            subject=sheet.subject,
            teacher_id=sheet.teacher_id,
            records=tuple(records),
        )
        self.sheets[attendance_id] = updated
        return updated

    def upsert_mark(self, *, class_id, student_id, date, status):
        sheets = self.find_by_class_and_date(class_id=class_id, date=date)
        for sheet in sheets:
            if any(m.student_id == student_id for m in sheet.records):
                marks = [
                    StudentMark(student_id=m.student_id, status=status.value, remark=m.remark) if m.student_id == student_id else m
                    for m in sheet.records
                ]
                return self.update_records(attendance_id=sheet.attendance_id, records=marks)
        for sheet in sheets:
            if sheet.subject is None:
                marks = list(sheet.records) + [StudentMark(student_id=student_id, status=status.value)]
                return self.update_records(attendance_id=sheet.attendance_id, records=marks)
        return self.create(
            class_id=class_id,
            date=date,
            subject=None,
            teacher_id=None,
            records=[StudentMark(student_id=student_id, status=status.value)],
        )

    def records_for_student(self, student_id):
        return list(self.student_records.get(student_id, []))


@pytest.fixture
def classes():
    return InMemoryClasses({"c1"})


@pytest.fixture
def attendance_repo():
    return InMemoryAttendance()


@pytest.fixture
def service(attendance_repo, classes):
    return AttendanceService(attendance_repo, classes)


@pytest.fixture
def sample_student(attendance_repo):
    attendance_repo.student_records["s1"] = [
        AttendanceRecord(date=datetime(2025, 3, 3), status="present"),
        AttendanceRecord(date=datetime(2025, 3, 4), status="present", remark="Early"),
        AttendanceRecord(date=datetime(2025, 3, 5), status="absent", remark="Sick"),
        AttendanceRecord(date=datetime(2024, 11, 6), status="late"),
    ]
    return "s1"
