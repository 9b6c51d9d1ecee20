from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional, Sequence

from pymongo import ASCENDING, DESCENDING, ReturnDocument
from pymongo.errors import DuplicateKeyError

from ..core.constants import ATTENDANCE_COLLECTION
from ..core.enums import AttendanceStatus
from ..core.exceptions import DuplicateRecordError
from ..database.connection import DatabaseConnection
from ..database.mongo_base import id_str, to_object_id
from .model import AttendanceRecord, ClassAttendance, StudentMark, status_value
from .repository import AttendanceRepository


def _mark_to_doc(mark: StudentMark) -> Dict[str, Any]:
    return {
        "student": to_object_id(mark.student_id, "studentId"),
        "status": status_value(mark.status),
        "remark": mark.remark,
    }


def _doc_to_sheet(doc: Dict[str, Any]) -> ClassAttendance:
    return ClassAttendance(
        attendance_id=id_str(doc["_id"]),
        class_id=id_str(doc["class"]),
        date=doc["date"],
        subject=doc.get("subject"),
        teacher_id=id_str(doc.get("teacher")),
        records=tuple(
            StudentMark(
                student_id=id_str(r["student"]),
                status=r.get("status"),
                remark=r.get("remark"),
            )
            for r in doc.get("records", [])
        ),
    )


class MongoAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _col(self):
        return self._conn_factory.database()[ATTENDANCE_COLLECTION]

    def ensure_indexes(self) -> None:
        self._col().create_index(
            [("class", ASCENDING), ("date", ASCENDING), ("subject", ASCENDING)],
            unique=True,
            name="class_date_subject_unique",
        )
        self._col().create_index([("records.student", ASCENDING)], name="records_student")

    def create(
        self,
        *,
        class_id: str,
        date: datetime,
        subject: Optional[str],
        teacher_id: Optional[str],
        records: Sequence[StudentMark],
    ) -> ClassAttendance:
        doc = {
            "class": to_object_id(class_id, "classId"),
            "date": date,
            "subject": subject,
            "teacher": to_object_id(teacher_id, "teacherId") if teacher_id else None,
            "records": [_mark_to_doc(m) for m in records],
        }
        try:
            result = self._col().insert_one(doc)
        except DuplicateKeyError:
            raise DuplicateRecordError(
                "Attendance record already exists for this class, date and subject"
            ) from None
        doc["_id"] = result.inserted_id
        return _doc_to_sheet(doc)

    def find_by_class_and_range(self, *, class_id: str, start: datetime, end: datetime) -> Sequence[ClassAttendance]:
        cursor = self._col().find(
            {"class": to_object_id(class_id, "classId"), "date": {"$gte": start, "$lte": end}}
        ).sort("date", ASCENDING)
        return [_doc_to_sheet(d) for d in cursor]

    def find_by_class_and_date(self, *, class_id: str, date: datetime) -> Sequence[ClassAttendance]:
        cursor = self._col().find({"class": to_object_id(class_id, "classId"), "date": date})
        return [_doc_to_sheet(d) for d in cursor]

    def update_records(self, *, attendance_id: str, records: Sequence[StudentMark]) -> Optional[ClassAttendance]:
        doc = self._col().find_one_and_update(
            {"_id": to_object_id(attendance_id, "attendanceId")},
            {"$set": {"records": [_mark_to_doc(m) for m in records]}},
            return_document=ReturnDocument.AFTER,
        )
        return _doc_to_sheet(doc) if doc else None

    def upsert_mark(
        self,
        *,
        class_id: str,
        student_id: str,
        date: datetime,
        status: AttendanceStatus,
    ) -> ClassAttendance:
        """Set one student's status for a class and date.

        An existing mark on any sheet of that day is updated in place; otherwise
        the mark goes onto the day's sheet without a subject, created if missing.
        """
        class_oid = to_object_id(class_id, "classId")
        student_oid = to_object_id(student_id, "studentId")
        try:
            return self._mark_once(class_oid, student_oid, date, status)
        except DuplicateKeyError:
            pass
        # A concurrent mark inserted the unsubjected sheet first; it now exists.
        try:
            return self._mark_once(class_oid, student_oid, date, status)
        except DuplicateKeyError:
            raise DuplicateRecordError("Attendance record already exists for this class and date") from None

    def _mark_once(self, class_oid, student_oid, date: datetime, status: AttendanceStatus) -> ClassAttendance:
        # Existing mark for the student: update in place.
        doc = self._col().find_one_and_update(
            {"class": class_oid, "date": date, "records.student": student_oid},
            {"$set": {"records.$.status": status.value}},
            return_document=ReturnDocument.AFTER,
        )
        if doc:
            return _doc_to_sheet(doc)

        doc = self._col().find_one_and_update(
            {"class": class_oid, "date": date, "subject": None},
            {
                "$push": {"records": {"student": student_oid, "status": status.value, "remark": None}},
                "$setOnInsert": {"teacher": None},
            },
            upsert=True,
            return_document=ReturnDocument.AFTER,
        )
        return _doc_to_sheet(doc)

    def records_for_student(self, student_id: str) -> Sequence[AttendanceRecord]:
        student_oid = to_object_id(student_id, "studentId")
        cursor = self._col().find({"records.student": student_oid}).sort("date", DESCENDING)

        out = []
        for doc in cursor:
            for r in doc.get("records", []):
                if r.get("student") != student_oid:
                    continue
                # Stored status is passed through untouched, even if unknown.
                out.append(
                    AttendanceRecord(
                        date=doc["date"],
                        status=r.get("status"),
                        remark=r.get("remark"),
                        subject=doc.get("subject"),
                    )
                )
        return out
