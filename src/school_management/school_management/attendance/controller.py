from __future__ import annotations

from datetime import date
from functools import wraps

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date
from ..core.enums import Role
from ..core.exceptions import (
    AuthorizationError,
    DuplicateRecordError,
    NotFoundError,
    ValidationError,
)
from ..container import Container
from .model import ClassAttendance, status_value
from .period import MonthYearSelection

ROLE_HEADER = "X-User-Role"
WRITE_ROLES = {Role.TEACHER.value, Role.ADMIN.value}


def _sheet_to_json(sheet: ClassAttendance) -> dict:
    return {
        "id": sheet.attendance_id,
        "class": sheet.class_id,
        "date": sheet.date.date().isoformat(),
        "subject": sheet.subject,
        "teacher": sheet.teacher_id,
        "records": [
            {"student": m.student_id, "status": status_value(m.status), "remark": m.remark}
            for m in sheet.records
        ],
    }


def _parse_date(value, field_name: str) -> date:
    if not value:
        raise ValidationError(f"{field_name} is required")
    try:
        return parse_iso_date(str(value)[:10])
    except ValueError:
        raise ValidationError(f"{field_name} must be YYYY-MM-DD") from None


def _fail(message: str, status: int):
    return jsonify({"success": False, "message": message}), status


def register(app: Flask, container: Container) -> None:
    svc = container.attendance_service

    def writer_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if request.headers.get(ROLE_HEADER, "").lower() not in WRITE_ROLES:
                raise AuthorizationError("Not authorized to modify attendance")
            return view(*args, **kwargs)

        return wrapper

    @app.errorhandler(ValidationError)
    def _validation_error(e):
        return _fail(str(e), 400)

    @app.errorhandler(DuplicateRecordError)
    def _duplicate_error(e):
        return _fail(str(e), 400)

    @app.errorhandler(NotFoundError)
    def _not_found(e):
        return _fail(str(e), 404)

    @app.errorhandler(AuthorizationError)
    def _forbidden(e):
        return _fail(str(e), 403)

    @app.route("/api/attendance", methods=["POST"], endpoint="create_attendance")
    @writer_required
    def create_attendance():
        data = request.get_json(silent=True) or {}
        sheet = svc.create_attendance(
            class_id=data.get("classId"),
            on=_parse_date(data.get("date"), "date"),
            subject=data.get("subject"),
            teacher_id=request.headers.get("X-User-Id") or data.get("teacherId"),
            records=data.get("records"),
        )
        return jsonify({"success": True, "data": _sheet_to_json(sheet)}), 201

    @app.route("/api/attendance", methods=["GET"], endpoint="get_attendance")
    def get_attendance():
        sheets = svc.get_attendance(
            class_id=request.args.get("classId"),
            start=_parse_date(request.args.get("startDate"), "startDate"),
            end=_parse_date(request.args.get("endDate"), "endDate"),
        )
        return jsonify({"success": True, "data": [_sheet_to_json(s) for s in sheets]})

    @app.route("/api/attendance/<attendance_id>", methods=["PUT"], endpoint="update_attendance")
    @writer_required
    def update_attendance(attendance_id: str):
        data = request.get_json(silent=True) or {}
        sheet = svc.update_attendance(attendance_id, data.get("records"))
        return jsonify({"success": True, "data": _sheet_to_json(sheet)})

    @app.route("/api/attendance/<class_id>/<day>", methods=["GET"], endpoint="class_attendance_on")
    def class_attendance_on(class_id: str, day: str):
        sheets = svc.get_class_attendance_on(class_id=class_id, on=_parse_date(day, "date"))
        return jsonify({"success": True, "data": [_sheet_to_json(s) for s in sheets]})

    @app.route("/api/attendance/mark", methods=["POST"], endpoint="mark_attendance")
    @writer_required
    def mark_attendance():
        data = request.get_json(silent=True) or {}
        sheet = svc.mark_attendance(
            class_id=data.get("classId"),
            student_id=data.get("studentId"),
            on=_parse_date(data.get("date"), "date"),
            status=data.get("status"),
        )
        return jsonify({"success": True, "data": _sheet_to_json(sheet)})

    @app.route("/api/attendance/student/<student_id>", methods=["GET"], endpoint="student_attendance")
    def student_attendance(student_id: str):
        selection = MonthYearSelection(
            month=request.args.get("month"),
            year=request.args.get("year"),
        )
        view = svc.get_student_view(student_id, selection)
        return jsonify({"success": True, "data": view.as_dict()})
