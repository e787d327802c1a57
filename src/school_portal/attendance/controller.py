from __future__ import annotations

from flask import Flask

from ..common.http import api_errors, current_actor, json_body, ok, query_int
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.attendance_service

    @app.route("/api/attendance", methods=["POST"], endpoint="create_attendance")
    @api_errors
    def create_attendance():
        data = json_body()
        record = service.record(
            actor=current_actor(),
            enrollment_id=data.get("enrollment_id"),
            class_id=data.get("class_id"),
            student_id=data.get("student_id"),
            session_number=data.get("session_number"),
            session_date=data.get("session_date"),
            status=data.get("status"),
            reason=data.get("reason"),
        )
        return ok(record, 201)

    @app.route("/api/attendance", methods=["PUT"], endpoint="update_attendance")
    @api_errors
    def update_attendance():
        data = json_body()
        record = service.update_status(
            actor=current_actor(),
            attendance_id=data.get("attendance_id") or data.get("id"),
            status=data.get("status"),
            reason=data.get("reason"),
        )
        return ok(record)

    @app.route("/api/attendance", methods=["GET"], endpoint="list_attendance")
    @api_errors
    def list_attendance():
        return ok(service.list(class_id=query_int("class_id"), enrollment_id=query_int("enrollment_id")))

    @app.route("/api/attendance/quick-mark", methods=["POST"], endpoint="quick_mark_attendance")
    @api_errors
    def quick_mark_attendance():
        data = json_body()
        result = service.quick_mark(
            actor=current_actor(),
            enrollment_id=data.get("enrollment_id"),
            session_number=data.get("session_number"),
            session_date=data.get("session_date"),
            token=data.get("token") or "",
            note=data.get("note"),
        )
        payload = {"record": result.record, "display": result.record.display, "created": result.created}
        return ok(payload, 201 if result.created else 200)
