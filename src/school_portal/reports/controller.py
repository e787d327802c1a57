from __future__ import annotations

from flask import Flask, request

from ..common.http import api_errors, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/classes/<int:class_id>/attendance-report", methods=["GET"], endpoint="class_attendance_report")
    @api_errors
    def class_attendance_report(class_id: int):
        report = container.report_service.build_class_report(
            class_id=class_id,
            denominator=request.args.get("denominator"),
        )
        return ok(report)
