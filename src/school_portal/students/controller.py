from __future__ import annotations

from flask import Flask, request

from ..common.http import api_errors, current_actor, json_body, ok, query_int
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.student_service

    @app.route("/api/students", methods=["GET"], endpoint="list_students")
    @api_errors
    def list_students():
        return ok(service.list(branch_id=query_int("branch_id"), status=request.args.get("status")))

    @app.route("/api/students/<int:student_id>", methods=["GET"], endpoint="get_student")
    @api_errors
    def get_student(student_id: int):
        return ok(service.get(student_id))

    @app.route("/api/students", methods=["POST"], endpoint="admit_student")
    @api_errors
    def admit_student():
        data = json_body()
        student = service.admit(
            actor=current_actor(),
            name=data.get("name"),
            gender=data.get("gender"),
            dob=data.get("dob"),
            nationality=data.get("nationality"),
            branch_id=data.get("branch_id"),
            phone=data.get("phone"),
            parent_phone=data.get("parent_phone"),
            father_name=data.get("father_name"),
            mother_name=data.get("mother_name"),
        )
        return ok(student, 201)

    @app.route("/api/students/<int:student_id>/status", methods=["PUT"], endpoint="set_student_status")
    @api_errors
    def set_student_status(student_id: int):
        data = json_body()
        return ok(service.set_status(actor=current_actor(), student_id=student_id, status=data.get("status")))
