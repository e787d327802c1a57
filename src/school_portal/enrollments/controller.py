from __future__ import annotations

from flask import Flask

from ..common.http import api_errors, current_actor, json_body, ok, query_int
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.enrollment_service

    @app.route("/api/enrollments", methods=["POST"], endpoint="create_enrollment")
    @api_errors
    def create_enrollment():
        data = json_body()
        enrollment = service.enroll(
            actor=current_actor(),
            student_id=data.get("student_id"),
            class_id=data.get("class_id"),
            term=data.get("term"),
            start_session=data.get("start_session"),
            total_amount=data.get("total_amount"),
            discount=data.get("discount"),
            paid_amount=data.get("paid_amount"),
            payment_type=data.get("payment_type"),
            payment_expired_date=data.get("payment_expired_date"),
        )
        return ok(enrollment, 201)

    @app.route("/api/enrollments", methods=["GET"], endpoint="list_enrollments")
    @api_errors
    def list_enrollments():
        return ok(service.list(class_id=query_int("class_id"), student_id=query_int("student_id")))

    @app.route("/api/enrollments/<int:enrollment_id>", methods=["GET"], endpoint="get_enrollment")
    @api_errors
    def get_enrollment(enrollment_id: int):
        return ok(service.get(enrollment_id))

    @app.route("/api/enrollments/<int:enrollment_id>", methods=["DELETE"], endpoint="delete_enrollment")
    @api_errors
    def delete_enrollment(enrollment_id: int):
        service.delete(actor=current_actor(), enrollment_id=enrollment_id)
        return ok({"enrollment_id": enrollment_id})

    @app.route("/api/enrollments/<int:enrollment_id>/payments", methods=["POST"], endpoint="record_payment")
    @api_errors
    def record_payment(enrollment_id: int):
        data = json_body()
        return ok(service.record_payment(actor=current_actor(), enrollment_id=enrollment_id, amount=data.get("amount")))

    @app.route("/api/enrollments/<int:enrollment_id>/financials", methods=["PUT"], endpoint="update_financials")
    @api_errors
    def update_financials(enrollment_id: int):
        data = json_body()
        enrollment = service.update_financials(
            actor=current_actor(),
            enrollment_id=enrollment_id,
            total_amount=data.get("total_amount"),
            discount=data.get("discount"),
        )
        return ok(enrollment)

    @app.route("/api/enrollments/<int:enrollment_id>/status", methods=["PUT"], endpoint="set_enrollment_status")
    @api_errors
    def set_enrollment_status(enrollment_id: int):
        data = json_body()
        enrollment = service.set_status(
            actor=current_actor(),
            enrollment_id=enrollment_id,
            status=data.get("enrollment_status") or data.get("status"),
        )
        return ok(enrollment)
