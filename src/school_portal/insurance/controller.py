from __future__ import annotations

from flask import Flask, request, send_file

from ..common.http import api_errors, current_actor, json_body, ok, query_int
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.insurance_service

    @app.route("/api/insurance", methods=["POST"], endpoint="create_insurance_policy")
    @api_errors
    def create_insurance_policy():
        data = json_body()
        policy = service.create(
            actor=current_actor(),
            student_id=data.get("student_id"),
            student_name=data.get("student_name"),
            policy_number=data.get("policy_number"),
            provider=data.get("provider"),
            type=data.get("type"),
            start_date=data.get("start_date"),
            end_date=data.get("end_date"),
            status=data.get("status"),
            coverage_amount=data.get("coverage_amount"),
            premium_amount=data.get("premium_amount"),
            qr_code_url=data.get("qr_code_url"),
        )
        return ok(policy, 201)

    @app.route("/api/insurance", methods=["GET"], endpoint="list_insurance_policies")
    @api_errors
    def list_insurance_policies():
        return ok(service.list(student_id=query_int("student_id"), status=request.args.get("status")))

    @app.route("/api/insurance/stats", methods=["GET"], endpoint="insurance_stats")
    @api_errors
    def insurance_stats():
        return ok(service.stats())

    @app.route("/api/insurance/verify/<policy_number>", methods=["GET"], endpoint="verify_insurance_policy")
    @api_errors
    def verify_insurance_policy(policy_number: str):
        return ok(service.verify(policy_number))

    @app.route("/api/insurance/<int:policy_id>/qr.png", methods=["GET"], endpoint="insurance_qr")
    @api_errors
    def insurance_qr(policy_id: int):
        return send_file(service.qr_png(policy_id), mimetype="image/png")
