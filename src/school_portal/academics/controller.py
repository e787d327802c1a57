from __future__ import annotations

from flask import Flask

from ..common.http import api_errors, current_actor, json_body, ok, query_int
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.academics_service

    @app.route("/api/branches", methods=["GET"], endpoint="list_branches")
    @api_errors
    def list_branches():
        return ok(service.list_branches())

    @app.route("/api/branches", methods=["POST"], endpoint="create_branch")
    @api_errors
    def create_branch():
        data = json_body()
        branch = service.create_branch(
            actor=current_actor(),
            name=data.get("name"),
            address=data.get("address"),
            phone=data.get("phone"),
        )
        return ok(branch, 201)

    @app.route("/api/programs", methods=["GET"], endpoint="list_programs")
    @api_errors
    def list_programs():
        return ok(service.list_programs(branch_id=query_int("branch_id")))

    @app.route("/api/programs", methods=["POST"], endpoint="create_program")
    @api_errors
    def create_program():
        data = json_body()
        program = service.create_program(
            actor=current_actor(),
            branch_id=data.get("branch_id"),
            name=data.get("name"),
            duration_sessions=data.get("duration_sessions"),
            price=data.get("price"),
            description=data.get("description"),
        )
        return ok(program, 201)

    @app.route("/api/classes", methods=["GET"], endpoint="list_classes")
    @api_errors
    def list_classes():
        return ok(service.list_classes(branch_id=query_int("branch_id"), program_id=query_int("program_id")))

    @app.route("/api/classes/<int:class_id>", methods=["GET"], endpoint="get_class")
    @api_errors
    def get_class(class_id: int):
        return ok(service.get_class(class_id))

    @app.route("/api/classes", methods=["POST"], endpoint="create_class")
    @api_errors
    def create_class():
        data = json_body()
        cls = service.create_class(
            actor=current_actor(),
            branch_id=data.get("branch_id"),
            program_id=data.get("program_id"),
            class_name=data.get("class_name"),
            days=data.get("days"),
            start_time=data.get("start_time"),
            end_time=data.get("end_time"),
            max_students=data.get("max_students"),
            total_sessions=data.get("total_sessions"),
        )
        return ok(cls, 201)
