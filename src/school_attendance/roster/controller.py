from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.responses import json_body, json_errors, outcome_response, to_json
from ..container import Container
from ..core.constants import ALL
from ..core.enums import EnrollmentStatus
from ..core.exceptions import ValidationError
from .model import Student


def _status_arg(raw) -> EnrollmentStatus:
    if raw is None or raw == "":
        return EnrollmentStatus.ACTIVE
    try:
        return EnrollmentStatus(raw)
    except ValueError:
        raise ValidationError("Situação inválida")


def register(app: Flask, container: Container) -> None:
    state = container.state

    @app.route("/api/classes", methods=["GET"], endpoint="classes_list")
    @json_errors
    def list_classes():
        return jsonify({
            "success": True,
            "classes": to_json(state.classes),
            "selected_class_id": state.selected_class_id,
        })

    @app.route("/api/classes", methods=["POST"], endpoint="classes_create")
    @json_errors
    def create_class():
        data = json_body()
        created, outcome = container.sync.create_class(str(data.get("name") or ""))
        return outcome_response(outcome, created)

    @app.route("/api/classes/<class_id>", methods=["PUT"], endpoint="classes_rename")
    @json_errors
    def rename_class(class_id: str):
        data = json_body()
        return outcome_response(container.sync.rename_class(class_id, str(data.get("name") or "")))

    @app.route("/api/classes/<class_id>", methods=["DELETE"], endpoint="classes_delete")
    @json_errors
    def delete_class(class_id: str):
        if not state.class_by_id(class_id):
            raise ValidationError("Turma não encontrada")
        return outcome_response(container.sync.delete_class(class_id))

    @app.route("/api/classes/<class_id>/select", methods=["POST"], endpoint="classes_select")
    @json_errors
    def select_class(class_id: str):
        container.roster_service.select_class(class_id)
        return jsonify({"success": True, "selected_class_id": state.selected_class_id})

    @app.route("/api/classes/<class_id>/students", methods=["GET"], endpoint="classes_students")
    @json_errors
    def class_students(class_id: str):
        students = container.roster_service.class_students(class_id, status_filter=request.args.get("status", ALL))
        return jsonify({"success": True, "students": to_json(students)})

    @app.route("/api/students", methods=["GET"], endpoint="students_search")
    @json_errors
    def search_students():
        students = container.roster_service.search(
            term=request.args.get("q", ""),
            class_id=request.args.get("class_id", ALL),
            status=request.args.get("status", ALL),
        )
        return jsonify({"success": True, "students": to_json(students)})

    @app.route("/api/students", methods=["POST"], endpoint="students_create")
    @json_errors
    def create_student():
        data = json_body()
        student, outcome = container.sync.add_student(
            name=str(data.get("name") or ""),
            class_id=data.get("class_id") or state.selected_class_id or None,
            status=_status_arg(data.get("status")),
        )
        return outcome_response(outcome, student)

    @app.route("/api/students/batch", methods=["POST"], endpoint="students_batch")
    @json_errors
    def create_students():
        data = json_body()
        names = data.get("names")
        if isinstance(names, str):
            names = names.splitlines()
        if not isinstance(names, list):
            raise ValidationError("Lista de nomes inválida")
        class_id = data.get("class_id") or state.selected_class_id
        if not state.class_by_id(class_id):
            raise ValidationError("Selecione uma turma")
        created, outcome = container.sync.add_students(
            [str(n) for n in names], class_id=class_id, status=_status_arg(data.get("status"))
        )
        return outcome_response(outcome, created)

    @app.route("/api/students/<student_id>", methods=["PUT"], endpoint="students_update")
    @json_errors
    def update_student(student_id: str):
        current = state.student_by_id(student_id)
        if not current:
            raise ValidationError("Aluno não encontrado")
        data = json_body()
        updated = Student(
            student_id=student_id,
            name=str(data.get("name", current.name) or ""),
            status=_status_arg(data.get("status", current.status.value)),
            class_id=data.get("class_id", current.class_id) or None,
        )
        return outcome_response(container.sync.save_student(updated), updated)

    @app.route("/api/students/<student_id>/status", methods=["PUT"], endpoint="students_status")
    @json_errors
    def update_status(student_id: str):
        data = json_body()
        return outcome_response(container.sync.update_student_status(student_id, _status_arg(data.get("status"))))

    @app.route("/api/students/<student_id>", methods=["DELETE"], endpoint="students_delete")
    @json_errors
    def delete_student(student_id: str):
        if not state.student_by_id(student_id):
            raise ValidationError("Aluno não encontrado")
        return outcome_response(container.sync.delete_student(student_id))
