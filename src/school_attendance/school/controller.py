from __future__ import annotations

from flask import Flask, jsonify

from ..common.responses import json_body, json_errors, outcome_response, to_json
from ..container import Container
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    state = container.state
    calendar = container.calendar_service

    @app.route("/api/school/subjects", methods=["GET"], endpoint="school_subjects")
    @json_errors
    def subjects():
        return jsonify({"success": True, "subjects": list(state.registered_subjects)})

    @app.route("/api/school/subjects", methods=["POST"], endpoint="school_subjects_add")
    @json_errors
    def add_subject():
        data = json_body()
        calendar.add_subject(str(data.get("name") or ""))
        return outcome_response(container.sync.save_registered_subjects(), list(state.registered_subjects))

    @app.route("/api/school/subjects/<name>", methods=["DELETE"], endpoint="school_subjects_remove")
    @json_errors
    def remove_subject(name: str):
        calendar.remove_subject(name)
        return outcome_response(container.sync.save_registered_subjects(), list(state.registered_subjects))

    @app.route("/api/school/holidays", methods=["GET"], endpoint="school_holidays")
    @json_errors
    def holidays():
        return jsonify({"success": True, "holidays": to_json(state.holidays)})

    @app.route("/api/school/holidays", methods=["POST"], endpoint="school_holidays_save")
    @json_errors
    def save_holiday():
        data = json_body()
        calendar.save_holiday(
            date=str(data.get("date") or ""),
            name=str(data.get("name") or ""),
            original_date=data.get("original_date") or None,
        )
        return outcome_response(container.sync.save_holidays(), state.holidays)

    @app.route("/api/school/holidays/<date>", methods=["DELETE"], endpoint="school_holidays_remove")
    @json_errors
    def remove_holiday(date: str):
        calendar.remove_holiday(date)
        return outcome_response(container.sync.save_holidays(), state.holidays)

    @app.route("/api/school/bimesters", methods=["GET"], endpoint="school_bimesters")
    @json_errors
    def bimesters():
        return jsonify({"success": True, "bimesters": to_json(state.bimesters)})

    @app.route("/api/school/bimesters/<int:bimester_id>", methods=["PUT"], endpoint="school_bimesters_update")
    @json_errors
    def update_bimester(bimester_id: int):
        data = json_body()
        changed = False
        for field in ("start", "end"):
            if field in data:
                calendar.update_bimester(bimester_id, field, str(data[field] or ""))
                changed = True
        if not changed:
            raise ValidationError("Informe início ou fim")
        return outcome_response(container.sync.save_bimesters(), state.bimesters)
