from __future__ import annotations

from datetime import date

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date
from ..common.responses import int_arg, json_body, json_errors, outcome_response, to_json
from ..container import Container
from ..core.constants import ALL
from ..core.exceptions import ValidationError


def _iso_date(raw) -> str:
    try:
        return parse_iso_date(str(raw or "")).isoformat()
    except ValueError:
        raise ValidationError("Data inválida (AAAA-MM-DD)")


def _slot_texts(raw, field_name: str) -> dict[int, str]:
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ValidationError(f"{field_name} inválido")
    try:
        return {int(k): str(v or "") for k, v in raw.items()}
    except ValueError:
        raise ValidationError(f"{field_name} inválido")


def register(app: Flask, container: Container) -> None:
    state = container.state

    @app.route("/api/lessons/day", methods=["GET"], endpoint="lessons_day_get")
    @json_errors
    def get_day():
        class_id = request.args.get("class_id") or state.selected_class_id
        iso_date = _iso_date(request.args.get("date"))
        day = state.lessons.resolve(class_id, iso_date)
        return jsonify({
            "success": True,
            "class_id": class_id,
            "date": iso_date,
            "configured": state.lessons.lookup(class_id, iso_date) is not None,
            "day": to_json(day),
        })

    @app.route("/api/lessons/day", methods=["PUT"], endpoint="lessons_day_put")
    @json_errors
    def save_day():
        data = json_body()
        class_id = data.get("class_id") or state.selected_class_id
        if not state.class_by_id(class_id):
            raise ValidationError("Turma não encontrada")
        active = data.get("active_indices")
        if not isinstance(active, list):
            raise ValidationError("Aulas ativas inválidas")

        outcome = container.sync.save_day_config(
            class_id,
            _iso_date(data.get("date")),
            active,
            _slot_texts(data.get("subjects"), "Matérias"),
            _slot_texts(data.get("topics"), "Conteúdos"),
        )
        return outcome_response(outcome)

    @app.route("/api/lessons/diary", methods=["GET"], endpoint="lessons_diary")
    @json_errors
    def diary():
        today = date.today()
        result = container.diary_service.month_diary(
            class_id=request.args.get("class_id") or state.selected_class_id,
            year=int_arg("year", today.year),
            month=int_arg("month", today.month),
            subject=request.args.get("subject", ALL),
            search=request.args.get("q", ""),
        )
        return jsonify({"success": True, "diary": to_json(result)})
