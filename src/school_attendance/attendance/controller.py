from __future__ import annotations

from datetime import date

from flask import Flask, jsonify, request

from ..common.responses import int_arg, json_body, json_errors, to_json
from ..container import Container
from ..core.constants import ALL
from ..core.enums import AttendanceStatus
from ..core.exceptions import ValidationError


def _lesson_index(raw) -> int:
    try:
        return int(raw)
    except (TypeError, ValueError):
        raise ValidationError("Índice de aula inválido")


def _forced_status(raw):
    if raw is None or raw == "":
        return None
    try:
        return AttendanceStatus(raw)
    except ValueError:
        raise ValidationError("Status inválido")


def register(app: Flask, container: Container) -> None:
    state = container.state

    @app.route("/api/attendance/grid", methods=["GET"], endpoint="attendance_grid")
    @json_errors
    def grid():
        today = date.today()
        month_grid = container.attendance_service.month_grid(
            year=int_arg("year", today.year),
            month=int_arg("month", today.month),
            class_id=request.args.get("class_id") or None,
            status_filter=request.args.get("status", ALL),
        )
        days = [{**to_json(d), "locked": d.locked} for d in month_grid.days]
        return jsonify({
            "success": True,
            "class_id": month_grid.class_id,
            "days": days,
            "rows": to_json(month_grid.rows),
            "pending": len(state.pending),
        })

    @app.route("/api/attendance/toggle", methods=["POST"], endpoint="attendance_toggle")
    @json_errors
    def toggle():
        data = json_body()
        student_id = str(data.get("student_id") or "")
        if not state.student_by_id(student_id):
            raise ValidationError("Aluno não encontrado")
        lesson_index = _lesson_index(data.get("lesson_index"))
        iso_date = str(data.get("date") or "")

        new_status = container.attendance_service.toggle(
            student_id,
            iso_date,
            lesson_index,
            _forced_status(data.get("status")),
            class_id=data.get("class_id") or None,
        )
        current = state.attendance.status_at(student_id, iso_date, lesson_index)
        return jsonify({
            "success": True,
            "changed": new_status is not None,
            "status": current.value,
            "pending": container.attendance_service.is_pending(student_id, iso_date, lesson_index),
            "pending_count": len(state.pending),
        })

    @app.route("/api/attendance/bulk", methods=["POST"], endpoint="attendance_bulk")
    @json_errors
    def bulk():
        data = json_body()
        status = _forced_status(data.get("status"))
        if status is None:
            raise ValidationError("Status inválido")
        changed = container.attendance_service.bulk_apply(
            str(data.get("date") or ""),
            _lesson_index(data.get("lesson_index")),
            status,
            class_id=data.get("class_id") or None,
            status_filter=data.get("status_filter") or ALL,
        )
        return jsonify({"success": True, "changed": changed, "pending_count": len(state.pending)})
