from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.responses import int_arg, json_errors, to_json
from ..container import Container
from ..core.constants import ALL, ANNUAL, DEFAULT_TOP_STUDENTS
from .model import ReportFilters


def register(app: Flask, container: Container) -> None:
    reports = container.report_service

    @app.route("/api/reports", methods=["GET"], endpoint="reports_build")
    @json_errors
    def report():
        filters = ReportFilters(
            class_id=request.args.get("class_id", ALL),
            enrollment=request.args.get("enrollment", ALL),
            level=request.args.get("level", ALL),
            bimester=request.args.get("bimester", ANNUAL),
        )
        data = reports.build_report(filters, top_n=int_arg("top", DEFAULT_TOP_STUDENTS))
        return jsonify({"success": True, "report": to_json(data)})

    @app.route("/api/dashboard", methods=["GET"], endpoint="reports_dashboard")
    @json_errors
    def dashboard():
        data = reports.build_dashboard(class_id=request.args.get("class_id", ALL))
        return jsonify({"success": True, "dashboard": to_json(data)})

    @app.route("/api/students/<student_id>/detail", methods=["GET"], endpoint="reports_student_detail")
    @json_errors
    def student_detail(student_id: str):
        return jsonify({"success": True, "detail": to_json(reports.build_student_detail(student_id))})
