from __future__ import annotations

from flask import Flask, jsonify

from ..common.responses import json_body, json_errors, outcome_response
from ..container import Container


def register(app: Flask, container: Container) -> None:
    state = container.state

    @app.route("/api/status", methods=["GET"], endpoint="sync_status")
    @json_errors
    def status():
        return jsonify({
            "success": True,
            "online": state.online,
            "sync_state": state.sync_state.value,
            "saving": container.sync.is_saving,
            "pending": len(state.pending),
            "configured": container.remote.is_configured(),
            "selected_class_id": state.selected_class_id,
        })

    @app.route("/api/sync/load", methods=["POST"], endpoint="sync_load")
    @json_errors
    def load():
        return outcome_response(container.sync.load())

    @app.route("/api/sync/flush", methods=["POST"], endpoint="sync_flush")
    @json_errors
    def flush():
        outcome = container.sync.flush_attendance()
        return outcome_response(outcome, {"pending": len(state.pending)})

    @app.route("/api/sync/pending", methods=["GET"], endpoint="sync_pending")
    @json_errors
    def pending():
        items = [c.to_dict() for c in state.pending]
        return jsonify({"success": True, "count": len(items), "items": items})

    @app.route("/api/network", methods=["POST"], endpoint="sync_network")
    @json_errors
    def network():
        data = json_body()
        container.sync.set_online(bool(data.get("online")))
        return jsonify({"success": True, "online": state.online})

    @app.route("/api/settings/api-url", methods=["GET"], endpoint="settings_api_url_get")
    @json_errors
    def get_api_url():
        return jsonify({"success": True, "url": container.endpoint() or "", "fixed": container.endpoint.is_fixed})

    @app.route("/api/settings/api-url", methods=["PUT"], endpoint="settings_api_url_put")
    @json_errors
    def set_api_url():
        data = json_body()
        url = container.endpoint.set(str(data.get("url") or ""))
        return jsonify({"success": True, "url": url})
