from __future__ import annotations

import dataclasses
from functools import wraps
from typing import Any, Optional

from flask import jsonify, request

from ..app_logger import get_logger
from ..core.enums import OutcomeKind
from ..core.exceptions import ValidationError
from ..core.outcome import Outcome

logger = get_logger(__name__)


def to_json(value: Any) -> Any:
    """Dataclasses (nested) to plain dicts; str enums serialize as their value."""
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return dataclasses.asdict(value)
    if isinstance(value, list):
        return [to_json(v) for v in value]
    return value


def json_body() -> dict[str, Any]:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Corpo JSON inválido")
    return data


def error_response(message: str, status: int):
    return jsonify({"success": False, "message": message}), status


def outcome_status(outcome: Outcome) -> int:
    if outcome.needs_setup:
        return 503
    if outcome.refused:
        return 409
    if outcome.kind is OutcomeKind.OK:
        return 200
    if outcome.kind is OutcomeKind.QUEUED_OFFLINE:
        return 202
    return 502


def outcome_response(outcome: Outcome, data: Optional[Any] = None):
    body = outcome.to_dict()
    if data is not None:
        body["data"] = to_json(data)
    return jsonify(body), outcome_status(outcome)


def json_errors(view):
    """ValidationError -> 400, anything unexpected -> logged 500."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        try:
            return view(*args, **kwargs)
        except ValidationError as e:
            return error_response(str(e), 400)
        except Exception:
            logger.exception("Unhandled error in %s", request.path)
            return error_response("Erro interno do sistema", 500)

    return wrapper


def int_arg(name: str, default: Optional[int] = None) -> int:
    raw = request.args.get(name)
    if raw is None or raw == "":
        if default is None:
            raise ValidationError(f"Parâmetro obrigatório: {name}")
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValidationError(f"Parâmetro inválido: {name}")
