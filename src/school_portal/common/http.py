from __future__ import annotations

import dataclasses
import logging
from datetime import date, datetime, time
from decimal import Decimal
from enum import Enum
from functools import wraps
from typing import Any, Optional

from flask import jsonify, request

from ..core.exceptions import DomainError, ValidationError

logger = logging.getLogger(__name__)

ACTOR_HEADER = "X-Actor"


def to_json(value: Any) -> Any:
    """Convert domain objects (dataclasses, enums, dates, Decimals) into JSON-safe values."""
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {f.name: to_json(getattr(value, f.name)) for f in dataclasses.fields(value)}
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, Decimal):
        return float(value)
    if isinstance(value, datetime):
        return value.isoformat(timespec="seconds")
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, time):
        return value.strftime("%H:%M")
    if isinstance(value, dict):
        return {k: to_json(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_json(v) for v in value]
    return value


def ok(data: Any, status: int = 200):
    return jsonify({"success": True, "data": to_json(data)}), status


def json_body() -> dict:
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def current_actor() -> str:
    """Identity of the caller, supplied by the upstream auth provider."""
    actor = (request.headers.get(ACTOR_HEADER) or "").strip()
    if not actor:
        raise ValidationError(f"Missing {ACTOR_HEADER} header")
    return actor


def query_int(name: str) -> Optional[int]:
    raw = request.args.get(name)
    if raw is None or raw == "":
        return None
    try:
        return int(raw)
    except ValueError:
        raise ValidationError(f"{name} must be an integer")


def api_errors(view):
    """Render DomainError as the JSON error envelope; anything else is a logged 500."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        try:
            return view(*args, **kwargs)
        except DomainError as e:
            logger.warning("%s %s rejected: %s (%s)", request.method, request.path, e, e.kind)
            body = {"success": False, "kind": e.kind, "message": str(e)}
            rule = getattr(e, "rule", None)
            if rule:
                body["rule"] = rule
            return jsonify(body), e.status_code
        except Exception:
            logger.exception("Unhandled error on %s %s", request.method, request.path)
            return jsonify({"success": False, "kind": "InternalError", "message": "Internal server error"}), 500

    return wrapper
