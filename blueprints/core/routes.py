from __future__ import annotations
import json, logging
from datetime import datetime, timezone

from flask import g, jsonify, request
from werkzeug.exceptions import HTTPException
from werkzeug.wrappers.response import Response

from . import bp

LOG_EXTRAS = ("event", "path", "method", "status", "duration_ms", "entity", "entity_id")

def _utcnow() -> datetime:
    return datetime.now(timezone.utc)

class JSONFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "ts": _utcnow().isoformat(timespec="milliseconds").replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        for key in LOG_EXTRAS:
            if hasattr(record, key):
                payload[key] = getattr(record, key)
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)

def setup_structured_logging(app) -> None:
    root = logging.getLogger()
    has_json = any(
        isinstance(h, logging.StreamHandler)
        and isinstance(getattr(h, "formatter", None), JSONFormatter)
        for h in root.handlers
    )
    if not has_json:
        handler = logging.StreamHandler()
        handler.setFormatter(JSONFormatter())
        root.addHandler(handler)
    root.setLevel(logging.DEBUG if app.debug else logging.INFO)

@bp.before_app_request
def _start_timer():
    g._req_start = _utcnow()

@bp.after_app_request
def _log_request(response: Response):
    start = getattr(g, "_req_start", None)
    duration_ms = int((_utcnow() - start).total_seconds() * 1000) if start else None
    extra = {
        "event": "http_request",
        "path": request.path,
        "method": request.method,
        "status": response.status_code,
        "duration_ms": duration_ms,
    }
    logging.getLogger("catalog.http").info("request handled", extra=extra)
    return response

@bp.app_errorhandler(HTTPException)
def _http_error_as_json(ex: HTTPException):
    # неизвестные URL и методы тоже отвечают JSON
    return jsonify({"error": ex.description or ex.name}), ex.code

@bp.record_once
def _on_register(state):
    if state.app.config.get("JSON_LOG", True):
        setup_structured_logging(state.app)

@bp.get("/health")
def health():
    return jsonify({
        "status": "ok",
        "ts": _utcnow().isoformat(timespec="seconds").replace("+00:00", "Z"),
    })
