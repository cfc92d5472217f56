"""
Slow-query logging for SQLAlchemy engines.

Every statement is timed; one that runs longer than
``ALERT_QUERY_MS_THRESHOLD`` milliseconds is logged as a warning on the
``sql.alerts`` logger with its (masked) parameters and, inside a Flask
request, the request id and route.
"""

import logging
import os
import time
from typing import Any, Dict, Optional

from flask import g, has_request_context
from sqlalchemy import event
from sqlalchemy.engine import Engine

logger = logging.getLogger("sql.alerts")

DEFAULT_THRESHOLD_MS = 100
STATEMENT_LIMIT = 500
PARAM_LIMIT = 200

# Parameter names whose values never reach the logs
_SENSITIVE_KEYS = ("password", "token", "secret", "email", "phone")


def query_threshold_ms() -> int:
    raw = os.getenv("ALERT_QUERY_MS_THRESHOLD", str(DEFAULT_THRESHOLD_MS))
    try:
        return int(raw)
    except ValueError:
        return DEFAULT_THRESHOLD_MS


def slow_query_alerts_enabled() -> bool:
    return os.getenv("ALERT_SLOW_QUERY_ENABLED", "true").strip().lower() == "true"


def _truncate(value: Any, limit: int) -> str:
    text = str(value)
    return text if len(text) <= limit else text[:limit] + "..."


def _mask_params(params: Any) -> Any:
    """Copy of ``params`` with sensitive values hidden and long values cut."""
    if isinstance(params, dict):
        return {
            key: (
                "***"
                if any(marker in str(key).lower() for marker in _SENSITIVE_KEYS)
                else _mask_params(value)
            )
            for key, value in params.items()
        }
    if isinstance(params, (list, tuple)):
        return [_mask_params(item) for item in params]
    if isinstance(params, bytes):
        return "<binary>"
    return _truncate(params, PARAM_LIMIT)


def _request_context(db_info: Dict[str, Any]) -> Dict[str, Any]:
    context = {key: value for key, value in db_info.items() if value}
    if has_request_context():
        for attr in ("request_id", "route"):
            value = getattr(g, attr, None)
            if value:
                context[attr] = value
    return context


def _log_slow_query(
    duration_ms: float, statement: str, parameters: Any, db_info: Dict[str, Any]
) -> None:
    logger.warning(
        "Slow query detected",
        extra={
            "context": {
                "alert_type": "slow_query",
                "duration_ms": round(duration_ms, 2),
                "threshold_ms": query_threshold_ms(),
                "statement": _truncate(statement or "", STATEMENT_LIMIT),
                "params": _mask_params(parameters),
                "context": _request_context(db_info),
            }
        },
    )


def register_query_timing(
    engine: Engine, db_info: Optional[Dict[str, Any]] = None
) -> None:
    """Attach the timing listeners to ``engine`` (once per engine)."""
    if getattr(engine, "_clinic_query_timing", False):
        return

    info = dict(db_info or {})
    if not info:
        info = {"db_host": engine.url.host, "db_name": engine.url.database}

    @event.listens_for(engine, "before_cursor_execute")
    def _start_timer(conn, cursor, statement, parameters, context, executemany):
        context._clinic_query_started = time.perf_counter()

    @event.listens_for(engine, "after_cursor_execute")
    def _check_duration(conn, cursor, statement, parameters, context, executemany):
        started = getattr(context, "_clinic_query_started", None)
        if started is None or not slow_query_alerts_enabled():
            return
        duration_ms = (time.perf_counter() - started) * 1000.0
        if duration_ms >= query_threshold_ms():
            _log_slow_query(duration_ms, statement, parameters, info)

    engine._clinic_query_timing = True
