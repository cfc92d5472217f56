"""
Logging setup for the clinic backend.

One call to ``setup_logging`` at startup configures the root logger:
coloured console lines while developing, JSON lines in production, and two
rotating JSON files (everything, errors only) when file logging is on.
With a Flask app it also logs every request and its response time.

Modules log through the standard library and attach structured data under
the ``context`` key:

    logger = logging.getLogger(__name__)
    logger.info("Bill generated", extra={"context": {"bill_id": "BILL-4001"}})
"""

import json
import logging
import logging.handlers
import sys
import time
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from flask import Flask, g, request

SERVICE_NAME = "clinic-backend"
LOG_FILE_MAX_BYTES = 10 * 1024 * 1024
LOG_FILE_BACKUPS = 5
CONSOLE_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
CONSOLE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Third-party loggers that are too chatty below WARNING
_QUIET_LOGGERS = ("werkzeug", "sqlalchemy.engine")


class JSONFormatter(logging.Formatter):
    """One JSON object per line, with the record's ``context`` when present."""

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "service": SERVICE_NAME,
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "location": f"{record.module}.{record.funcName}:{record.lineno}",
        }
        context = getattr(record, "context", None)
        if context is not None:
            entry["context"] = context
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False, default=str)


class ConsoleFormatter(logging.Formatter):
    """Readable single-line output with the level name coloured."""

    LEVEL_COLORS = {
        logging.DEBUG: "\033[36m",
        logging.INFO: "\033[32m",
        logging.WARNING: "\033[33m",
        logging.ERROR: "\033[31m",
        logging.CRITICAL: "\033[35m",
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        # Colour a copy; file handlers share the same record
        coloured = logging.makeLogRecord(record.__dict__)
        color = self.LEVEL_COLORS.get(record.levelno, self.RESET)
        coloured.levelname = f"{color}{record.levelname:8}{self.RESET}"
        return super().format(coloured)


def _resolve_level(log_level: Union[int, str]) -> int:
    if isinstance(log_level, int):
        return log_level
    return getattr(logging, str(log_level).upper(), logging.INFO)


def _console_handler(level: int, use_json_format: bool) -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    if use_json_format:
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(ConsoleFormatter(CONSOLE_FORMAT, CONSOLE_DATE_FORMAT))
    return handler


def _rotating_handler(path: Path, level: int) -> logging.Handler:
    handler = logging.handlers.RotatingFileHandler(
        path,
        maxBytes=LOG_FILE_MAX_BYTES,
        backupCount=LOG_FILE_BACKUPS,
        encoding="utf-8",
    )
    handler.setLevel(level)
    handler.setFormatter(JSONFormatter())
    return handler


def _file_handlers(log_dir: Path, level: int) -> List[logging.Handler]:
    """app.log receives everything at ``level``; clinic_errors.log only errors."""
    log_dir.mkdir(parents=True, exist_ok=True)
    return [
        _rotating_handler(log_dir / "app.log", level),
        _rotating_handler(log_dir / "clinic_errors.log", logging.ERROR),
    ]


def _write_direct(handler: logging.Handler, level: int, message: str) -> None:
    """Emit straight to ``handler``, bypassing logger levels."""
    handler.handle(
        logging.LogRecord(
            name="clinic.logging",
            level=level,
            pathname=__file__,
            lineno=0,
            msg=message,
            args=(),
            exc_info=None,
        )
    )


def register_request_logging(app: Flask) -> None:
    """Log each request on arrival and again with its status and duration."""
    request_logger = logging.getLogger("clinic.http")

    @app.before_request
    def _start_request_timer():
        g.request_started = time.perf_counter()
        g.request_id = uuid.uuid4().hex[:12]
        g.route = request.url_rule.rule if request.url_rule else request.path
        request_logger.info(
            f"--> {request.method} {request.path}",
            extra={
                "context": {
                    "request_id": g.request_id,
                    "route": g.route,
                    "remote_addr": request.remote_addr,
                }
            },
        )

    @app.after_request
    def _log_response(response):
        started = g.get("request_started")
        if started is None:
            return response
        duration_ms = (time.perf_counter() - started) * 1000
        request_logger.info(
            f"<-- {request.method} {request.path} {response.status_code} "
            f"({duration_ms:.1f}ms)",
            extra={
                "context": {
                    "request_id": g.get("request_id"),
                    "status_code": response.status_code,
                    "duration_ms": round(duration_ms, 2),
                }
            },
        )
        return response


def setup_logging(
    app: Optional[Flask] = None,
    log_level: Union[int, str] = "INFO",
    log_to_file: bool = True,
    use_json_format: bool = False,
    log_dir: Optional[Path] = None,
) -> None:
    """
    Configure the root logger (and request logging when ``app`` is given).

    Args:
        app: Flask application to attach request/response logging to
        log_level: Level name ("DEBUG", "INFO", ...) or logging constant
        log_to_file: Also write rotating JSON files under ``log_dir``
        use_json_format: JSON console lines instead of coloured text
        log_dir: Directory for log files, defaults to backend/logs

    A log directory that cannot be created or opened is reported on the
    console and file logging is skipped; startup carries on.
    """
    level = _resolve_level(log_level)
    log_dir = log_dir or Path(__file__).resolve().parents[2] / "logs"

    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        handler.close()
        root_logger.removeHandler(handler)
    root_logger.setLevel(level)

    console = _console_handler(level, use_json_format)
    root_logger.addHandler(console)

    if log_to_file:
        try:
            for handler in _file_handlers(log_dir, level):
                root_logger.addHandler(handler)
        except OSError as exc:
            _write_direct(
                console,
                logging.WARNING,
                f"Cannot write log files in {log_dir} ({exc}). "
                "Falling back to console-only logging.",
            )

    if app is not None:
        register_request_logging(app)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    clinic_logger = logging.getLogger("clinic")
    clinic_logger.setLevel(level)
    clinic_logger.info(
        "Logging configured",
        extra={
            "context": {
                "level": logging.getLevelName(level),
                "log_to_file": log_to_file,
                "json": use_json_format,
            }
        },
    )


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def log_performance(func_name: str, duration_ms: float, **kwargs) -> None:
    """
    Log how long an operation took, at INFO on ``clinic.performance``.

    Extra keyword arguments (bill_id, appointment_id, ...) are added to the
    record's context.
    """
    context = {"function": func_name, "duration_ms": round(duration_ms, 2)}
    context.update(kwargs)
    get_logger("clinic.performance").info(
        f"{func_name} completed in {duration_ms:.2f}ms",
        extra={"context": context},
    )
