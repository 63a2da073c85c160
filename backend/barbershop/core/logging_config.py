"""
Centralized logging configuration for the barbershop backend.

Every module logs through the standard library with structured context:

    logger = get_logger(__name__)
    logger.info("Booking created", extra={"context": {"appointment_id": 12}})

``setup_logging`` is called once by the app factory. Files always receive
JSON lines; the console gets colored text in development and JSON in
production.
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

DEFAULT_LOG_DIR = Path(__file__).parent.parent.parent / "logs"
LOG_FILES = (("app.log", None), ("barbershop_errors.log", logging.ERROR))
MAX_LOG_BYTES = 10 * 1024 * 1024  # 10 MB
LOG_BACKUPS = 5

QUIET_LOGGERS = ("werkzeug", "urllib3", "sqlalchemy.engine")


class JSONFormatter(logging.Formatter):
    """One JSON object per record, with the ``context`` extra when present."""

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }
        context = getattr(record, "context", None)
        if context:
            entry["context"] = context
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False, default=str)


class ConsoleFormatter(logging.Formatter):
    """Colored level names plus ``key=value`` context for development."""

    LEVEL_COLORS = {
        logging.DEBUG: "\033[36m",
        logging.INFO: "\033[32m",
        logging.WARNING: "\033[33m",
        logging.ERROR: "\033[31m",
        logging.CRITICAL: "\033[35m",
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        # Copy: other handlers share the record
        colored = logging.makeLogRecord(record.__dict__)
        color = self.LEVEL_COLORS.get(record.levelno, "")
        colored.levelname = f"{color}{record.levelname:<8}{self.RESET}"
        line = super().format(colored)

        context = getattr(record, "context", None)
        if context:
            pairs = " ".join(f"{key}={value}" for key, value in context.items())
            line = f"{line} | {pairs}"
        return line


def _resolve_level(log_level: Union[int, str]) -> int:
    if isinstance(log_level, int):
        return log_level
    return getattr(logging, str(log_level).upper(), logging.INFO)


def _file_handlers(log_dir: Path, level: int, warnings: List[str]) -> List[logging.Handler]:
    """Rotating JSON handlers; failures are collected in ``warnings``."""
    try:
        log_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        warnings.append(f"Cannot create log directory {log_dir}: {e}")
        return []

    handlers = []
    for filename, handler_level in LOG_FILES:
        try:
            handler = logging.handlers.RotatingFileHandler(
                log_dir / filename,
                maxBytes=MAX_LOG_BYTES,
                backupCount=LOG_BACKUPS,
                encoding="utf-8",
            )
        except OSError as e:
            warnings.append(f"Cannot open {filename}: {e}")
            continue
        handler.setLevel(handler_level or level)
        handler.setFormatter(JSONFormatter())
        handlers.append(handler)
    return handlers


def _register_request_hooks(app: Flask) -> None:
    """Log every request and its response status and duration."""
    request_logger = logging.getLogger("barbershop.http")

    @app.before_request
    def start_request_timer():
        g.request_id = uuid.uuid4().hex[:12]
        g.request_started = time.perf_counter()

    @app.after_request
    def log_request(response):
        started = g.get("request_started")
        if started is None:
            return response
        duration_ms = (time.perf_counter() - started) * 1000
        level = logging.WARNING if response.status_code >= 500 else logging.INFO
        request_logger.log(
            level,
            f"{request.method} {request.path} -> {response.status_code}",
            extra={
                "context": {
                    "request_id": g.get("request_id"),
                    "method": request.method,
                    "path": request.path,
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
    Configure the root logger. Safe to call again: previous handlers are
    closed and replaced.

    Args:
        app: Flask application; when given, requests are logged
        log_level: Level name ("DEBUG") or number (logging.DEBUG)
        log_to_file: Also write rotating JSON files under ``log_dir``
        use_json_format: JSON on the console instead of colored text
        log_dir: Directory for log files (defaults to backend/logs)
    """
    level = _resolve_level(log_level)
    root = logging.getLogger()
    root.setLevel(level)
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()

    console = logging.StreamHandler(sys.stdout)
    console.setLevel(level)
    console.setFormatter(
        JSONFormatter()
        if use_json_format
        else ConsoleFormatter(
            "%(asctime)s %(levelname)s %(name)s: %(message)s", datefmt="%H:%M:%S"
        )
    )
    root.addHandler(console)

    warnings: List[str] = []
    if log_to_file:
        for handler in _file_handlers(Path(log_dir or DEFAULT_LOG_DIR), level, warnings):
            root.addHandler(handler)
    for message in warnings:
        root.warning(message, extra={"context": {"component": "logging_setup"}})

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    if app is not None:
        _register_request_hooks(app)

    logging.getLogger("barbershop").debug(
        "Logging configured",
        extra={
            "context": {
                "level": logging.getLevelName(level),
                "log_to_file": log_to_file and not warnings,
                "json_format": use_json_format,
            }
        },
    )


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def log_performance(func_name: str, duration_ms: float, **kwargs) -> None:
    """
    Record how long an operation took, at DEBUG on ``barbershop.performance``.

    Args:
        func_name: Name of the function or operation
        duration_ms: Execution duration in milliseconds
        **kwargs: Additional context (professional_id, slot_count, etc.)
    """
    context = {"operation": func_name, "duration_ms": round(duration_ms, 2)}
    context.update(kwargs)
    logging.getLogger("barbershop.performance").debug(
        f"{func_name} took {duration_ms:.2f}ms", extra={"context": context}
    )
