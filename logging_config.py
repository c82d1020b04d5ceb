"""
Logging configuration for the SocialX gateway.

Production emits one JSON object per line; every other environment gets
a readable single-line format. Request and upstream context travels on the
record as attributes (see CONTEXT_FIELDS).
"""

import logging
import logging.handlers
import sys
import json
from datetime import datetime, UTC
from typing import Dict, Any, List, Optional
from pathlib import Path

from config import Settings, Environment

CONTEXT_FIELDS = (
    "request_id",
    "method",
    "endpoint",
    "status_code",
    "response_time",
    "upstream",
)

# label used by the readable format, in display order
_CONTEXT_LABELS = (
    ("request_id", "req_id"),
    ("method", "method"),
    ("endpoint", "endpoint"),
    ("upstream", "upstream"),
    ("status_code", "status"),
)

APP_LOGGERS = ("main", "api", "gateway", "pages", "error_handlers")

THIRD_PARTY_LEVELS = {
    "uvicorn": logging.INFO,
    "fastapi": logging.INFO,
    "httpx": logging.WARNING,
    "httpcore": logging.WARNING,
}


class StructuredFormatter(logging.Formatter):
    """
    JSON lines in production, human-readable lines elsewhere.
    """

    def __init__(self, environment: Environment):
        self.environment = environment
        super().__init__()

    def format(self, record: logging.LogRecord) -> str:
        if self.environment == Environment.PRODUCTION:
            return self._format_json(record)
        return self._format_human_readable(record)

    def _format_json(self, record: logging.LogRecord) -> str:
        log_data: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, UTC)
            .isoformat(timespec="milliseconds")
            .replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "location": f"{record.module}:{record.funcName}:{record.lineno}",
        }
        log_data.update(
            {
                field: getattr(record, field)
                for field in CONTEXT_FIELDS
                if getattr(record, field, None) is not None
            }
        )

        event_type = getattr(record, "event_type", None)
        if event_type:
            log_data["event_type"] = event_type

        if record.exc_info and record.exc_info[0]:
            log_data["exception"] = {
                "type": record.exc_info[0].__name__,
                "message": str(record.exc_info[1]),
                "traceback": self.formatException(record.exc_info),
            }

        return json.dumps(log_data, ensure_ascii=False, default=str)

    def _format_human_readable(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created).strftime("%Y-%m-%d %H:%M:%S")
        line = f"{timestamp} | {record.levelname:8} | {record.name:20} | {record.getMessage()}"

        context = [
            f"{label}={getattr(record, field)}"
            for field, label in _CONTEXT_LABELS
            if getattr(record, field, None)
        ]
        response_time = getattr(record, "response_time", None)
        if response_time is not None:
            context.append(f"time={response_time:.3f}s")
        if context:
            line += " | " + " ".join(context)

        if record.levelno == logging.DEBUG:
            line += f" | {record.module}:{record.funcName}:{record.lineno}"

        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)

        return line


class RequestContextFilter(logging.Filter):
    """Default every context attribute to None so formatters can read them"""

    def filter(self, record: logging.LogRecord) -> bool:
        for field in CONTEXT_FIELDS:
            if not hasattr(record, field):
                setattr(record, field, None)
        return True


def _build_handlers(settings: Settings) -> List[logging.Handler]:
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]

    if settings.log_file:
        Path(settings.log_file).parent.mkdir(parents=True, exist_ok=True)
        handlers.append(
            logging.handlers.RotatingFileHandler(
                filename=settings.log_file,
                maxBytes=settings.log_max_size,
                backupCount=settings.log_backup_count,
                encoding="utf-8",
            )
        )

    formatter = StructuredFormatter(settings.environment)
    context_filter = RequestContextFilter()
    for handler in handlers:
        handler.setFormatter(formatter)
        handler.addFilter(context_filter)
    return handlers


def setup_logging(settings: Settings) -> None:
    """
    Replace the root logger's handlers with ones built from ``settings``.

    Logs go to stdout and, when ``log_file`` is set, to a rotating file.
    """
    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(settings.log_level.value)
    for handler in _build_handlers(settings):
        root_logger.addHandler(handler)

    configure_logger_levels(settings)

    logging.getLogger(__name__).info(
        f"Logging configured - level {settings.log_level.value}, "
        f"environment {settings.environment.value}, "
        f"output {settings.log_file or 'stdout'}"
    )


def configure_logger_levels(settings: Settings) -> None:
    """Verbose application loggers in development, quiet HTTP client internals"""
    app_level = logging.DEBUG if settings.is_development else logging.INFO
    for name in APP_LOGGERS:
        logging.getLogger(name).setLevel(app_level)

    for name, level in THIRD_PARTY_LEVELS.items():
        logging.getLogger(name).setLevel(level)

    if settings.is_production:
        access_level = logging.WARNING
    elif settings.is_development:
        access_level = logging.DEBUG
    else:
        access_level = logging.INFO
    logging.getLogger("uvicorn.access").setLevel(access_level)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


class LoggerAdapter(logging.LoggerAdapter):
    """
    Adapter that stamps its context (e.g. request_id) onto every record.
    Per-call ``extra`` values are kept alongside it.
    """

    def __init__(self, logger: logging.Logger, extra: Optional[Dict[str, Any]] = None):
        super().__init__(logger, extra or {})

    def process(self, msg: str, kwargs: Dict[str, Any]) -> tuple:
        kwargs["extra"] = {**kwargs.get("extra", {}), **self.extra}
        return msg, kwargs

    def with_context(self, **context) -> "LoggerAdapter":
        """Copy of this adapter with more context"""
        return LoggerAdapter(self.logger, {**self.extra, **context})


def get_logger_with_context(name: str, **context) -> LoggerAdapter:
    return LoggerAdapter(logging.getLogger(name), context)


def _log_event(logger, level: int, message: str, event_type: str, **fields) -> None:
    logger.log(level, message, extra={"event_type": event_type, **fields})


def log_api_request(
    logger: logging.Logger,
    method: str,
    endpoint: str,
    request_id: Optional[str] = None,
):
    """Log an incoming request before it is handled"""
    _log_event(
        logger,
        logging.INFO,
        f"Request: {method} {endpoint}",
        "api_request_start",
        method=method,
        endpoint=endpoint,
        request_id=request_id,
    )


def log_api_response(
    logger: logging.Logger,
    method: str,
    endpoint: str,
    status_code: int,
    response_time: float,
    request_id: Optional[str] = None,
):
    """Log the response sent for a request"""
    _log_event(
        logger,
        logging.INFO,
        f"Response: {method} {endpoint} - {status_code} ({response_time:.3f}s)",
        "api_response",
        method=method,
        endpoint=endpoint,
        status_code=status_code,
        response_time=response_time,
        request_id=request_id,
    )


def log_proxy_request(
    logger: logging.Logger,
    method: str,
    upstream: str,
    status_code: int,
    duration: float,
):
    """Log a request relayed to the backend"""
    _log_event(
        logger,
        logging.DEBUG,
        f"Proxy: {method} {upstream} - {status_code} ({duration:.3f}s)",
        "proxy_request",
        method=method,
        upstream=upstream,
        status_code=status_code,
        response_time=duration,
    )


def log_error(
    logger: logging.Logger, error: Exception, context: Optional[Dict[str, Any]] = None
):
    """Log an unexpected exception with its stack trace"""
    logger.error(
        f"Error: {type(error).__name__}: {error}",
        extra={
            "event_type": "error",
            "error_type": type(error).__name__,
            **(context or {}),
        },
        exc_info=True,
    )
