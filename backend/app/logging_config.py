from __future__ import annotations

import logging
import re
import sys
from pathlib import Path

import structlog
from structlog.typing import EventDict, Processor

from backend.app.config import AppSettings

ROOT_LOGGER_NAME = "coursehub"
TELEMETRY_LOGGER_NAME = "coursehub.telemetry"
LOG_FILE_NAME = "coursehub.log"
TELEMETRY_LOG_FILE_NAME = "coursehub-telemetry.log"

# googleapiclient logs full request URLs, which carry the developer key.
YOUTUBE_CLIENT_LOGGER_NAMES: tuple[str, ...] = ("googleapiclient", "httplib2")
YOUTUBE_CLIENT_LOG_LEVEL = logging.WARNING
API_KEY_QUERY_PATTERN = re.compile(r"([?&](?:key|developerKey)=)[^&\s\"']+")
REDACTED_VALUE = "[redacted]"


def configure_application_logging(settings: AppSettings) -> Path:
    """Route the app, telemetry and YouTube client loggers to console and JSON files.

    Returns the path of the main application log file.
    """
    settings.log_dir.mkdir(parents=True, exist_ok=True)
    log_file = settings.log_dir / LOG_FILE_NAME
    telemetry_log_file = settings.log_dir / TELEMETRY_LOG_FILE_NAME

    _configure_structlog()

    console_level = _resolve_log_level(settings.log_level)
    console_handler = logging.StreamHandler(stream=sys.stdout)
    console_handler.setLevel(console_level)
    console_handler.setFormatter(
        _build_console_formatter(enable_colors=_stream_supports_color(sys.stdout))
    )
    file_handler = _build_json_file_handler(log_file, level=logging.DEBUG)

    _route_logger(ROOT_LOGGER_NAME, [console_handler, file_handler], level=logging.DEBUG)
    for client_logger_name in YOUTUBE_CLIENT_LOGGER_NAMES:
        _route_logger(
            client_logger_name,
            [console_handler, file_handler],
            level=YOUTUBE_CLIENT_LOG_LEVEL,
        )
    _route_logger(
        TELEMETRY_LOGGER_NAME,
        [_build_json_file_handler(telemetry_log_file, level=logging.INFO)],
        level=logging.INFO,
    )

    logging.getLogger(ROOT_LOGGER_NAME).info(
        "logging configured console_level=%s path=%s telemetry_path=%s youtube_client_level=%s",
        logging.getLevelName(console_level),
        log_file,
        telemetry_log_file,
        logging.getLevelName(YOUTUBE_CLIENT_LOG_LEVEL),
    )
    return log_file


def redact_api_keys(text: str) -> str:
    return API_KEY_QUERY_PATTERN.sub(rf"\1{REDACTED_VALUE}", text)


def _configure_structlog() -> None:
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            _redact_event_api_keys,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def _route_logger(name: str, handlers: list[logging.Handler], *, level: int) -> None:
    logger = logging.getLogger(name)
    logger.setLevel(level)
    logger.propagate = False
    _reset_handlers(logger)
    for handler in handlers:
        logger.addHandler(handler)


def _resolve_log_level(raw_level: str) -> int:
    resolved = getattr(logging, raw_level.strip().upper(), None)
    if isinstance(resolved, int):
        return resolved
    return logging.INFO


def _reset_handlers(logger: logging.Logger) -> None:
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


def _build_console_formatter(*, enable_colors: bool) -> structlog.stdlib.ProcessorFormatter:
    return structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=_shared_pre_chain(),
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.dev.ConsoleRenderer(colors=enable_colors),
        ],
    )


def _build_json_file_handler(path: Path, *, level: int) -> logging.Handler:
    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setLevel(level)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=_shared_pre_chain(),
            processors=[
                _add_record_metadata,
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                structlog.processors.format_exc_info,
                _redact_event_api_keys,
                structlog.processors.JSONRenderer(sort_keys=True),
            ],
        )
    )
    return handler


def _shared_pre_chain() -> list[Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True, key="timestamp"),
        _redact_event_api_keys,
    ]


def _redact_event_api_keys(
    _logger: logging.Logger | None,
    _method_name: str,
    event_dict: EventDict,
) -> EventDict:
    for key in ("event", "exception"):
        value = event_dict.get(key)
        if isinstance(value, str):
            event_dict[key] = redact_api_keys(value)
    return event_dict


def _add_record_metadata(
    _logger: logging.Logger,
    _method_name: str,
    event_dict: EventDict,
) -> EventDict:
    record = event_dict.get("_record")
    if isinstance(record, logging.LogRecord):
        event_dict["module"] = record.module
        event_dict["lineno"] = record.lineno
        event_dict["func_name"] = record.funcName
    return event_dict


def _stream_supports_color(stream: object) -> bool:
    isatty = getattr(stream, "isatty", None)
    if not callable(isatty):
        return False
    try:
        return bool(isatty())
    except (OSError, ValueError):
        return False
