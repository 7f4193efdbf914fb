"""structlog setup for the console: colored lines on stderr, JSON lines in LOG_FILE."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import structlog

from botadmin.config import LOG_FILE, LOG_LEVEL, VERBOSE_LOGGING

BoundLogger = structlog.stdlib.BoundLogger

UVICORN_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")
QUIET_LOGGERS = ("httpx", "httpcore", "multipart", "python_multipart")

_configured = False


def _coerce_level(level_name: str) -> int:
    if level_name.isdigit():
        return int(level_name)
    return getattr(logging, level_name.upper(), logging.INFO)


def _shared_processors() -> list[Any]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]


def _handler(handler: logging.Handler, renderer: Any, level: int) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=renderer,
            foreign_pre_chain=_shared_processors(),
        )
    )
    return handler


def configure_logging(log_file: Path | None = LOG_FILE, level: str | int | None = None) -> None:
    """
    Install the console and JSONL handlers on the root logger and configure structlog.
    Safe to call again (e.g. from the CLI) to switch file or level; handlers are replaced, not stacked.
    """
    global _configured

    if level is None:
        effective_level = logging.DEBUG if VERBOSE_LOGGING else _coerce_level(LOG_LEVEL)
    elif isinstance(level, int):
        effective_level = level
    else:
        effective_level = _coerce_level(level)

    handlers = [_handler(logging.StreamHandler(), structlog.dev.ConsoleRenderer(colors=True), effective_level)]
    if log_file is not None:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        handlers.append(
            _handler(
                logging.FileHandler(log_file, encoding="utf-8"),
                structlog.processors.JSONRenderer(),
                effective_level,
            )
        )

    root_logger = logging.getLogger()
    for old in list(root_logger.handlers):
        root_logger.removeHandler(old)
        old.close()
    root_logger.setLevel(effective_level)
    for handler in handlers:
        root_logger.addHandler(handler)
    logging.captureWarnings(True)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    # uvicorn runs with log_config=None; its records propagate to the handlers above
    for name in UVICORN_LOGGERS:
        uv_logger = logging.getLogger(name)
        uv_logger.handlers.clear()
        uv_logger.propagate = True

    structlog.configure(
        processors=[
            *_shared_processors(),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.make_filtering_bound_logger(effective_level),
        cache_logger_on_first_use=False,
    )
    _configured = True


def get_logger(name: str = "botadmin", **bindings: Any) -> BoundLogger:
    """Return a structlog logger, configuring logging on first use."""
    if not _configured:
        configure_logging()
    logger = structlog.get_logger(name)
    if bindings:
        logger = logger.bind(**bindings)
    return logger


def bind_context(**context: Any) -> None:
    """Bind values (request_id, path) to every log entry of the current request."""
    structlog.contextvars.bind_contextvars(**context)


def clear_context() -> None:
    structlog.contextvars.clear_contextvars()
