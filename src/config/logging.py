"""Structured logging configuration using structlog."""

import logging
import sys
from typing import Any

import structlog
from structlog.types import Processor


def configure_logging(json_logs: bool = True, level: int = logging.INFO) -> None:
    """Configure structlog for the application.

    Args:
        json_logs: If True, output JSON format. If False, use console format.
        level: Minimum log level.
    """
    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if json_logs:
        # JSON output for production (ensure_ascii 끄기: 소스 이름이 대부분 중국어)
        shared_processors.append(
            structlog.processors.JSONRenderer(ensure_ascii=False)
        )
    else:
        shared_processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=shared_processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=level,
    )


def bind_request_user(username: str | None) -> None:
    """Bind the requesting username to every log line of the current request.

    Args:
        username: Requesting username, or None for anonymous requests.
    """
    structlog.contextvars.clear_contextvars()
    if username:
        structlog.contextvars.bind_contextvars(username=username)


def get_logger(
    name: str | None = None, **initial_context: Any
) -> structlog.BoundLogger:
    """Get a structured logger.

    Args:
        name: Optional logger name.
        **initial_context: Initial context to bind to the logger.

    Returns:
        A bound structlog logger.
    """
    logger = structlog.get_logger(name)
    if initial_context:
        logger = logger.bind(**initial_context)
    return logger
