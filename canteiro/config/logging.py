"""
Structured logging for the back office.

Every event carries the application name and environment. While a
request is being served it also carries the request id and the acting
user, so ``bill_created`` or ``document_deleted`` events from the
services can be traced back to who triggered them.
"""

import logging
import sys
from typing import Any

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

from canteiro.config.settings import Settings, get_settings

# Third-party loggers that are chatty at INFO
QUIET_LOGGERS = (
    "aiosqlite",
    "multipart",
    "python_multipart",
    "uvicorn.access",
    "watchfiles",
)


def app_context(settings: Settings) -> Processor:
    """Processor stamping the application identity on each event."""
    context = {
        "app": settings.app_name,
        "version": settings.app_version,
        "environment": settings.environment,
    }

    def add_app_context(
        logger: WrappedLogger, method_name: str, event_dict: EventDict
    ) -> EventDict:
        for key, value in context.items():
            event_dict.setdefault(key, value)
        return event_dict

    return add_app_context


def bind_request_context(
    request_id: str,
    user_id: str | None = None,
    role: str | None = None,
) -> None:
    """Attach the current request to every event logged until it is cleared."""
    structlog.contextvars.clear_contextvars()
    context: dict[str, Any] = {"request_id": request_id}
    if user_id:
        context["user_id"] = user_id
    if role:
        context["role"] = role
    structlog.contextvars.bind_contextvars(**context)


def clear_request_context() -> None:
    structlog.contextvars.clear_contextvars()


def configure_logging(settings: Settings | None = None) -> None:
    """
    Configure structlog and the stdlib root logger.

    Development gets colored console lines; staging and production get
    one JSON object per line.
    """
    settings = settings or get_settings()

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
        app_context(settings),
    ]

    renderer: list[Processor]
    if settings.environment == "development":
        renderer = [structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())]
    else:
        renderer = [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]

    structlog.configure(
        processors=shared_processors + renderer,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, settings.log_level),
        force=True,
    )

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance."""
    return structlog.get_logger(name)
