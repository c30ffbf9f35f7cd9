from __future__ import annotations

import logging
import os
from typing import Any

import structlog


def _resolve_level(level: str | None) -> int:
    name = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
    return getattr(logging, name, logging.INFO)


def _resolve_format(app_env: str | None) -> str:
    fmt = os.getenv("LOG_FORMAT")
    if fmt:
        return fmt.lower()
    return "console" if (app_env or os.getenv("APP_ENV")) == "dev" else "json"


def setup_logging(*, app_env: str | None = None, level: str | None = None) -> None:
    """Route structlog and stdlib records through a single renderer.

    JSON lines by default, a coloured console renderer for local development.
    Context bound through ``structlog.contextvars`` (request_id, path, ...) is
    merged into every event, including records emitted by httpx and SQLAlchemy.
    """

    shared_processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.format_exc_info,
    ]

    structlog.configure(
        processors=shared_processors + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    if _resolve_format(app_env) == "console":
        renderer: Any = structlog.dev.ConsoleRenderer()
    else:
        renderer = structlog.processors.JSONRenderer()

    handler = logging.StreamHandler()
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared_processors,
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        )
    )

    logging.basicConfig(level=_resolve_level(level), handlers=[handler], force=True)
    # httpx logs every request at INFO, which duplicates the provider events
    logging.getLogger("httpx").setLevel(logging.WARNING)


def get_logger(*args: Any, **kwargs: Any) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(*args, **kwargs)
