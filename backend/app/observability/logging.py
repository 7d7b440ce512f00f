"""
Process-wide structlog setup for the API server and the CLI.

Pipeline services log through `structlog.get_logger(__name__)` with
key/value context (category, feed_url, provider, job). Standard library
loggers from uvicorn, SQLAlchemy, httpx and schedule share the same stdout
handler, so a scheduled run reads as one stream. Every event carries the
app name and environment.
"""

import logging
import sys

import structlog
from structlog.types import Processor

from app.config import Settings, get_settings

# Library loggers that only matter when something is wrong.
QUIET_LOGGERS = ("httpx", "httpcore", "asyncio", "schedule", "feedparser")


def _renderer(settings: Settings) -> list[Processor]:
    if settings.is_production:
        return [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    return [structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())]


def setup_logging(settings: Settings | None = None) -> None:
    """
    Configure logging once at process start.

    JSON lines in production, console output elsewhere. SQL echo follows
    `settings.debug`.
    """
    settings = settings or get_settings()

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
        *_renderer(settings),
    ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
    )

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.INFO if settings.debug else logging.WARNING
    )

    structlog.contextvars.bind_contextvars(app=settings.app_name, environment=settings.environment)
