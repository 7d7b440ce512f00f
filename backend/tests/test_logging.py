"""Tests for process logging setup."""

import logging

import structlog

from app.observability import setup_logging


def test_binds_service_context_and_quiets_libraries(settings) -> None:
    structlog.contextvars.clear_contextvars()
    try:
        setup_logging(settings)

        context = structlog.contextvars.get_contextvars()
        assert context["app"] == settings.app_name
        assert context["environment"] == "test"
        assert logging.getLogger("httpx").level == logging.WARNING
        assert logging.getLogger("schedule").level == logging.WARNING
        assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING
    finally:
        structlog.contextvars.clear_contextvars()
