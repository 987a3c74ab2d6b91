"""
Tests for structured JSON logging.
"""

import io
import json
import logging

import pytest

from taskhub.shared.infrastructure.logging import (
    CustomJsonFormatter,
    get_logger,
    setup_logging,
)


def _render(formatter: CustomJsonFormatter, **extra) -> dict:
    stream = io.StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(formatter)

    logger = logging.getLogger("taskhub.tests.render")
    logger.propagate = False
    logger.handlers = [handler]
    logger.setLevel(logging.INFO)
    try:
        logger.info("Request completed", extra=extra)
    finally:
        logger.handlers = []
        logger.propagate = True
    return json.loads(stream.getvalue())


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    root.handlers = handlers
    root.setLevel(level)


class TestCustomJsonFormatter:
    """Tests for the JSON formatter."""

    def test_standard_fields(self) -> None:
        """Records carry message, level, timestamp and environment."""
        record = _render(
            CustomJsonFormatter("%(name)s %(levelname)s %(message)s", environment="staging")
        )

        assert record["message"] == "Request completed"
        assert record["levelname"] == "INFO"
        assert record["environment"] == "staging"
        assert record["timestamp"]

    def test_correlation_id_included(self) -> None:
        """Correlation IDs passed as extra are kept."""
        record = _render(CustomJsonFormatter("%(message)s"), correlation_id="req-1")

        assert record["correlation_id"] == "req-1"

    def test_sensitive_fields_redacted(self) -> None:
        """Credential-like fields never reach the log output."""
        record = _render(
            CustomJsonFormatter("%(message)s"),
            email_pass="mail-password",
            jwt_secret="jwt-secret",
            path="/health",
        )

        assert record["email_pass"] == "***REDACTED***"
        assert record["jwt_secret"] == "***REDACTED***"
        assert record["path"] == "/health"


class TestSetupLogging:
    """Tests for setup_logging."""

    def test_installs_json_handler(self, restore_root_logger) -> None:
        """The root logger gets a single JSON handler at the given level."""
        setup_logging(level="debug", environment="test")

        root = restore_root_logger
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, CustomJsonFormatter)
        assert root.handlers[0].formatter.environment == "test"

    def test_unknown_level_falls_back_to_info(self, restore_root_logger) -> None:
        """An unrecognised level name does not break startup."""
        setup_logging(level="chatty")

        assert restore_root_logger.level == logging.INFO

    def test_get_logger(self) -> None:
        """get_logger returns the named standard logger."""
        assert get_logger("taskhub.main") is logging.getLogger("taskhub.main")
