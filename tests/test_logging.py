"""Tests for logging setup."""

import logging

import structlog

from recipe_scan.observability.logging import NOISY_LOGGERS, batch_context, setup_logging


class TestLogging:
    """Tests for setup_logging and batch_context."""

    def test_noisy_libraries_quieted(self) -> None:
        setup_logging(log_level="DEBUG", log_format="json")
        for name in NOISY_LOGGERS:
            assert logging.getLogger(name).level == logging.WARNING

    def test_batch_context_binds_and_unbinds(self) -> None:
        with batch_context("/photos", batch_id="abc123") as batch_id:
            assert batch_id == "abc123"
            bound = structlog.contextvars.get_contextvars()
            assert bound["batch_id"] == "abc123"
            assert bound["input_dir"] == "/photos"
        assert "batch_id" not in structlog.contextvars.get_contextvars()

    def test_batch_context_generates_id(self) -> None:
        with batch_context("/photos") as batch_id:
            assert len(batch_id) == 8
