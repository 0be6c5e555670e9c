"""
Tests for the logging wrapper.
"""

import logging

import pytest

from selector_ingest.utils.logging import (
    ColoredFormatter,
    get_logger,
    render_context,
    setup_logging,
)


pytestmark = pytest.mark.unit


class TestRenderContext:
    """Test keyword context rendering."""

    def test_without_context(self):
        assert render_context("Scan complete", {}) == "Scan complete"

    def test_pairs_keep_call_order(self):
        rendered = render_context("Scan complete", {"rows": 10, "attributes": 4})

        assert rendered == "Scan complete | rows=10 | attributes=4"


class TestColoredFormatter:
    """Test console coloring."""

    def test_level_name_is_restored(self):
        record = logging.LogRecord("x", logging.WARNING, __file__, 1, "careful", None, None)

        formatted = ColoredFormatter("%(levelname)s %(message)s").format(record)

        assert "\033[33mWARNING\033[0m careful" == formatted
        assert record.levelname == "WARNING"


class TestIngestLogger:
    """Test handler configuration from settings."""

    def test_registry_returns_same_logger(self):
        assert get_logger("selector_ingest.tests") is get_logger("selector_ingest.tests")

    def test_file_logging(self, tmp_path):
        log_file = tmp_path / "logs" / "ingest.log"
        setup_logging(level="DEBUG", file_path=log_file, format_string="%(levelname)s %(message)s")

        get_logger("selector_ingest.tests").debug("Sample row", row="a,b")

        assert log_file.read_text().splitlines() == ["DEBUG Sample row | row=a,b"]

    def test_level_filters_records(self, tmp_path):
        log_file = tmp_path / "ingest.log"
        setup_logging(level="WARNING", file_path=log_file, format_string="%(message)s")
        logger = get_logger("selector_ingest.tests")

        logger.info("dropped")
        logger.warning("kept", requested=2)

        assert log_file.read_text().splitlines() == ["kept | requested=2"]
