"""Tests for the correlation-aware logging helpers."""

import logging

from markup_tree.shared.logging import CorrelationLogger, configure_logging, get_logger


class TestCorrelationLogger:
    """Test structured log records."""

    def test_component_defaults_to_module_name(self):
        """Test the default component name."""
        logger = get_logger("markup_tree.parsing.scanner")

        assert isinstance(logger, CorrelationLogger)
        assert logger.component == "scanner"
        assert logger.correlation_id is None

    def test_records_carry_correlation_and_component(self, caplog):
        """Test that records get correlation ID and component attributes."""
        caplog.set_level(logging.DEBUG, logger="markup_tree.test_logging")
        logger = get_logger("markup_tree.test_logging", "req-42", "unit")

        logger.info("parsed", extra={"nodes": 3})

        record = caplog.records[-1]
        assert record.getMessage() == "parsed"
        assert record.component == "unit"
        assert record.correlation_id == "req-42"
        assert record.nodes == 3

    def test_levels(self, caplog):
        """Test that each level method emits at its level."""
        caplog.set_level(logging.DEBUG, logger="markup_tree.test_levels")
        logger = get_logger("markup_tree.test_levels")

        logger.debug("d")
        logger.info("i")
        logger.warning("w")
        logger.error("e")

        assert [r.levelno for r in caplog.records] == [
            logging.DEBUG, logging.INFO, logging.WARNING, logging.ERROR
        ]

    def test_exception_includes_traceback(self, caplog):
        """Test that exception() attaches exc_info."""
        caplog.set_level(logging.DEBUG, logger="markup_tree.test_exception")
        logger = get_logger("markup_tree.test_exception")

        try:
            raise RuntimeError("boom")
        except RuntimeError:
            logger.exception("failed")

        assert caplog.records[-1].exc_info is not None

    def test_is_enabled_for(self):
        """Test level checks are delegated to the wrapped logger."""
        logging.getLogger("markup_tree.test_enabled").setLevel(logging.ERROR)
        logger = get_logger("markup_tree.test_enabled")

        assert logger.is_enabled_for(logging.ERROR)
        assert not logger.is_enabled_for(logging.INFO)


class TestConfigureLogging:
    """Test command-line logging setup."""

    def test_sets_root_level(self):
        """Test that the root level follows the requested name."""
        root = logging.getLogger()
        previous = root.level
        try:
            configure_logging("error")
            assert root.level == logging.ERROR
        finally:
            root.setLevel(previous)
