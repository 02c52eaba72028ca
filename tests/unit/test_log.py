"""Unit tests for onionsim.log module."""

import logging

from onionsim import log
from onionsim.log import configure_logging


class TestConfigureLogging:
    """Test logging setup."""

    def test_idempotent(self):
        """Test that repeated calls attach the console handler once."""
        logger = logging.getLogger("onionsim")
        configure_logging(logging.DEBUG)
        configure_logging(logging.DEBUG)
        try:
            assert logger.handlers.count(log._handler) == 1
            assert logger.level == logging.DEBUG
            assert log._handler.formatter._fmt == log.LOG_FORMAT
        finally:
            logger.removeHandler(log._handler)
            logger.setLevel(logging.NOTSET)

    def test_records_reach_caplog(self, caplog):
        with caplog.at_level(logging.INFO, logger="onionsim"):
            logging.getLogger("onionsim.directory.registry").info("registered relay %d", 3)
        assert "registered relay 3" in caplog.text
