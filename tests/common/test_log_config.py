"""Tests for getmeds/common/log_config.py"""

import logging
import sys

from getmeds.common.log_config import setup_logging


class TestSetupLogging:
    def teardown_method(self):
        """Reset logger between tests."""
        logger = logging.getLogger("getmeds")
        logger.handlers.clear()
        logger.setLevel(logging.WARNING)

    def test_default_level_is_info(self):
        setup_logging()
        logger = logging.getLogger("getmeds")
        assert logger.level == logging.INFO

    def test_verbose_sets_debug(self):
        setup_logging(verbose=True)
        logger = logging.getLogger("getmeds")
        assert logger.level == logging.DEBUG

    def test_quiet_sets_warning(self):
        setup_logging(quiet=True)
        logger = logging.getLogger("getmeds")
        assert logger.level == logging.WARNING

    def test_handler_outputs_to_stderr(self):
        setup_logging()
        logger = logging.getLogger("getmeds")
        assert len(logger.handlers) == 1
        handler = logger.handlers[0]
        assert handler.stream is sys.stderr

    def test_repeated_calls_do_not_duplicate_handlers(self):
        setup_logging()
        setup_logging(verbose=True)
        assert len(logging.getLogger("getmeds").handlers) == 1

    def test_module_loggers_propagate_to_package_logger(self):
        setup_logging(verbose=True)
        child = logging.getLogger("getmeds.search.aggregator")
        assert child.getEffectiveLevel() == logging.DEBUG
