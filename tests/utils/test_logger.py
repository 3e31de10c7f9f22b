"""
Tests for logging setup.
"""

import logging

import pytest
from rich.logging import RichHandler

from stylequill.utils import get_logger, setup_logging


class TestSetupLogging:

    def test_rich_handler_installed(self):
        setup_logging("DEBUG")

        root_logger = logging.getLogger()
        assert root_logger.level == logging.DEBUG
        assert len(root_logger.handlers) == 1
        assert isinstance(root_logger.handlers[0], RichHandler)

    def test_plain_handler(self):
        setup_logging("warning", use_rich=False)

        root_logger = logging.getLogger()
        assert root_logger.level == logging.WARNING
        assert not isinstance(root_logger.handlers[0], RichHandler)

    def test_invalid_level(self):
        with pytest.raises(ValueError):
            setup_logging("LOUD")

    def test_get_logger(self):
        assert get_logger("stylequill.test").name == "stylequill.test"
