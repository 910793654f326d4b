"""
Tests for logging configuration and the debug records the package emits.
"""

import logging

import pytest
import flagfield
from flagfield.logging import setup_structured_logging


class TestStructuredLogging:
    """Test setup_structured_logging()."""

    def test_configures_named_logger(self):
        """Test that a handler and level are installed on the named logger."""
        logger = logging.getLogger('flagfield.test')
        for handler in list(logger.handlers):
            logger.removeHandler(handler)

        setup_structured_logging(logging.DEBUG, 'flagfield.test')

        assert logger.level == logging.DEBUG
        assert logger.handlers
        assert '"level": "%(levelname)s"' in logger.handlers[0].formatter._fmt

        for handler in list(logger.handlers):
            logger.removeHandler(handler)
        logger.setLevel(logging.NOTSET)


class TestDebugRecords:
    """Test the records emitted while defining and using bitfields."""

    def test_class_creation_is_logged(self, caplog):
        """Test that defining a bitfield logs its shape."""
        with caplog.at_level(logging.DEBUG, logger='flagfield'):

            class Features(flagfield.BitField):
                Flags = {'Search': 1, 'Export': 2}

        assert "Created bitfield Features with 2 flags (narrow)" in caplog.text

    def test_resolution_failure_is_logged(self, caplog):
        """Test that failed resolution is logged before raising."""
        with caplog.at_level(logging.DEBUG, logger='flagfield'):
            with pytest.raises(flagfield.UnresolvableInputError):
                flagfield.PermissionsBitField('Flying')

        assert "PermissionsBitField could not resolve 'Flying'" in caplog.text
