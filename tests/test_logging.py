"""Simple test for the logging module."""

import io
import logging
import unittest
from unittest.mock import MagicMock

import requests

from gravity_client import ClientConfig, GravityClient, HttpError
from gravity_client.utils.logging import LOGGER_PREFIX, LogLevel, get_logger, log_exception


class TestLogging(unittest.TestCase):
    """Test suite for the logging module."""

    def test_get_logger(self):
        """Test the get_logger function."""
        # Test with a simple name
        logger = get_logger("test")
        self.assertEqual(logger.name, "gravity-client.test")

        # Test with a name that already has the prefix
        logger = get_logger("gravity-client.test")
        self.assertEqual(logger.name, "gravity-client.test")

        # Test with __main__
        logger = get_logger("__main__")
        self.assertEqual(logger.name, "gravity-client")

    def test_log_levels(self):
        """Test the LogLevel enum."""
        self.assertEqual(LogLevel.DEBUG, "DEBUG")
        self.assertEqual(LogLevel.INFO, "INFO")
        self.assertEqual(LogLevel.WARNING, "WARNING")
        self.assertEqual(LogLevel.ERROR, "ERROR")
        self.assertEqual(LogLevel.CRITICAL, "CRITICAL")

    def test_package_logger_has_null_handler(self):
        """Test the library does not print without configuration."""
        handlers = logging.getLogger(LOGGER_PREFIX).handlers
        self.assertTrue(any(isinstance(handler, logging.NullHandler) for handler in handlers))

    def test_log_exception_warning(self):
        """Test warnings are logged without a traceback."""
        logger = MagicMock()
        exc = ValueError("bad")

        log_exception(logger, "Request failed", exc, level=LogLevel.WARNING, extra={"reason": "connect"})

        logger.warning.assert_called_once_with("Request failed: bad", extra={"reason": "connect"})
        logger.exception.assert_not_called()

    def test_log_exception_error(self):
        """Test errors are logged with the traceback."""
        logger = MagicMock()
        exc = ValueError("bad")

        log_exception(logger, "Decode failed", exc)

        logger.exception.assert_called_once_with("Decode failed: bad", extra=None)

    def test_log_without_exception(self):
        """Test plain messages go to the level's method."""
        logger = MagicMock()

        log_exception(logger, "addEvents failed", level=LogLevel.ERROR)

        logger.error.assert_called_once_with("addEvents failed", extra=None)


class TestClientLogging(unittest.TestCase):
    """Test what the client writes to the log."""

    def test_http_error_is_logged(self):
        """Test a failing call logs its method and kind."""
        response = requests.Response()
        response.status_code = 503
        response.raw = io.BytesIO(b"")
        session = MagicMock(spec=requests.Session)
        session.request.return_value = response
        client = GravityClient(ClientConfig(remote_url="http://engine.test"), session=session)

        with self.assertLogs("gravity-client.client", level="WARNING") as captured:
            with self.assertRaises(HttpError):
                client.test("Alice")

        self.assertIn("ERROR:gravity-client.client:test failed: Non-200 HTTP response code: 503", captured.output)

    def test_client_error_is_logged_as_warning(self):
        """Test a 4xx answer is logged at WARNING, not ERROR."""
        response = requests.Response()
        response.status_code = 404
        response.raw = io.BytesIO(b"")
        session = MagicMock(spec=requests.Session)
        session.request.return_value = response
        client = GravityClient(ClientConfig(remote_url="http://engine.test"), session=session)

        with self.assertLogs("gravity-client.client", level="WARNING") as captured:
            with self.assertRaises(HttpError):
                client.test("Alice")

        self.assertIn("WARNING:gravity-client.client:test failed: Non-200 HTTP response code: 404", captured.output)
        self.assertFalse(any(line.startswith("ERROR:") for line in captured.output))


if __name__ == "__main__":
    unittest.main()
