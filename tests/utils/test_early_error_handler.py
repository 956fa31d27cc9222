"""Tests for early error handler module."""

from io import StringIO
from unittest.mock import Mock, patch

from svgmoji_sprites.utils.early_error_handler import (
    handle_keyboard_interrupt,
    handle_startup_error,
)


class TestEarlyErrorHandler:
    """Test early error handler functions."""

    @patch("sys.stderr", new_callable=StringIO)
    def test_handle_startup_error_basic(self, mock_stderr: StringIO) -> None:
        """Test basic startup error handling."""
        handle_startup_error("CONFIG_ERROR", "Test message")

        output = mock_stderr.getvalue()
        assert "CONFIG_ERROR: Test message" in output
        assert "Details:" not in output

    @patch("sys.stderr", new_callable=StringIO)
    def test_handle_startup_error_with_details(self, mock_stderr: StringIO) -> None:
        """Test startup error handling with details."""
        handle_startup_error("CONFIG_ERROR", "Test message", {"path": "svgmoji.yaml", "line": 3})

        output = mock_stderr.getvalue()
        assert "Details:" in output
        assert "path: svgmoji.yaml" in output
        assert "line: 3" in output

    @patch("sys.stderr", new_callable=StringIO)
    def test_handle_startup_error_empty_details(self, mock_stderr: StringIO) -> None:
        """Test startup error handling with empty details."""
        handle_startup_error("CONFIG_ERROR", "Test message", {})

        assert "Details:" not in mock_stderr.getvalue()

    @patch("sys.stderr", new_callable=StringIO)
    @patch("svgmoji_sprites.utils.early_error_handler.datetime")
    def test_handle_startup_error_timestamp(
        self, mock_datetime: Mock, mock_stderr: StringIO
    ) -> None:
        """Test the error line carries a timestamp."""
        mock_datetime.now.return_value.isoformat.return_value = "2024-01-01T12:00:00"

        handle_startup_error("CONFIG_ERROR", "Test message")

        assert "[2024-01-01T12:00:00] CONFIG_ERROR" in mock_stderr.getvalue()

    @patch("sys.stderr", new_callable=StringIO)
    def test_handle_keyboard_interrupt(self, mock_stderr: StringIO) -> None:
        """Test keyboard interrupt handling."""
        handle_keyboard_interrupt()

        assert "Build interrupted by user (Ctrl+C)" in mock_stderr.getvalue()
