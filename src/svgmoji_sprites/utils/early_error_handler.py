"""Error reporting for failures that happen before logging is configured.

Configuration problems surface before ``setup_logging`` has run, so these
helpers write straight to stderr.
"""

import sys
from datetime import datetime
from typing import Any


def handle_startup_error(
    error_type: str, message: str, details: dict[str, Any] | None = None
) -> None:
    """Write a formatted startup error to stderr.

    Args:
        error_type: Type of error (e.g., "CONFIG_ERROR", "LOGGING_FILE_ERROR")
        message: Main error message
        details: Optional dictionary of additional error details
    """
    timestamp = datetime.now().isoformat()

    sys.stderr.write(f"\n[{timestamp}] {error_type}: {message}\n")

    if details:
        sys.stderr.write("Details:\n")
        for key, value in details.items():
            sys.stderr.write(f"  {key}: {value}\n")

    sys.stderr.flush()


def handle_keyboard_interrupt() -> None:
    """Report a build interrupted with Ctrl+C."""
    sys.stderr.write("\n\nBuild interrupted by user (Ctrl+C)\n")
    sys.stderr.flush()
