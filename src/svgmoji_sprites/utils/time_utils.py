"""Time-related utility functions for build diagnostics."""

from svgmoji_sprites.constants import (
    MILLISECONDS_PER_SECOND,
    SECONDS_PER_HOUR,
    SECONDS_PER_MINUTE,
)


def format_duration(seconds: float) -> str:
    """Format an elapsed time in its largest whole unit.

    Examples: ``0.25 -> "250ms"``, ``4.6 -> "5s"``, ``125 -> "2m"``,
    ``7300 -> "2h"``.

    Args:
        seconds: Elapsed time in seconds.

    Returns:
        Short human-readable duration.
    """
    seconds = max(0.0, seconds)
    if seconds < 1:
        return f"{round(seconds * MILLISECONDS_PER_SECOND)}ms"
    if seconds < SECONDS_PER_MINUTE:
        return f"{round(seconds)}s"
    if seconds < SECONDS_PER_HOUR:
        return f"{round(seconds / SECONDS_PER_MINUTE)}m"
    return f"{round(seconds / SECONDS_PER_HOUR)}h"
