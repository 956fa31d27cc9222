"""Module initialization."""

from svgmoji_sprites.utils.concurrency import (
    ConcurrencyLimiter,
    default_concurrency,
    gather_fail_fast,
)
from svgmoji_sprites.utils.path_utils import path_resolver, shape_id_from_path
from svgmoji_sprites.utils.time_utils import format_duration

__all__ = [
    # Concurrency
    "ConcurrencyLimiter",
    "default_concurrency",
    "gather_fail_fast",
    # Paths
    "path_resolver",
    "shape_id_from_path",
    # Time utilities
    "format_duration",
]
