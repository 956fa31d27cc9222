"""Command line entry point for building emoji sprites.

Loads the build configuration, sets up logging, loads the emoji catalog and
group taxonomy, then builds every sprite of every configured library (or of
the one selected with ``--library``).
"""

import argparse
import asyncio
import sys
import time
from pathlib import Path

import yaml
from pydantic import ValidationError

from svgmoji_sprites.catalog.emojibase_client import load_catalog_sources
from svgmoji_sprites.constants import DEFAULT_CONFIG_FILENAME, LOGGER_NAME
from svgmoji_sprites.exceptions import InvalidConfigError, SvgmojiError, chain_exception
from svgmoji_sprites.models.config import BuildConfig
from svgmoji_sprites.models.emoji import SpriteTask
from svgmoji_sprites.sprite.pipeline import SpritePipeline
from svgmoji_sprites.utils.early_error_handler import (
    handle_keyboard_interrupt,
    handle_startup_error,
)
from svgmoji_sprites.utils.logging import setup_logging
from svgmoji_sprites.utils.path_utils import validate_config_path
from svgmoji_sprites.utils.time_utils import format_duration


def load_config(config_path: str | Path | None = None) -> BuildConfig:
    """Load the build configuration.

    Args:
        config_path: Explicit configuration file. When None the standard
            locations are searched and defaults apply if nothing is found.

    Returns:
        The build configuration.

    Raises:
        ConfigFileNotFoundError: If an explicit file does not exist.
        InvalidConfigError: If the file cannot be parsed or validated.
    """
    resolved_path = validate_config_path(config_path)
    if resolved_path is None:
        return BuildConfig()

    try:
        return BuildConfig.from_yaml(resolved_path)
    except (OSError, yaml.YAMLError, ValidationError) as e:
        raise chain_exception(
            InvalidConfigError(
                "Invalid configuration file", {"path": str(resolved_path), "error": str(e)}
            ),
            e,
        ) from e


async def build_sprites(config: BuildConfig, library: str | None = None) -> list[SpriteTask]:
    """Load emoji metadata and build the sprites.

    Args:
        config: The build configuration.
        library: Optional name of the only library to build.

    Returns:
        The completed sprite tasks.
    """
    sources = await load_catalog_sources(config.data)
    pipeline = SpritePipeline(config.emoji_libraries(), sources.taxonomy, sources.catalog)
    return await pipeline.run(library)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="Build emoji sprite sheets")
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help=f"Path to configuration file (default: search for {DEFAULT_CONFIG_FILENAME})",
    )
    parser.add_argument(
        "--library", type=str, default=None, help="Only build sprites for this library"
    )
    parser.add_argument(
        "--log-level", type=str, default=None, help="Override the configured log level"
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the sprite builder.

    Exits with status 1 when the build fails.
    """
    args = parse_args(argv)

    try:
        config = load_config(args.config)
    except SvgmojiError as e:
        handle_startup_error("CONFIG_ERROR", e.message, e.details)
        sys.exit(1)

    if args.log_level:
        config.logging.level = args.log_level

    logger = setup_logging(config.logging, LOGGER_NAME)
    start = time.perf_counter()

    try:
        tasks = asyncio.run(build_sprites(config, args.library))
    except KeyboardInterrupt:
        handle_keyboard_interrupt()
        sys.exit(1)
    except SvgmojiError as e:
        logger.error(f"Sprite build failed: {e}")
        sys.exit(1)

    logger.info(f"Finished {len(tasks)} sprites in {format_duration(time.perf_counter() - start)}")


if __name__ == "__main__":
    main()
