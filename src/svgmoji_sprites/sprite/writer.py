"""Sprite sheet writer.

Builds one sprite sheet for one (library, partition) task: scans the
library's source folder, keeps the files whose emoji passes the task's
filter, compiles them, and writes every file the compiler produces.
"""

import asyncio
import logging
import time
from collections.abc import Callable
from pathlib import Path

from svgmoji_sprites.catalog.emoji_catalog import EmojiCatalog
from svgmoji_sprites.constants import SVG_EXTENSION
from svgmoji_sprites.exceptions import (
    SpriteCompilationError,
    SpriteSourceError,
    SpriteWriteError,
    chain_exception,
)
from svgmoji_sprites.models.emoji import FlatEmoji, SpriteTask
from svgmoji_sprites.sprite.compiler import (
    CompileResult,
    ModeConfig,
    ShapeConfig,
    SpriteCompiler,
    SpriteConfig,
    SpriteModes,
    SpriteResource,
)
from svgmoji_sprites.utils.concurrency import ConcurrencyLimiter, gather_fail_fast
from svgmoji_sprites.utils.file_utils import (
    ensure_dir_exists,
    list_dir,
    read_text,
    run_blocking,
    write_bytes,
)
from svgmoji_sprites.utils.path_utils import shape_id_from_path
from svgmoji_sprites.utils.time_utils import format_duration

CompilerFactory = Callable[[SpriteConfig], SpriteCompiler]


def sprite_config(task: SpriteTask) -> SpriteConfig:
    """Compiler configuration used for every sprite task.

    Only the stack sprite is produced, named after the task and written
    straight into the task's destination without a cache-busting hash.

    Args:
        task: The sprite task.

    Returns:
        The compiler configuration.
    """
    return SpriteConfig(
        dest=task.destination,
        modes=SpriteModes(
            stack=ModeConfig(dest="", sprite=f"{task.output_name}{SVG_EXTENSION}", bust=False),
        ),
        shape=ShapeConfig(id_generator=shape_id_from_path),
    )


class SpriteWriter:
    """Compiles and persists sprite sheets.

    Attributes:
        catalog: Emoji records used to match source files
        write_limiter: Gate shared by all file writes of one build
        logger: Logger instance
    """

    def __init__(
        self,
        catalog: EmojiCatalog,
        write_limiter: ConcurrencyLimiter,
        compiler_factory: CompilerFactory = SpriteCompiler,
    ) -> None:
        """Initialize the writer.

        Args:
            catalog: Emoji records used to match source files.
            write_limiter: Limiter every output file write goes through.
            compiler_factory: Creates the compiler for a task.
        """
        self.catalog = catalog
        self.write_limiter = write_limiter
        self.compiler_factory = compiler_factory
        self.logger = logging.getLogger(__name__)

    async def write(self, task: SpriteTask) -> None:
        """Build and persist the sprite sheet for a task.

        Completes once every file produced by the compiler has been written.

        Args:
            task: The sprite task.

        Raises:
            SpriteSourceError: If the source folder or a source file cannot be read.
            SpriteCompilationError: If the compiler reports an error.
            SpriteWriteError: If a directory or output file cannot be written.
        """
        destination = task.destination
        start = time.perf_counter()
        self.logger.debug(f"Building {task.label} -> {destination}")

        await self._ensure_dir(destination)

        compiler = self.compiler_factory(sprite_config(task))
        shape_count = await self._add_shapes(compiler, task)
        result = await self._compile(compiler, task)
        written = await self._persist(result)

        self.logger.debug(
            f"Built {task.label} ({shape_count} shapes, {written} files) "
            f"in {format_duration(time.perf_counter() - start)}"
        )

    def match(self, file_name: str, task: SpriteTask) -> FlatEmoji | None:
        """Find the emoji a source file belongs to, if the task wants it.

        Args:
            file_name: Entry name in the source folder.
            task: The sprite task.

        Returns:
            The emoji record, or None when the file is not an SVG, has no
            catalog record, or is rejected by the task's filter.
        """
        if not file_name.endswith(SVG_EXTENSION):
            return None

        emoji = self.catalog.get(shape_id_from_path(file_name))
        if emoji is None or not task.filter_fn(emoji):
            return None
        return emoji

    async def _ensure_dir(self, directory: Path) -> None:
        try:
            await run_blocking(ensure_dir_exists, directory)
        except OSError as e:
            raise chain_exception(
                SpriteWriteError(
                    "Failed to create sprite directory", {"path": str(directory), "error": str(e)}
                ),
                e,
            ) from e

    async def _add_shapes(self, compiler: SpriteCompiler, task: SpriteTask) -> int:
        """Register every matching source file with the compiler.

        Returns:
            Number of shapes registered.
        """
        try:
            entries = await run_blocking(list_dir, task.source_folder)
            count = 0
            for entry in entries:
                if self.match(entry, task) is None:
                    continue
                path = task.source_folder / entry
                compiler.add(path, entry, await run_blocking(read_text, path))
                count += 1
        except (OSError, UnicodeDecodeError) as e:
            raise chain_exception(
                SpriteSourceError(
                    "Failed to read sprite sources",
                    {"folder": str(task.source_folder), "error": str(e)},
                ),
                e,
            ) from e
        return count

    async def _compile(self, compiler: SpriteCompiler, task: SpriteTask) -> CompileResult:
        """Run the compiler and wait for its callback.

        The compiler reports from its own thread, so the outcome is handed to
        the event loop before settling the future. An error reported by the
        compiler fails the task.
        """
        loop = asyncio.get_running_loop()
        future: asyncio.Future[CompileResult] = loop.create_future()

        def settle(error: BaseException | None, result: CompileResult | None) -> None:
            if future.done():
                return
            if error is not None:
                future.set_exception(
                    chain_exception(
                        SpriteCompilationError(
                            "Sprite compilation failed", {"sprite": task.label, "error": str(error)}
                        ),
                        error,
                    )
                )
            else:
                future.set_result(result or {})

        def on_compiled(error: BaseException | None, result: CompileResult | None) -> None:
            # A cancelled build can close the loop before a late compile reports
            if loop.is_closed():
                return
            try:
                loop.call_soon_threadsafe(settle, error, result)
            except RuntimeError:
                self.logger.debug(f"Dropped compile result of {task.label}: event loop closed")

        compiler.compile(on_compiled)
        return await future

    async def _persist(self, result: CompileResult) -> int:
        """Write every produced file through the write limiter.

        The first failed write cancels the writes still pending.

        Returns:
            Number of files written.
        """
        resources = [resource for files in result.values() for resource in files.values()]
        await gather_fail_fast(
            [
                asyncio.create_task(self.write_limiter.run(self._write_resource, resource))
                for resource in resources
            ]
        )
        return len(resources)

    async def _write_resource(self, resource: SpriteResource) -> None:
        try:
            await run_blocking(ensure_dir_exists, resource.path.parent)
            await run_blocking(write_bytes, resource.path, resource.contents, False)
        except OSError as e:
            raise chain_exception(
                SpriteWriteError(
                    "Failed to write sprite file", {"path": str(resource.path), "error": str(e)}
                ),
                e,
            ) from e
