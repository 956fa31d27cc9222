"""Sprite build pipeline.

Enumerates every sprite task for every configured library and drives them
to completion under a bounded task limiter. Per library the tasks are:

    sprites/all.svg                 every emoji
    sprites/group/<name>.svg        one per group id, plus other.svg
    sprites/subgroup/<name>.svg     one per subgroup id, plus other.svg

Group and subgroup partitions are each disjoint: every matched emoji lands
in exactly one group sprite and exactly one subgroup sprite, so no two
tasks ever write the same file.
"""

import asyncio
import logging
import time
from dataclasses import dataclass

from svgmoji_sprites.catalog.emoji_catalog import EmojiCatalog
from svgmoji_sprites.constants import (
    ALL_SPRITE_NAME,
    GROUP_SUBDIR,
    OTHER_SPRITE_NAME,
    SUBGROUP_SUBDIR,
)
from svgmoji_sprites.exceptions import UnknownLibraryError
from svgmoji_sprites.models.emoji import EmojiLibrary, FlatEmoji, GroupTaxonomy, SpriteTask
from svgmoji_sprites.sprite.writer import SpriteWriter
from svgmoji_sprites.utils.concurrency import ConcurrencyLimiter, gather_fail_fast
from svgmoji_sprites.utils.time_utils import format_duration


@dataclass(frozen=True)
class PartitionFilter:
    """Select emojis whose ``attribute`` equals ``value``.

    A value of None selects emojis that have no such attribute.
    """

    attribute: str
    value: int | None

    def __call__(self, emoji: FlatEmoji) -> bool:
        actual = getattr(emoji, self.attribute)
        if self.value is None:
            return actual is None
        return actual == self.value


class SpritePipeline:
    """Builds every sprite for a set of libraries.

    Attributes:
        libraries: Libraries sprites are built for
        taxonomy: Group and subgroup names
        task_limiter: Gate for concurrently running sprite tasks
        write_limiter: Gate for concurrent file writes, shared by all tasks
        writer: Builds a single sprite
        logger: Logger instance
    """

    def __init__(
        self,
        libraries: list[EmojiLibrary],
        taxonomy: GroupTaxonomy,
        catalog: EmojiCatalog,
        task_limiter: ConcurrencyLimiter | None = None,
        write_limiter: ConcurrencyLimiter | None = None,
        writer: SpriteWriter | None = None,
    ) -> None:
        """Initialize the pipeline.

        Limiters default to one slot per CPU minus one. They belong to this
        pipeline; separate pipelines never share them. An injected writer
        brings its own write limiter.

        Args:
            libraries: Libraries sprites are built for.
            taxonomy: Group and subgroup names.
            catalog: Emoji records used to match source files.
            task_limiter: Limiter for sprite tasks.
            write_limiter: Limiter for output file writes.
            writer: Sprite writer, created from ``catalog`` when omitted.

        Raises:
            ValueError: If both a writer and a different write limiter are given.
        """
        self.libraries = libraries
        self.taxonomy = taxonomy
        self.task_limiter = task_limiter or ConcurrencyLimiter(name="tasks")
        if writer is None:
            self.write_limiter = write_limiter or ConcurrencyLimiter(name="writes")
            self.writer = SpriteWriter(catalog, self.write_limiter)
        else:
            if write_limiter is not None and write_limiter is not writer.write_limiter:
                raise ValueError("write_limiter must be the injected writer's limiter")
            self.write_limiter = writer.write_limiter
            self.writer = writer
        self.logger = logging.getLogger(__name__)

    def build_tasks(self, library: EmojiLibrary) -> list[SpriteTask]:
        """Enumerate the sprite tasks of one library.

        Args:
            library: The library.

        Returns:
            The ``all`` task, then the group tasks, then the subgroup tasks.
        """
        folder = library.source_dir
        tasks = [SpriteTask(library=library, source_folder=folder, output_name=ALL_SPRITE_NAME)]

        partitions = [
            (GROUP_SUBDIR, "group", self.taxonomy.groups),
            (SUBGROUP_SUBDIR, "subgroup", self.taxonomy.subgroups),
        ]
        for sub_directory, attribute, names in partitions:
            entries: list[tuple[int | None, str]] = sorted(names.items())
            entries.append((None, OTHER_SPRITE_NAME))
            tasks.extend(
                SpriteTask(
                    library=library,
                    source_folder=folder,
                    output_name=name,
                    sub_directory=sub_directory,
                    filter_fn=PartitionFilter(attribute, value),
                )
                for value, name in entries
            )

        return tasks

    def select_libraries(self, selected_library: str | None = None) -> list[EmojiLibrary]:
        """Narrow the libraries to the selected one.

        Args:
            selected_library: Library name, or None for every library.

        Returns:
            The libraries to build.

        Raises:
            UnknownLibraryError: If no library has the selected name.
        """
        if selected_library is None:
            return list(self.libraries)

        selected = [library for library in self.libraries if library.name == selected_library]
        if not selected:
            raise UnknownLibraryError(
                f"Unknown emoji library: {selected_library}",
                {
                    "library": selected_library,
                    "available": [library.name for library in self.libraries],
                },
            )
        return selected

    def enumerate_tasks(self, selected_library: str | None = None) -> list[SpriteTask]:
        """Enumerate the sprite tasks of every selected library.

        Args:
            selected_library: Library name, or None for every library.

        Returns:
            Tasks in library order.
        """
        return [
            task
            for library in self.select_libraries(selected_library)
            for task in self.build_tasks(library)
        ]

    async def run(self, selected_library: str | None = None) -> list[SpriteTask]:
        """Build every sprite of the selected libraries.

        All tasks are submitted at once and admitted by the task limiter.
        The first failure cancels the tasks still running and is raised.

        Args:
            selected_library: Library name, or None for every library.

        Returns:
            The completed tasks.

        Raises:
            UnknownLibraryError: If no library has the selected name.
            SpriteError: If any sprite fails to build.
        """
        tasks = self.enumerate_tasks(selected_library)
        start = time.perf_counter()
        self.logger.info(
            f"Building {len(tasks)} sprites with {self.task_limiter.limit} concurrent tasks "
            f"and {self.write_limiter.limit} concurrent writes"
        )

        running = [
            asyncio.create_task(self.task_limiter.run(self.writer.write, task), name=task.label)
            for task in tasks
        ]
        await gather_fail_fast(running)

        self.logger.info(
            f"Built {len(tasks)} sprites in {format_duration(time.perf_counter() - start)}"
        )
        return tasks
