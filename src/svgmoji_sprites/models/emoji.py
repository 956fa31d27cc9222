"""Emoji data models.

Defines Pydantic models for the flattened emoji records supplied by the
catalog, the icon libraries sprites are built for, and the group taxonomy,
plus the ephemeral task description consumed by the sprite writer.
"""

from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from svgmoji_sprites.constants import SPRITES_SUBDIR, SVG_EXTENSION


class FlatEmoji(BaseModel):
    """A single emoji record with skin variations flattened out."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    hexcode: str
    group: int | None = None
    subgroup: int | None = None
    emoji: str | None = None
    label: str | None = None
    annotation: str | None = None
    tags: list[str] = Field(default_factory=list)
    shortcodes: list[str] = Field(default_factory=list)
    order: int | None = None
    tone: int | list[int] | None = None


class EmojiLibrary(BaseModel):
    """An icon library and the directories it reads from and writes to."""

    name: str
    source_dir: Path  # Holds one <hexcode>.svg per emoji
    package_root: Path

    @property
    def sprites_dir(self) -> Path:
        """Root directory for every sprite built for this library."""
        return self.package_root / SPRITES_SUBDIR


class GroupTaxonomy(BaseModel):
    """Names of the emoji groups and subgroups keyed by numeric id."""

    groups: dict[int, str] = Field(default_factory=dict)
    subgroups: dict[int, str] = Field(default_factory=dict)


EmojiFilter = Callable[[FlatEmoji], bool]


def accept_all(emoji: FlatEmoji) -> bool:
    """Filter that keeps every emoji."""
    return True


@dataclass(frozen=True)
class SpriteTask:
    """One sprite sheet to build for one library.

    Attributes:
        library: Library the sprite belongs to
        source_folder: Directory scanned for per-emoji SVG files
        output_name: Sprite file name without extension
        sub_directory: Optional directory below the library's sprites root
        filter_fn: Predicate selecting the emojis included in the sprite
    """

    library: EmojiLibrary
    source_folder: Path
    output_name: str
    sub_directory: str | None = None
    filter_fn: EmojiFilter = accept_all

    @property
    def destination(self) -> Path:
        """Directory the sprite is written to."""
        if self.sub_directory:
            return self.library.sprites_dir / self.sub_directory
        return self.library.sprites_dir

    @property
    def sprite_path(self) -> Path:
        """Full path of the compiled sprite sheet."""
        return self.destination / f"{self.output_name}{SVG_EXTENSION}"

    @property
    def label(self) -> str:
        """Short human-readable name used in log messages."""
        parts = [self.library.name, self.sub_directory, self.output_name]
        return "/".join(part for part in parts if part)
