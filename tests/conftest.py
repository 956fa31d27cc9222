"""Common fixtures for testing the sprite builder."""

from collections.abc import Callable
from pathlib import Path

import pytest

from svgmoji_sprites.catalog.emoji_catalog import EmojiCatalog
from svgmoji_sprites.models.emoji import EmojiLibrary, FlatEmoji, GroupTaxonomy

SvgFactory = Callable[[str], str]


def make_svg(marker: str, view_box: str = "0 0 36 36") -> str:
    """Build a small SVG whose path carries a recognizable marker."""
    return (
        f'<svg xmlns="http://www.w3.org/2000/svg" viewBox="{view_box}">'
        f'<path data-marker="{marker}" d="M0 0h36v36H0z"/>'
        "</svg>"
    )


@pytest.fixture()
def svg() -> SvgFactory:
    """Factory for marker SVG documents."""
    return make_svg


@pytest.fixture()
def taxonomy() -> GroupTaxonomy:
    """Two groups and two subgroups."""
    return GroupTaxonomy(
        groups={0: "smileys-emotion", 1: "people-body"},
        subgroups={0: "face-smiling", 15: "hand-fingers-open"},
    )


@pytest.fixture()
def catalog() -> EmojiCatalog:
    """A catalog mixing grouped and ungrouped emojis."""
    return EmojiCatalog(
        [
            FlatEmoji(hexcode="1F600", group=0, subgroup=0),
            FlatEmoji(hexcode="1F601", group=0, subgroup=0),
            FlatEmoji(hexcode="1F44B", group=1, subgroup=15),
            FlatEmoji(hexcode="1F3FB", group=None, subgroup=None),
            FlatEmoji(hexcode="1F44B-1F3FB", group=1, subgroup=None),
        ]
    )


@pytest.fixture()
def library(tmp_path: Path) -> EmojiLibrary:
    """A library rooted in a temporary packages directory with an empty source folder."""
    package_root = tmp_path / "packages" / "svgmoji__demo"
    source_dir = package_root / "svg"
    source_dir.mkdir(parents=True)
    return EmojiLibrary(name="demo", source_dir=source_dir, package_root=package_root)


@pytest.fixture()
def populate(library: EmojiLibrary) -> Callable[..., None]:
    """Write marker SVG files named after hexcodes into the library's source folder."""

    def _populate(*hexcodes: str) -> None:
        for hexcode in hexcodes:
            (library.source_dir / f"{hexcode}.svg").write_text(make_svg(hexcode), encoding="utf-8")

    return _populate
