"""Emoji catalog and group taxonomy.

The catalog answers one question for the sprite writer: which emoji record,
if any, belongs to a source file's hexcode. Records come from emojibase
``data.json`` files whose skin tone variations are nested under ``skins``;
they are flattened so every variation can be looked up directly.
"""

import json
import logging
from collections.abc import Iterable, Iterator
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from svgmoji_sprites.exceptions import CatalogLoadError, chain_exception
from svgmoji_sprites.models.emoji import FlatEmoji, GroupTaxonomy
from svgmoji_sprites.utils.file_utils import JsonData, read_json

logger = logging.getLogger(__name__)


def flatten_emoji_data(
    records: Iterable[dict[str, Any]], exclude_tones: bool = False
) -> list[dict[str, Any]]:
    """Flatten nested skin variations into a single list of records.

    Skins inherit the group, subgroup and tags of the emoji they belong to
    unless they carry their own.

    Args:
        records: Raw emojibase records.
        exclude_tones: Drop skin variations instead of flattening them.

    Returns:
        Records without ``skins`` keys, each parent followed by its skins.
    """
    flattened: list[dict[str, Any]] = []

    for record in records:
        emoji = {key: value for key, value in record.items() if key != "skins"}
        emoji.setdefault("tags", [])
        flattened.append(emoji)

        if exclude_tones:
            continue

        for skin in record.get("skins") or []:
            flat_skin = dict(skin)
            flat_skin.pop("skins", None)
            for key in ("group", "subgroup", "tags"):
                if flat_skin.get(key) is None and emoji.get(key) is not None:
                    flat_skin[key] = emoji[key]
            flattened.append(flat_skin)

    return flattened


def _records_from_json(data: JsonData) -> list[dict[str, Any]]:
    """Accept either a bare list of records or an object with an ``emojis`` list."""
    if isinstance(data, dict):
        data = data.get("emojis", [])
    if not isinstance(data, list):
        raise TypeError(f"Expected a list of emoji records, got {type(data).__name__}")
    return data


class EmojiCatalog:
    """Read-only hexcode index over flattened emoji records.

    When a hexcode appears more than once the first record wins.
    """

    def __init__(self, emojis: Iterable[FlatEmoji]) -> None:
        """Index the given records by hexcode.

        Args:
            emojis: Flattened emoji records.
        """
        self._emojis: dict[str, FlatEmoji] = {}
        for emoji in emojis:
            self._emojis.setdefault(emoji.hexcode, emoji)

    @classmethod
    def from_records(
        cls, records: Iterable[dict[str, Any]], exclude_tones: bool = False
    ) -> "EmojiCatalog":
        """Build a catalog from raw emojibase records.

        Args:
            records: Raw records, possibly with nested skins.
            exclude_tones: Drop skin variations.

        Returns:
            A populated catalog.

        Raises:
            CatalogLoadError: If a record does not match the emoji schema.
        """
        try:
            emojis = [
                FlatEmoji.model_validate(record)
                for record in flatten_emoji_data(records, exclude_tones)
            ]
        except (ValidationError, TypeError, AttributeError) as e:
            raise chain_exception(
                CatalogLoadError("Invalid emoji record", {"error": str(e)}), e
            ) from e
        return cls(emojis)

    @classmethod
    def from_file(cls, path: Path, exclude_tones: bool = False) -> "EmojiCatalog":
        """Load a catalog from an emojibase ``data.json`` file.

        Args:
            path: Path of the data file.
            exclude_tones: Drop skin variations.

        Returns:
            A populated catalog.

        Raises:
            CatalogLoadError: If the file cannot be read or parsed.
        """
        try:
            records = _records_from_json(read_json(path))
        except (OSError, json.JSONDecodeError, TypeError) as e:
            raise chain_exception(
                CatalogLoadError("Failed to load emoji data", {"path": str(path), "error": str(e)}),
                e,
            ) from e

        catalog = cls.from_records(records, exclude_tones)
        logger.info(f"Loaded {len(catalog)} emojis from {path}")
        return catalog

    def get(self, hexcode: str) -> FlatEmoji | None:
        """Look up the record for a hexcode.

        Args:
            hexcode: Canonical emoji hexcode, e.g. ``1F600``.

        Returns:
            The matching record, or None when the catalog has no such emoji.
        """
        return self._emojis.get(hexcode)

    def __contains__(self, hexcode: object) -> bool:
        return hexcode in self._emojis

    def __iter__(self) -> Iterator[FlatEmoji]:
        return iter(self._emojis.values())

    def __len__(self) -> int:
        return len(self._emojis)


def parse_taxonomy(data: JsonData) -> GroupTaxonomy:
    """Parse emojibase group metadata.

    Args:
        data: Parsed ``meta/groups.json`` content.

    Returns:
        The group taxonomy with integer ids.

    Raises:
        CatalogLoadError: If the data does not describe groups and subgroups.
    """
    if not isinstance(data, dict):
        raise CatalogLoadError(
            "Invalid group metadata", {"expected": "object", "received": type(data).__name__}
        )
    try:
        return GroupTaxonomy.model_validate(
            {"groups": data.get("groups", {}), "subgroups": data.get("subgroups", {})}
        )
    except ValidationError as e:
        raise chain_exception(
            CatalogLoadError("Invalid group metadata", {"error": str(e)}), e
        ) from e


def load_taxonomy(path: Path) -> GroupTaxonomy:
    """Load the group taxonomy from a ``groups.json`` file.

    Args:
        path: Path of the metadata file.

    Returns:
        The group taxonomy.

    Raises:
        CatalogLoadError: If the file cannot be read or parsed.
    """
    try:
        data = read_json(path)
    except (OSError, json.JSONDecodeError) as e:
        raise chain_exception(
            CatalogLoadError("Failed to load group metadata", {"path": str(path), "error": str(e)}),
            e,
        ) from e
    return parse_taxonomy(data)
