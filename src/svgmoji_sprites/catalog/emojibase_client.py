"""Emojibase data sources.

Downloads emoji records and group metadata from the jsDelivr CDN, or reads
them from local files when the configuration points at them.
"""

import asyncio
import logging
from dataclasses import dataclass

import httpx

from svgmoji_sprites.catalog.emoji_catalog import EmojiCatalog, load_taxonomy, parse_taxonomy
from svgmoji_sprites.constants import (
    CDN_TIMEOUT_SECONDS,
    EMOJIBASE_CDN_URL,
    EMOJIBASE_DATA_PATH,
    EMOJIBASE_GROUPS_PATH,
)
from svgmoji_sprites.exceptions import CatalogFetchError, chain_exception
from svgmoji_sprites.models.config import DataConfig
from svgmoji_sprites.models.emoji import GroupTaxonomy
from svgmoji_sprites.utils.file_utils import JsonData, run_blocking

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CatalogSources:
    """Everything the pipeline needs to know about emojis."""

    catalog: EmojiCatalog
    taxonomy: GroupTaxonomy


class EmojibaseClient:
    """Client for the emojibase-data package on jsDelivr."""

    def __init__(self, version: str, timeout: float = CDN_TIMEOUT_SECONDS) -> None:
        """Initialize the client.

        Args:
            version: emojibase-data version or tag, e.g. ``latest`` or ``15.3.0``.
            timeout: HTTP timeout in seconds.
        """
        self.version = version
        self.timeout = timeout
        self.base_url = EMOJIBASE_CDN_URL.format(version=version)

    def url_for(self, path: str) -> str:
        """Build the CDN URL of a file inside the package."""
        return f"{self.base_url}/{path}"

    async def _get_json(self, client: httpx.AsyncClient, path: str) -> JsonData:
        """Fetch and decode one JSON file.

        Raises:
            CatalogFetchError: If the request fails or the body is not JSON.
        """
        url = self.url_for(path)
        try:
            response = await client.get(url)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as e:
            logger.error(f"HTTP error fetching {url}: {e}")
            raise chain_exception(
                CatalogFetchError(
                    "Emojibase request failed",
                    {"url": url},
                    status_code=e.response.status_code,
                ),
                e,
            ) from e
        except httpx.TimeoutException as e:
            logger.error(f"Timeout fetching {url}: {e}")
            raise chain_exception(
                CatalogFetchError(
                    "Emojibase request timed out", {"url": url, "timeout": self.timeout}
                ),
                e,
            ) from e
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Error fetching {url}: {e}")
            raise chain_exception(
                CatalogFetchError("Failed to fetch emojibase data", {"url": url, "error": str(e)}),
                e,
            ) from e

    async def fetch_emoji_data(self, locale: str) -> JsonData:
        """Download the emoji records for a locale.

        Args:
            locale: Emojibase locale, e.g. ``en``.

        Returns:
            The decoded ``data.json`` content.
        """
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            return await self._get_json(client, EMOJIBASE_DATA_PATH.format(locale=locale))

    async def fetch_taxonomy(self) -> GroupTaxonomy:
        """Download the group and subgroup names.

        Returns:
            The parsed group taxonomy.
        """
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            data = await self._get_json(client, EMOJIBASE_GROUPS_PATH)
        return parse_taxonomy(data)


async def load_catalog_sources(config: DataConfig) -> CatalogSources:
    """Load the emoji catalog and group taxonomy.

    Local files configured in ``config`` are read from disk; anything not
    configured is downloaded from the CDN.

    Args:
        config: Emoji metadata configuration.

    Returns:
        The catalog and taxonomy.

    Raises:
        CatalogLoadError: If a local file cannot be parsed.
        CatalogFetchError: If a download fails.
    """
    client = EmojibaseClient(config.emojibase_version)

    async def catalog() -> EmojiCatalog:
        if config.emoji_data is not None:
            return await run_blocking(
                EmojiCatalog.from_file, config.emoji_data, config.exclude_tones
            )
        logger.info(f"Fetching emoji data ({config.locale}) from {client.base_url}")
        records = await client.fetch_emoji_data(config.locale)
        if not isinstance(records, list):
            raise CatalogFetchError(
                "Unexpected emoji data format",
                {"url": client.url_for(EMOJIBASE_DATA_PATH.format(locale=config.locale))},
            )
        return EmojiCatalog.from_records(records, config.exclude_tones)

    async def taxonomy() -> GroupTaxonomy:
        if config.groups_meta is not None:
            return await run_blocking(load_taxonomy, config.groups_meta)
        logger.info(f"Fetching group metadata from {client.base_url}")
        return await client.fetch_taxonomy()

    loaded_catalog, loaded_taxonomy = await asyncio.gather(catalog(), taxonomy())
    return CatalogSources(catalog=loaded_catalog, taxonomy=loaded_taxonomy)
