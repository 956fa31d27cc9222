"""Tests for emojibase data sources."""

# pyright: reportPrivateUsage=false

import json
from collections.abc import Generator
from pathlib import Path
from unittest.mock import AsyncMock, patch

import httpx
import pytest
from httpx import Request, Response

from svgmoji_sprites.catalog.emojibase_client import EmojibaseClient, load_catalog_sources
from svgmoji_sprites.exceptions import CatalogFetchError
from svgmoji_sprites.models.config import DataConfig

DATA_URL = "https://cdn.jsdelivr.net/npm/emojibase-data@15.3.0/en/data.json"
GROUPS_URL = "https://cdn.jsdelivr.net/npm/emojibase-data@15.3.0/meta/groups.json"


def create_mock_response(status_code: int = 200, json_data: object = None) -> Response:
    """Create a mock Response object with properly set request property."""
    response = Response(status_code, json=json_data)
    response._request = Request("GET", "https://cdn.jsdelivr.net")
    return response


@pytest.fixture()
def mock_httpx_client() -> Generator[AsyncMock, None, None]:
    """Mock httpx.AsyncClient to avoid actual HTTP requests."""
    with patch("httpx.AsyncClient") as mock:
        mock_client = AsyncMock()
        mock.return_value.__aenter__.return_value = mock_client
        mock.return_value.__aexit__.return_value = None
        yield mock_client


def test_urls():
    """Test CDN URLs for a pinned version."""
    client = EmojibaseClient("15.3.0")
    assert client.url_for("en/data.json") == DATA_URL
    assert client.url_for("meta/groups.json") == GROUPS_URL


@pytest.mark.asyncio()
async def test_fetch_emoji_data(mock_httpx_client: AsyncMock) -> None:
    """Test downloading emoji records."""
    mock_httpx_client.get.return_value = create_mock_response(200, [{"hexcode": "1F600"}])

    data = await EmojibaseClient("15.3.0").fetch_emoji_data("en")

    assert data == [{"hexcode": "1F600"}]
    mock_httpx_client.get.assert_awaited_once_with(DATA_URL)


@pytest.mark.asyncio()
async def test_fetch_taxonomy(mock_httpx_client: AsyncMock) -> None:
    """Test downloading group metadata."""
    mock_httpx_client.get.return_value = create_mock_response(
        200, {"groups": {"0": "smileys-emotion"}, "subgroups": {"1": "face-affection"}}
    )

    taxonomy = await EmojibaseClient("15.3.0").fetch_taxonomy()

    assert taxonomy.groups == {0: "smileys-emotion"}
    assert taxonomy.subgroups == {1: "face-affection"}
    mock_httpx_client.get.assert_awaited_once_with(GROUPS_URL)


@pytest.mark.asyncio()
async def test_fetch_http_error(mock_httpx_client: AsyncMock) -> None:
    """Test HTTP errors become fetch errors with the status code."""
    mock_httpx_client.get.return_value = create_mock_response(404, {"error": "not found"})

    with pytest.raises(CatalogFetchError) as excinfo:
        await EmojibaseClient("15.3.0").fetch_emoji_data("xx")

    assert excinfo.value.status_code == 404
    assert isinstance(excinfo.value.__cause__, httpx.HTTPStatusError)


@pytest.mark.asyncio()
async def test_fetch_timeout(mock_httpx_client: AsyncMock) -> None:
    """Test timeouts become fetch errors."""
    mock_httpx_client.get.side_effect = httpx.ReadTimeout("timed out")

    with pytest.raises(CatalogFetchError, match="timed out"):
        await EmojibaseClient("15.3.0").fetch_taxonomy()


@pytest.mark.asyncio()
async def test_fetch_connection_error(mock_httpx_client: AsyncMock) -> None:
    """Test transport errors become fetch errors."""
    mock_httpx_client.get.side_effect = httpx.ConnectError("refused")

    with pytest.raises(CatalogFetchError, match="Failed to fetch emojibase data"):
        await EmojibaseClient("15.3.0").fetch_emoji_data("en")


@pytest.mark.asyncio()
async def test_load_catalog_sources_from_files(tmp_path: Path) -> None:
    """Test local files are used without touching the network."""
    data_file = tmp_path / "data.json"
    data_file.write_text(
        json.dumps([{"hexcode": "1F600", "group": 0, "subgroup": 0}]), encoding="utf-8"
    )
    meta_file = tmp_path / "groups.json"
    meta_file.write_text(
        json.dumps({"groups": {"0": "smileys-emotion"}, "subgroups": {"0": "face-smiling"}}),
        encoding="utf-8",
    )

    with patch("httpx.AsyncClient") as mock_client:
        sources = await load_catalog_sources(
            DataConfig(emoji_data=data_file, groups_meta=meta_file)
        )

    mock_client.assert_not_called()
    assert "1F600" in sources.catalog
    assert sources.taxonomy.groups == {0: "smileys-emotion"}


@pytest.mark.asyncio()
async def test_load_catalog_sources_from_cdn(mock_httpx_client: AsyncMock) -> None:
    """Test anything not configured locally is downloaded."""
    responses = {
        DATA_URL: create_mock_response(
            200,
            [
                {
                    "hexcode": "1F44B",
                    "group": 1,
                    "subgroup": 15,
                    "skins": [{"hexcode": "1F44B-1F3FB", "tone": 1}],
                }
            ],
        ),
        GROUPS_URL: create_mock_response(200, {"groups": {"1": "people-body"}, "subgroups": {}}),
    }
    mock_httpx_client.get.side_effect = lambda url: responses[url]

    sources = await load_catalog_sources(DataConfig(emojibase_version="15.3.0"))

    assert len(sources.catalog) == 2
    assert sources.catalog.get("1F44B-1F3FB").subgroup == 15
    assert sources.taxonomy.groups == {1: "people-body"}


@pytest.mark.asyncio()
async def test_load_catalog_sources_exclude_tones(mock_httpx_client: AsyncMock) -> None:
    """Test skin variations can be left out of a downloaded catalog."""
    mock_httpx_client.get.side_effect = lambda url: create_mock_response(
        200,
        [{"hexcode": "1F44B", "skins": [{"hexcode": "1F44B-1F3FB"}]}]
        if url == DATA_URL
        else {"groups": {}, "subgroups": {}},
    )

    sources = await load_catalog_sources(
        DataConfig(emojibase_version="15.3.0", exclude_tones=True)
    )

    assert [emoji.hexcode for emoji in sources.catalog] == ["1F44B"]


@pytest.mark.asyncio()
async def test_load_catalog_sources_unexpected_format(mock_httpx_client: AsyncMock) -> None:
    """Test downloaded emoji data must be a list of records."""
    mock_httpx_client.get.side_effect = lambda url: create_mock_response(
        200, {"emojis": []} if url == DATA_URL else {"groups": {}, "subgroups": {}}
    )

    with pytest.raises(CatalogFetchError, match="Unexpected emoji data format"):
        await load_catalog_sources(DataConfig(emojibase_version="15.3.0"))
