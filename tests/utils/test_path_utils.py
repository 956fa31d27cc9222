"""Test module for path utilities."""

from pathlib import Path
from unittest.mock import patch

import pytest

from svgmoji_sprites.exceptions import ConfigFileNotFoundError
from svgmoji_sprites.utils.path_utils import (
    PathResolver,
    path_resolver,
    shape_id_from_path,
    validate_config_path,
)


class TestPathResolver:
    """Test the PathResolver class."""

    def test_find_project_root(self):
        """Test the project root is the parent of src."""
        resolver = PathResolver()

        assert (resolver.project_root / "src").is_dir()
        assert (resolver.project_root / "pyproject.toml").exists()

    def test_user_config_dir(self):
        """Test the user configuration directory lives under ~/.config."""
        resolver = PathResolver()

        assert resolver.user_config_dir == Path.home() / ".config" / "svgmoji"

    def test_config_candidates_order(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        """Test the working directory is searched first."""
        monkeypatch.chdir(tmp_path)
        resolver = PathResolver()

        candidates = resolver.config_candidates("custom.yaml")

        assert candidates == [
            tmp_path / "custom.yaml",
            resolver.user_config_dir / "custom.yaml",
            resolver.project_root / "custom.yaml",
        ]

    def test_get_config_path_found(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        """Test the first existing candidate is returned."""
        monkeypatch.chdir(tmp_path)
        (tmp_path / "svgmoji.yaml").write_text("libraries: []\n", encoding="utf-8")

        assert PathResolver().get_config_path() == tmp_path / "svgmoji.yaml"

    def test_get_config_path_missing(self, tmp_path: Path):
        """Test None is returned when no candidate exists."""
        resolver = PathResolver()

        with patch.object(
            PathResolver, "config_candidates", return_value=[tmp_path / "svgmoji.yaml"]
        ):
            assert resolver.get_config_path() is None

    def test_normalize_path(self):
        """Test strings become paths and paths pass through."""
        path = Path("/tmp/sprites")

        assert path_resolver.normalize_path("/tmp/sprites") == path
        assert path_resolver.normalize_path(path) is path


@pytest.mark.parametrize(
    ("path", "expected"),
    [
        ("1F600.svg", "1F600"),
        ("/packages/svgmoji__noto/svg/1F44B-1F3FB.svg", "1F44B-1F3FB"),
        (Path("svg/1F1E6-1F1E8.svg"), "1F1E6-1F1E8"),
        ("README", "README"),
    ],
)
def test_shape_id_from_path(path: str | Path, expected: str):
    """Test shape ids are file names without the svg extension."""
    assert shape_id_from_path(path) == expected


class TestValidateConfigPath:
    """Test configuration path validation."""

    def test_explicit_existing(self, tmp_path: Path):
        """Test an existing explicit path is returned."""
        config_file = tmp_path / "build.yaml"
        config_file.write_text("{}", encoding="utf-8")

        assert validate_config_path(str(config_file)) == config_file

    def test_explicit_missing(self, tmp_path: Path):
        """Test a missing explicit path raises."""
        with pytest.raises(ConfigFileNotFoundError) as excinfo:
            validate_config_path(tmp_path / "missing.yaml")

        assert excinfo.value.details["path"] == str(tmp_path / "missing.yaml")

    def test_search_default_locations(self):
        """Test no explicit path falls back to the search."""
        with patch.object(path_resolver, "get_config_path", return_value=None) as mock_search:
            assert validate_config_path() is None

        mock_search.assert_called_once_with()
