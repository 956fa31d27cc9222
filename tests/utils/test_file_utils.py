"""Test module for file system utilities."""

import json
import threading
from pathlib import Path

import pytest

from svgmoji_sprites.utils import file_utils


class TestFileUtils:
    """Test the file_utils module."""

    def test_read_text(self, tmp_path: Path):
        """Test reading text from a file."""
        temp_file = tmp_path / "1F600.svg"
        temp_file.write_text("<svg/>", encoding="utf-8")

        assert file_utils.read_text(str(temp_file)) == "<svg/>"

    def test_read_text_nonexistent_file(self, tmp_path: Path):
        """Test reading text from a nonexistent file."""
        with pytest.raises(FileNotFoundError):
            file_utils.read_text(tmp_path / "missing.svg")

    def test_read_json(self, tmp_path: Path):
        """Test reading JSON data from a file."""
        data = {"groups": {"0": "smileys-emotion"}}
        temp_file = tmp_path / "groups.json"
        temp_file.write_text(json.dumps(data), encoding="utf-8")

        assert file_utils.read_json(temp_file) == data

    def test_read_json_invalid(self, tmp_path: Path):
        """Test reading invalid JSON."""
        temp_file = tmp_path / "data.json"
        temp_file.write_text("{not json", encoding="utf-8")

        with pytest.raises(json.JSONDecodeError):
            file_utils.read_json(temp_file)

    def test_write_bytes_creates_parents(self, tmp_path: Path):
        """Test writing bytes creates missing parent directories."""
        temp_file = tmp_path / "sprites" / "group" / "other.svg"

        file_utils.write_bytes(temp_file, b"<svg/>")

        assert temp_file.read_bytes() == b"<svg/>"

    def test_write_bytes_without_make_dirs(self, tmp_path: Path):
        """Test writing bytes into a missing directory fails without make_dirs."""
        with pytest.raises(FileNotFoundError):
            file_utils.write_bytes(tmp_path / "missing" / "all.svg", b"<svg/>", make_dirs=False)

    def test_write_bytes_overwrites(self, tmp_path: Path):
        """Test an existing file is replaced."""
        temp_file = tmp_path / "all.svg"
        temp_file.write_bytes(b"old")

        file_utils.write_bytes(temp_file, b"new", make_dirs=False)

        assert temp_file.read_bytes() == b"new"

    def test_ensure_dir_exists(self, tmp_path: Path):
        """Test nested directories are created and existing ones accepted."""
        directory = tmp_path / "sprites" / "subgroup"

        assert file_utils.ensure_dir_exists(directory) == directory
        assert directory.is_dir()
        assert file_utils.ensure_dir_exists(str(directory)) == directory

    def test_ensure_dir_exists_over_file(self, tmp_path: Path):
        """Test a file in the way of a directory raises."""
        blocker = tmp_path / "sprites"
        blocker.write_text("", encoding="utf-8")

        with pytest.raises(FileExistsError):
            file_utils.ensure_dir_exists(blocker)

    def test_list_dir_sorted(self, tmp_path: Path):
        """Test entries are listed by name."""
        for name in ("1F601.svg", "1F3FB.svg", "1F600.svg"):
            (tmp_path / name).write_text("", encoding="utf-8")
        (tmp_path / "nested").mkdir()

        assert file_utils.list_dir(tmp_path) == ["1F3FB.svg", "1F600.svg", "1F601.svg", "nested"]

    def test_list_dir_missing(self, tmp_path: Path):
        """Test listing a missing directory."""
        with pytest.raises(FileNotFoundError):
            file_utils.list_dir(tmp_path / "missing")

    def test_list_dir_not_a_directory(self, tmp_path: Path):
        """Test listing a file."""
        temp_file = tmp_path / "all.svg"
        temp_file.write_text("", encoding="utf-8")

        with pytest.raises(NotADirectoryError):
            file_utils.list_dir(temp_file)


class TestRunBlocking:
    """Test running file operations off the event loop."""

    @pytest.mark.asyncio()
    async def test_runs_in_worker_thread(self) -> None:
        """Test the callable runs outside the event loop thread."""
        loop_thread = threading.get_ident()

        worker_thread = await file_utils.run_blocking(threading.get_ident)

        assert worker_thread != loop_thread

    @pytest.mark.asyncio()
    async def test_passes_arguments(self, tmp_path: Path) -> None:
        """Test positional and keyword arguments reach the callable."""
        temp_file = tmp_path / "all.svg"

        await file_utils.run_blocking(file_utils.write_bytes, temp_file, b"<svg/>", make_dirs=False)

        assert temp_file.read_bytes() == b"<svg/>"

    @pytest.mark.asyncio()
    async def test_propagates_errors(self, tmp_path: Path) -> None:
        """Test exceptions raised by the callable reach the caller."""
        with pytest.raises(FileNotFoundError):
            await file_utils.run_blocking(file_utils.list_dir, tmp_path / "missing")
