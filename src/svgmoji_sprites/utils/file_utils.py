"""File system abstraction for the svgmoji sprite builder.

Provides a consistent interface for the file system operations the build
performs: listing source folders, reading source shapes and metadata, and
writing sprite output. Each function is synchronous; async callers run them
in an executor through ``run_blocking``.
"""

import asyncio
import functools
import json
from collections.abc import Callable
from pathlib import Path
from typing import Any, TypeVar

from svgmoji_sprites.utils.path_utils import path_resolver

# Type aliases for clarity and documentation
PathLike = str | Path
JsonData = dict[str, Any] | list[Any]
T = TypeVar("T")  # Generic type for type-preserving operations


def read_text(file_path: PathLike) -> str:
    """Read text content from a file.

    Args:
        file_path: Path to the file (string or Path object)

    Returns:
        The text content of the file

    Raises:
        FileNotFoundError: If the file does not exist
        PermissionError: If the file cannot be read due to permissions
        UnicodeDecodeError: If the file content cannot be decoded as text
    """
    normalized_path = path_resolver.normalize_path(file_path)
    with open(normalized_path, encoding="utf-8") as f:
        return f.read()


def read_json(file_path: PathLike) -> JsonData:
    """Read and parse JSON content from a file.

    Args:
        file_path: Path to the JSON file (string or Path object)

    Returns:
        The parsed JSON data as a dictionary or list

    Raises:
        FileNotFoundError: If the file does not exist
        json.JSONDecodeError: If the file content is not valid JSON
        PermissionError: If the file cannot be read due to permissions
    """
    normalized_path = path_resolver.normalize_path(file_path)
    with open(normalized_path, encoding="utf-8") as f:
        return json.load(f)


def write_bytes(file_path: PathLike, content: bytes, make_dirs: bool = True) -> None:
    """Write binary content to a file.

    Args:
        file_path: Path to the file (string or Path object)
        content: Binary content to write
        make_dirs: Whether to create parent directories if they don't exist

    Raises:
        FileNotFoundError: If the parent directory does not exist and make_dirs is False
        PermissionError: If the file cannot be written due to permissions
    """
    normalized_path = path_resolver.normalize_path(file_path)

    if make_dirs:
        ensure_dir_exists(normalized_path.parent)

    with open(normalized_path, "wb") as f:
        f.write(content)


def ensure_dir_exists(dir_path: PathLike) -> Path:
    """Ensure a directory exists, creating it and its parents if necessary.

    Args:
        dir_path: Directory path (string or Path object)

    Returns:
        Path to the directory

    Raises:
        PermissionError: If the directory cannot be created due to permissions
        FileExistsError: If the path exists and is not a directory
    """
    normalized_path = path_resolver.normalize_path(dir_path)
    normalized_path.mkdir(parents=True, exist_ok=True)
    return normalized_path


def list_dir(dir_path: PathLike) -> list[str]:
    """List the entry names of a directory in sorted order.

    Args:
        dir_path: Path to the directory (string or Path object)

    Returns:
        Sorted entry names (files and directories, not recursive)

    Raises:
        FileNotFoundError: If the directory does not exist
        NotADirectoryError: If the path exists but is not a directory
    """
    normalized_path = path_resolver.normalize_path(dir_path)

    if not normalized_path.exists():
        raise FileNotFoundError(f"Directory not found: {normalized_path}")

    if not normalized_path.is_dir():
        raise NotADirectoryError(f"Not a directory: {normalized_path}")

    return sorted(entry.name for entry in normalized_path.iterdir())


async def run_blocking(func: Callable[..., T], *args: Any, **kwargs: Any) -> T:
    """Run a blocking file operation in the default executor.

    Args:
        func: Synchronous callable to run
        *args: Positional arguments for the callable
        **kwargs: Keyword arguments for the callable

    Returns:
        The callable's return value
    """
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, functools.partial(func, *args, **kwargs))
