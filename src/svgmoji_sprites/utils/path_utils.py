"""Path utility module for the svgmoji sprite builder.

Provides centralized path resolution so the CLI, configuration loading and
tests agree on where configuration files live and how paths are normalized.
"""

from pathlib import Path

from svgmoji_sprites.constants import APP_NAME, DEFAULT_CONFIG_FILENAME, SVG_EXTENSION
from svgmoji_sprites.exceptions import ConfigFileNotFoundError


class PathResolver:
    """Centralized utility for path resolution and management.

    Attributes:
        project_root: The project root directory
        user_config_dir: User-specific configuration directory
    """

    def __init__(self) -> None:
        """Initialize the path resolver.

        Determines the project root and configuration directories. Unlike a
        long-running service nothing is created on disk here.
        """
        self.project_root = self._find_project_root()
        self.user_config_dir = Path.home() / f".config/{APP_NAME}"

    def _find_project_root(self) -> Path:
        """Find the project root directory.

        Climbs up from this module's directory to the parent of ``src``.

        Returns:
            The project root directory path.
        """
        current_dir = Path(__file__).parent

        while current_dir.name != "src" and current_dir.parent != current_dir:
            current_dir = current_dir.parent

        if current_dir.name == "src":
            return current_dir.parent

        # Fallback to the directory containing the package
        return Path(__file__).parent.parent.parent

    def config_candidates(self, config_filename: str = DEFAULT_CONFIG_FILENAME) -> list[Path]:
        """List configuration file locations in priority order.

        1. Current working directory
        2. User's configuration directory
        3. Project root directory

        Args:
            config_filename: Name of the configuration file

        Returns:
            Candidate paths, highest priority first.
        """
        return [
            Path.cwd() / config_filename,
            self.user_config_dir / config_filename,
            self.project_root / config_filename,
        ]

    def get_config_path(self, config_filename: str = DEFAULT_CONFIG_FILENAME) -> Path | None:
        """Get the path to the first existing configuration file.

        Args:
            config_filename: Name of the configuration file

        Returns:
            Path to the configuration file if found, otherwise None.
        """
        for path in self.config_candidates(config_filename):
            if path.is_file():
                return path
        return None

    def normalize_path(self, path: str | Path) -> Path:
        """Convert a string path to a Path object.

        Args:
            path: String or Path object

        Returns:
            A Path object.
        """
        return Path(path) if isinstance(path, str) else path


# Create a global instance for easy import
path_resolver = PathResolver()


def shape_id_from_path(path: str | Path) -> str:
    """Derive a sprite shape id from a source file path.

    The id is the file name without its ``.svg`` extension, so
    ``/icons/1F600.svg`` becomes ``1F600``.

    Args:
        path: Path of the source SVG file

    Returns:
        The shape id.
    """
    name = Path(path).name
    if name.endswith(SVG_EXTENSION):
        return name[: -len(SVG_EXTENSION)]
    return name


def validate_config_path(config_path: str | Path | None = None) -> Path | None:
    """Validate and resolve the configuration file path.

    An explicitly requested file must exist. Without one, the standard
    locations are searched and None is returned when nothing is found, in
    which case the built-in defaults apply.

    Args:
        config_path: Optional path to configuration file

    Returns:
        Resolved Path to the configuration file, or None.

    Raises:
        ConfigFileNotFoundError: If an explicitly requested file does not exist.
    """
    if config_path is None:
        return path_resolver.get_config_path()

    resolved_path = path_resolver.normalize_path(config_path)
    if not resolved_path.is_file():
        raise ConfigFileNotFoundError(
            "Configuration file not found",
            {"path": str(resolved_path)},
        )
    return resolved_path
