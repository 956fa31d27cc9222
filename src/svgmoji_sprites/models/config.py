"""Configuration models for the svgmoji sprite builder.

Defines Pydantic models for the library registry, emoji metadata sources
and logging, and loads them from a YAML file.
"""

from pathlib import Path

from pydantic import BaseModel, Field, field_validator

from svgmoji_sprites.constants import (
    DEFAULT_EMOJIBASE_VERSION,
    DEFAULT_LIBRARIES,
    DEFAULT_LOCALE,
    DEFAULT_PACKAGES_DIR,
    PACKAGE_DIR_PREFIX,
    SOURCE_SUBDIR,
)
from svgmoji_sprites.models.emoji import EmojiLibrary


def _normalize_path(path: str | Path) -> Path:
    """Convert a string path to a Path object.

    Internal utility function to avoid circular imports with path_resolver.

    Args:
        path: String or Path object

    Returns:
        A Path object.
    """
    return Path(path) if isinstance(path, str) else path


class LibraryConfig(BaseModel):
    """A configured emoji library.

    Directories left unset are derived from the build's packages directory.
    """

    name: str
    source_dir: Path | None = None
    package_root: Path | None = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Validate the library name can be used as a directory name.

        Args:
            v: The library name.

        Returns:
            The stripped library name.

        Raises:
            ValueError: If the name is empty or contains a path separator.
        """
        v = v.strip()
        if not v:
            raise ValueError("Library name must not be empty")
        if "/" in v or "\\" in v:
            raise ValueError("Library name must not contain path separators")
        return v


class DataConfig(BaseModel):
    """Emoji metadata sources.

    Local files take precedence; anything left unset is fetched from the CDN.
    """

    emoji_data: Path | None = None  # emojibase <locale>/data.json
    groups_meta: Path | None = None  # emojibase meta/groups.json
    locale: str = DEFAULT_LOCALE
    emojibase_version: str = DEFAULT_EMOJIBASE_VERSION
    exclude_tones: bool = False


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "INFO"
    file: str | None = None
    format: str = "console"
    max_size_mb: int = 5
    backup_count: int = 3

    @field_validator("format")
    @classmethod
    def validate_format(cls, v: str) -> str:
        """Validate the log format is one of the supported renderers.

        Args:
            v: The log format string.

        Returns:
            The validated log format value.

        Raises:
            ValueError: If the format is not one of the supported types.
        """
        valid_formats = ["console", "json"]
        if v.lower() not in valid_formats:
            raise ValueError(f"Log format must be one of: {', '.join(valid_formats)}")
        return v.lower()


class BuildConfig(BaseModel):
    """Main sprite build configuration."""

    packages_dir: Path = Path(DEFAULT_PACKAGES_DIR)
    libraries: list[LibraryConfig] = Field(
        default_factory=lambda: [LibraryConfig(name=name) for name in DEFAULT_LIBRARIES]
    )
    data: DataConfig = Field(default_factory=DataConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @field_validator("libraries")
    @classmethod
    def validate_unique_libraries(cls, v: list[LibraryConfig]) -> list[LibraryConfig]:
        """Validate that every library name appears only once.

        Two libraries sharing a name would write to the same sprite paths.

        Args:
            v: The configured libraries.

        Returns:
            The validated library list.

        Raises:
            ValueError: If a library name is repeated.
        """
        seen: set[str] = set()
        for library in v:
            if library.name in seen:
                raise ValueError(f"Duplicate library name: {library.name}")
            seen.add(library.name)
        return v

    def emoji_libraries(self) -> list[EmojiLibrary]:
        """Resolve the configured libraries into concrete directories.

        Returns:
            One EmojiLibrary per configured library, in configuration order.
        """
        resolved: list[EmojiLibrary] = []
        for library in self.libraries:
            package_root = library.package_root or (
                self.packages_dir / f"{PACKAGE_DIR_PREFIX}{library.name}"
            )
            source_dir = library.source_dir or package_root / SOURCE_SUBDIR
            resolved.append(
                EmojiLibrary(name=library.name, source_dir=source_dir, package_root=package_root)
            )
        return resolved

    @classmethod
    def from_yaml(cls, config_path: str | Path) -> "BuildConfig":
        """Load configuration from YAML file.

        Args:
            config_path: Path to the YAML configuration file. Can be a string path
                or a Path object.

        Returns:
            An initialized BuildConfig object with values from the YAML file.

        Raises:
            FileNotFoundError: If the specified config file doesn't exist.
            yaml.YAMLError: If the YAML file has invalid syntax.
            ValidationError: If the configuration values don't match the expected schema.
        """
        import yaml

        # Use direct import to avoid circular imports
        from svgmoji_sprites.utils.file_utils import read_text

        path = _normalize_path(config_path)

        config_data = yaml.safe_load(read_text(path)) or {}

        return cls.model_validate(config_data)
