"""Application-wide constants for the svgmoji sprite builder.

Constants are grouped into the following categories:
- Path Constants: Directory and file names used for sources and outputs
- Partition Constants: Names of the sprite partitions
- Emojibase Constants: CDN locations for emoji metadata
- Sprite Constants: Defaults for the sprite compiler
- Logging Constants: Logger names and size conversions
"""

# Path constants
APP_NAME = "svgmoji"  # Name used for configuration directories
DEFAULT_CONFIG_FILENAME = "svgmoji.yaml"  # Configuration file searched for at startup
DEFAULT_PACKAGES_DIR = "packages"  # Root directory holding one package per library
PACKAGE_DIR_PREFIX = "svgmoji__"  # Package directory is <prefix><library name>
SOURCE_SUBDIR = "svg"  # Per-emoji SVG files inside a library package
SPRITES_SUBDIR = "sprites"  # Sprite output directory inside a library package
SVG_EXTENSION = ".svg"  # Extension of source and sprite files

# Default emoji libraries
DEFAULT_LIBRARIES = ["blob", "noto", "openmoji", "twemoji"]

# Partition constants
ALL_SPRITE_NAME = "all"  # Sprite holding every emoji of a library
OTHER_SPRITE_NAME = "other"  # Sprite for emojis without a group or subgroup
GROUP_SUBDIR = "group"  # Subdirectory for per-group sprites
SUBGROUP_SUBDIR = "subgroup"  # Subdirectory for per-subgroup sprites

# Emojibase constants
EMOJIBASE_CDN_URL = "https://cdn.jsdelivr.net/npm/emojibase-data@{version}"  # jsDelivr package root
EMOJIBASE_DATA_PATH = "{locale}/data.json"  # Emoji records for a locale
EMOJIBASE_GROUPS_PATH = "meta/groups.json"  # Group and subgroup names
DEFAULT_EMOJIBASE_VERSION = "latest"  # Version tag requested from the CDN
DEFAULT_LOCALE = "en"  # Locale requested from the CDN
CDN_TIMEOUT_SECONDS = 30.0  # HTTP timeout for CDN downloads

# Sprite constants
STACK_MODE = "stack"  # Nested <svg> elements toggled with :target
SYMBOL_MODE = "symbol"  # <symbol> elements referenced with <use>
DEFS_MODE = "defs"  # Nested <svg> elements inside <defs>
SPRITE_RESOURCE = "sprite"  # Resource name of the sprite file in a compile result
DEFAULT_VIEW_BOX = "0 0 64 64"  # Used when a shape carries neither viewBox nor size
BUST_HASH_LENGTH = 8  # Hex digits of the content hash added when busting
SVG_NAMESPACE = "http://www.w3.org/2000/svg"
XLINK_NAMESPACE = "http://www.w3.org/1999/xlink"
STACK_STYLE = ":root>svg{display:none}:root>svg:target{display:block}"

# Concurrency constants
RESERVED_CPUS = 1  # Cores left free for the driving event loop
MIN_CONCURRENCY = 1  # Lower bound for limiter size

# Logging constants
LOGGER_NAME = "svgmoji_sprites"  # Root logger configured by setup_logging
BYTES_PER_MEGABYTE = 1024 * 1024  # Bytes in a megabyte
MILLISECONDS_PER_SECOND = 1000  # Milliseconds in a second
SECONDS_PER_MINUTE = 60  # Seconds in a minute
SECONDS_PER_HOUR = 60 * 60  # Seconds in an hour
