"""
Configuration management for Songbook
"""

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional


@dataclass
class StorageConfig:
    """Configuration for the on-disk file store."""

    library_dir: str = field(
        default_factory=lambda: str(get_data_dir() / "database")
    )
    favorites_dirname: str = "favorites"
    staging_dirname: str = ".staging"  # Hidden so it never shows up as a song


@dataclass
class UploadConfig:
    """Configuration for the upload gate."""

    allowed_media_types: List[str] = field(
        default_factory=lambda: ["audio/mpeg", "audio/mp3"]
    )
    default_description: str = "No descriptions are here"
    chunk_size: int = 1024 * 1024

    def validate(self) -> None:
        """Validate upload configuration values.

        Raises:
            ValueError: If configuration values are invalid
        """
        if not self.allowed_media_types:
            raise ValueError("allowed_media_types must not be empty")
        if self.chunk_size <= 0:
            raise ValueError(f"chunk_size must be positive, got {self.chunk_size}")


@dataclass
class FavoritesConfig:
    """Configuration for favorites listing."""

    description: str = "Favorite song"
    updated_description: str = "Updated favorite song"


@dataclass
class LoggingConfig:
    """Configuration for logging."""

    level: str = "INFO"  # DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_file: Optional[str] = (
        None  # Custom log file path (default: ~/.local/share/songbook/songbook.log)
    )
    max_file_size_mb: int = 10  # Maximum log file size before rotation
    backup_count: int = 5  # Number of backup files to keep
    console_output: bool = True


@dataclass
class WebConfig:
    """Configuration for the HTTP backend."""

    host: str = "0.0.0.0"
    port: int = 5000
    reload: bool = False
    allowed_origins: List[str] = field(
        default_factory=lambda: ["http://localhost:5173"]
    )


@dataclass
class Config:
    """Main configuration object."""

    storage: StorageConfig = field(default_factory=StorageConfig)
    upload: UploadConfig = field(default_factory=UploadConfig)
    favorites: FavoritesConfig = field(default_factory=FavoritesConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    web: WebConfig = field(default_factory=WebConfig)


def get_config_dir() -> Path:
    """Get the configuration directory path."""
    config_home = os.environ.get("XDG_CONFIG_HOME")
    if config_home:
        return Path(config_home) / "songbook"
    return Path.home() / ".config" / "songbook"


def get_data_dir() -> Path:
    """Get the data directory path."""
    data_home = os.environ.get("XDG_DATA_HOME")
    if data_home:
        return Path(data_home) / "songbook"
    return Path.home() / ".local" / "share" / "songbook"


def get_config_path() -> Path:
    """Get the main configuration file path.

    Checks for config.toml in the following order:
    1. SONGBOOK_CONFIG environment variable
    2. Current working directory
    3. XDG_CONFIG_HOME/songbook (or ~/.config/songbook)
    """
    env_path = os.environ.get("SONGBOOK_CONFIG")
    if env_path:
        return Path(env_path).expanduser()

    local_config = Path.cwd() / "config.toml"
    if local_config.exists():
        return local_config

    return get_config_dir() / "config.toml"


def _section(data: dict, name: str) -> dict:
    section = data.get(name, {})
    if not isinstance(section, dict):
        raise ValueError(f"[{name}] must be a table, got {type(section).__name__}")
    return section


def config_from_dict(data: dict) -> Config:
    """Build a Config from parsed TOML data, using defaults for missing keys."""
    config = Config(
        storage=StorageConfig(**_section(data, "storage")),
        upload=UploadConfig(**_section(data, "upload")),
        favorites=FavoritesConfig(**_section(data, "favorites")),
        logging=LoggingConfig(**_section(data, "logging")),
        web=WebConfig(**_section(data, "web")),
    )
    config.upload.validate()
    return config


def apply_env_overrides(config: Config) -> Config:
    """Apply environment variable overrides on top of file configuration."""
    library_dir = os.environ.get("SONGBOOK_LIBRARY_DIR")
    if library_dir:
        config.storage.library_dir = library_dir

    # CORS: Allow environment override for production
    allowed_origins_env = os.environ.get("ALLOWED_ORIGINS", "")
    if allowed_origins_env:
        config.web.allowed_origins = [
            origin.strip() for origin in allowed_origins_env.split(",") if origin.strip()
        ]

    return config


def load_config(path: Optional[Path] = None) -> Config:
    """Load configuration from TOML, falling back to defaults.

    Args:
        path: Explicit config file path (default: see get_config_path)

    Returns:
        Config with environment overrides applied

    Raises:
        ValueError: If the file contains unknown keys or invalid values
    """
    config_path = path if path is not None else get_config_path()

    if config_path.is_file():
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
        try:
            config = config_from_dict(data)
        except TypeError as e:
            # Unknown keys surface as unexpected dataclass keyword arguments
            raise ValueError(f"Invalid configuration in {config_path}: {e}") from e
    else:
        config = Config()

    return apply_env_overrides(config)


def create_default_config() -> str:
    """Create a default configuration TOML content."""
    return """
# Songbook Configuration

[storage]
# Directory holding uploaded songs (created at startup if missing)
# library_dir = "~/.local/share/songbook/database"

# Sub-directory holding favorite copies
favorites_dirname = "favorites"

# Hidden sub-directory for in-flight uploads
staging_dirname = ".staging"

[upload]
# Declared media types accepted by the upload endpoint
allowed_media_types = ["audio/mpeg", "audio/mp3"]

# Description used when an upload does not provide one
default_description = "No descriptions are here"

[favorites]
# Description shown for every favorite in listings
description = "Favorite song"

# Description echoed back when an update omits one
updated_description = "Updated favorite song"

[logging]
# Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
level = "INFO"

# Custom log file path (default: ~/.local/share/songbook/songbook.log)
# log_file = "/path/to/custom/songbook.log"

# Maximum log file size in MB before rotation
max_file_size_mb = 10

# Number of backup log files to keep
backup_count = 5

# Also output logs to stderr
console_output = true

[web]
host = "0.0.0.0"
port = 5000
reload = false
allowed_origins = ["http://localhost:5173"]
""".strip()
