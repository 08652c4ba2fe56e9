"""Core infrastructure layer - no business logic dependencies.

This module provides foundation-level services:
- Configuration management (TOML)
- Logging (Loguru)
- Path security checks

Clean architecture principle: The core layer has no dependencies on
domain or application layers.
"""

# Configuration
from .config import (
    Config,
    load_config,
    get_config_dir,
    get_config_path,
    get_data_dir,
    create_default_config,
)

# Logging
from .output import setup_loguru

# Path security
from .path_security import safe_basename, is_path_within_root, resolve_in_root

__all__ = [
    # Config
    "Config",
    "load_config",
    "get_config_dir",
    "get_config_path",
    "get_data_dir",
    "create_default_config",
    # Logging
    "setup_loguru",
    # Path security
    "safe_basename",
    "is_path_within_root",
    "resolve_in_root",
]
