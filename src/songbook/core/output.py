"""
Logging setup using Loguru.
Routes application logs to a rotating file and, optionally, stderr.
"""

import sys
from pathlib import Path
from typing import Optional

from loguru import logger

from .config import LoggingConfig, get_data_dir

FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{line} | {message}"
CONSOLE_FORMAT = "<level>{level: <8}</level> | {message}"


def get_log_file_path() -> Path:
    """Get the path to the default log file."""
    return get_data_dir() / "songbook.log"


def setup_loguru(config: LoggingConfig, log_file: Optional[Path] = None) -> Path:
    """
    Configure loguru sinks from logging configuration.

    Args:
        config: Logging section of the application config
        log_file: Override for the log file path

    Returns:
        The path of the file sink
    """
    if log_file is None:
        log_file = Path(config.log_file).expanduser() if config.log_file else get_log_file_path()
    log_file.parent.mkdir(parents=True, exist_ok=True)

    level = config.level.upper()

    # Remove default handler
    logger.remove()

    logger.add(
        log_file,
        rotation=f"{config.max_file_size_mb} MB",
        retention=config.backup_count,
        level=level,
        format=FILE_FORMAT,
        enqueue=False,  # Synchronous writes (thread-safe but blocking)
    )

    if config.console_output:
        logger.add(sys.stderr, level=level, format=CONSOLE_FORMAT)

    logger.info(f"Loguru initialized: {log_file} (level={level})")
    return log_file
