# Author: PB & Claude
# Maintainer: PB
# Original date: 2026.10.16
# License: (c) HRDAG, 2025, GPL-2 or newer
#
# ------
# src/gittfs/system/logging_setup.py

import sys
from pathlib import Path
from typing import Optional

from loguru import logger

from gittfs.config.manager import UserConfig


def detect_repo_name() -> str:
    """Name used for the log file: the current directory, or 'global'."""
    cwd = Path.cwd()
    if cwd.name:
        return cwd.name
    return "global"


def setup_logging(debug: bool = False, user_config: Optional[UserConfig] = None) -> None:
    """Setup loguru logging for the entire application.

    Configures:
    - Console output: WARNING+ (DEBUG+ with --debug)
    - File output: DEBUG+ if local_log is configured in user config
    """
    logger.remove()

    logger.add(
        sys.stderr,
        level="DEBUG" if debug else "WARNING",
        format="<level>{level}</level>: {message}",
        colorize=True
    )

    if user_config is None or user_config.local_log is None:
        return

    try:
        log_dir = Path(user_config.local_log)
        log_dir.mkdir(parents=True, exist_ok=True)
        log_file = log_dir / f"git-tfs-{detect_repo_name()}.log"

        logger.add(
            log_file,
            level="DEBUG",
            format="{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{function}:{line} - {message}",
            rotation="10 MB",
            retention="30 days",
            compression="gz"
        )
        logger.debug(f"File logging enabled: {log_file}")

    except OSError as e:
        # Don't fail the entire application if logging setup fails
        logger.warning(f"Failed to setup file logging: {e}")
