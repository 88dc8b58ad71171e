# Author: PB & Claude
# Maintainer: PB
# Original date: 2026.10.16
# License: (c) HRDAG, 2025, GPL-2 or newer
#
# ------
# src/gittfs/config/manager.py

from __future__ import annotations

import os
from pathlib import Path
from typing import Final, Optional

import yaml
from loguru import logger
from pydantic import BaseModel, Field, ValidationError

from gittfs.system.exceptions import ConfigError


# ---- Constants ----

USER_CFG: Final = "gittfs.yml"
DEFAULT_GIT_DIR: Final = ".git"
DEFAULT_REMOTE_ID: Final = "default"

GIT_DIR_ENV: Final = "GIT_DIR"
AUTHORS_FILE_ENV: Final = "GIT_TFS_AUTHORS"
CONFIG_HOME_ENV: Final = "GITTFS_CONFIG_HOME"


def _get_user_config_search_paths() -> tuple[Path, ...]:
    """Get config file search paths (ordered by priority: lowest to highest).

    Evaluated at call time so environment changes are honoured.
    """
    return (
        Path("/etc/gittfs") / USER_CFG,
        Path.home() / ".config" / "gittfs" / USER_CFG,
        Path(os.getenv("XDG_CONFIG_HOME", "")) / "gittfs" / USER_CFG,
        Path(os.getenv(CONFIG_HOME_ENV, "")) / USER_CFG,
    )


def _load_merged_config_data(candidates: tuple[Path, ...]) -> dict:
    """Load and merge config data from candidate paths.

    Files that are missing or cannot be read are skipped; later files
    override keys of earlier ones.
    """
    merged_data = {}
    found_configs = []

    for candidate in candidates:
        # Unset environment variables produce relative paths; skip them
        if not candidate.is_absolute() or not candidate.exists():
            continue
        try:
            with candidate.open("r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            logger.warning(f"Failed to load config from {candidate}: {e}")
            continue
        if not isinstance(data, dict):
            logger.warning(f"Ignoring config {candidate}: expected a mapping")
            continue
        merged_data.update(data)
        found_configs.append(str(candidate))
        logger.debug(f"Loaded config from {candidate}")

    if found_configs:
        logger.debug(f"Merged config from: {', '.join(found_configs)}")
    return merged_data


# ---- User Config Model ----

class UserConfig(BaseModel):
    """Per-user settings for git-tfs."""

    # Directory for DEBUG log files
    local_log: Optional[Path] = None

    # Entry point name of the TFS sync engine to use
    sync_engine: Optional[str] = None

    default_remote_id: str = Field(default=DEFAULT_REMOTE_ID, min_length=1)


def load_merged_user_config() -> UserConfig:
    """Load and merge user config from all locations; defaults when none exist."""
    merged_data = _load_merged_config_data(_get_user_config_search_paths())
    try:
        return UserConfig.model_validate(merged_data)
    except ValidationError as e:
        raise ConfigError(f"Invalid git-tfs configuration: {e}") from e


# ---- Environment Overrides ----

def git_dir_override() -> Optional[str]:
    """Control directory location forced through GIT_DIR, if any."""
    return os.environ.get(GIT_DIR_ENV) or None


def authors_file_override() -> Optional[str]:
    """Authors file location forced through GIT_TFS_AUTHORS, if any."""
    return os.environ.get(AUTHORS_FILE_ENV) or None
