# Author: PB & Claude
# Maintainer: PB
# Original date: 2026.10.16
# License: (c) HRDAG, 2025, GPL-2 or newer
#
# ------
# src/gittfs/core/sync_engine.py

from importlib.metadata import EntryPoint, entry_points
from typing import Optional

from loguru import logger

from gittfs.config.manager import UserConfig
from gittfs.core.protocols import SyncEngine
from gittfs.system.exceptions import SyncEngineUnavailableError

ENTRY_POINT_GROUP = "gittfs.sync_engines"


def available_sync_engines() -> dict[str, EntryPoint]:
    return {ep.name: ep for ep in entry_points(group=ENTRY_POINT_GROUP)}


def load_sync_engine(user_config: UserConfig, engines: Optional[dict[str, EntryPoint]] = None) -> SyncEngine:
    """Instantiate the configured sync engine, or the only installed one.

    Raises:
        SyncEngineUnavailableError: If no engine (or not the configured one) is installed
    """
    engines = available_sync_engines() if engines is None else engines

    if user_config.sync_engine:
        entry_point = engines.get(user_config.sync_engine)
        if entry_point is None:
            raise SyncEngineUnavailableError(
                f"Sync engine '{user_config.sync_engine}' is configured but not installed "
                f"(installed: {', '.join(sorted(engines)) or 'none'})"
            )
    elif len(engines) == 1:
        entry_point = next(iter(engines.values()))
    elif not engines:
        raise SyncEngineUnavailableError(
            f"No TFS sync engine installed; install a package providing the '{ENTRY_POINT_GROUP}' entry point"
        )
    else:
        raise SyncEngineUnavailableError(
            f"Several TFS sync engines installed ({', '.join(sorted(engines))}); "
            "set 'sync_engine' in gittfs.yml"
        )

    logger.debug(f"Loading sync engine {entry_point.name} ({entry_point.value})")
    factory = entry_point.load()
    return factory()
