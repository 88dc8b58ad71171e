# Author: PB & Claude
# Maintainer: PB
# Original date: 2026.10.16
# License: (c) HRDAG, 2025, GPL-2 or newer
#
# ------
# src/gittfs/core/remote_detection.py

"""Choosing the tfs remote to work with when -I/--auto-remote is given."""

from typing import Optional

from loguru import logger
from rich.console import Console
from rich.markup import escape

from gittfs.core.globals import ProcessContext
from gittfs.system.exceptions import (
    AmbiguousRemoteError,
    ConfigurationConflictError,
    NoRemoteDefinedError,
    RepositoryNotFoundError,
)


def auto_detect_remote(context: ProcessContext, console: Console) -> Optional[str]:
    """Select the remote from history, or the only configured one.

    The nearest TFS commit reachable from HEAD decides. Without one, a
    repository with exactly one tfs remote uses it; with none or several
    there is no safe choice and the run fails.

    Returns:
        The selected remote id, or None when auto-detection was not requested

    Raises:
        ConfigurationConflictError: If a remote id was also given explicitly
        NoRemoteDefinedError: If the repository has no tfs remote
        AmbiguousRemoteError: If several remotes exist and history does not tell
    """
    if not context.auto_find_remote:
        return None

    if context.user_specified_remote_id:
        raise ConfigurationConflictError("error: you can't use -i and -I option in the same time!")

    repository = context.repository
    if repository is None:
        raise RepositoryNotFoundError("error: -I needs a git repository to detect the tfs remote from!")

    parents = repository.get_last_parent_tfs_commits("HEAD")
    if not parents:
        all_remotes = repository.read_all_tfs_remotes()
        if not all_remotes:
            raise NoRemoteDefinedError("error: no tfs remotes defined in this repository!")
        if len(all_remotes) > 1:
            raise AmbiguousRemoteError(
                "error: can't find a tfs remote to use\n"
                "   No TFS parents found and more than one tfs remote defined in the repository!\n"
                "   Use '-i' option to define which one to use."
            )
        context.user_specified_remote_id = all_remotes[0].id
        logger.debug("No tfs parent found; using the only configured remote")
    else:
        found = parents[0]
        if found.remote.is_derived:
            console.print(f"Need to bootstrap: {escape(found.remote.remote_ref)}")
        context.user_specified_remote_id = found.remote.id
        logger.debug(f"Remote {found.remote.id} found at commit {found.git_commit} (C{found.changeset_id})")

    console.print(f"Working with tfs remote: {escape(context.remote_id)}")
    return context.remote_id
