# Author: PB & Claude
# Maintainer: PB
# Original date: 2026.10.16
# License: (c) HRDAG, 2025, GPL-2 or newer
#
# ------
# src/gittfs/core/locator.py

"""Finding the git control directory the current command works in."""

import os
from typing import Optional

from loguru import logger

from gittfs.core.globals import ProcessContext
from gittfs.core.janitor import Janitor
from gittfs.core.repository import GitRepository
from gittfs.system.exceptions import RepositoryNotFoundError
from gittfs.system.execution import GitHelpers

NOT_IN_REPOSITORY = "This command must be run inside a git repository!"


def locate_repository(
    context: ProcessContext,
    git: GitHelpers,
    janitor: Optional[Janitor] = None,
) -> GitRepository:
    """Validate the control directory, moving up to the repository root if needed.

    A GIT_DIR set by the user is taken as is. Otherwise, when .git is not in
    the current directory, git is asked how far up the work tree root is and
    the process changes to it.

    Args:
        context: Run state; git_dir and repository are updated
        git: Git command helpers
        janitor: Receives the opened repository for teardown

    Returns:
        The opened repository

    Raises:
        RepositoryNotFoundError: If no control directory can be found
    """
    git_dir = context.control_dir
    if not os.path.isdir(git_dir):
        if context.git_dir_set_by_user:
            raise RepositoryNotFoundError(
                f"{NOT_IN_REPOSITORY}\nGIT_DIR={git_dir} explicitly set, but it is not a directory."
            )

        context.git_dir = None
        cd_up = git.wrap_git_command_errors(
            f"{NOT_IN_REPOSITORY}\nAlready at top level, but {git_dir} not found.",
            lambda: git.command_oneline("rev-parse", "--show-cdup"),
            error_type=RepositoryNotFoundError,
        ).rstrip()
        if not cd_up:
            # Inside the control directory itself
            git_dir = "."
            cd_up = "."

        logger.debug(f"Moving to repository root: {cd_up}")
        try:
            os.chdir(cd_up)
        except OSError as e:
            raise RepositoryNotFoundError(f"{NOT_IN_REPOSITORY}\nUnable to go to {cd_up}: {e}") from e

        if not os.path.isdir(git_dir):
            raise RepositoryNotFoundError(
                f"{NOT_IN_REPOSITORY}\n{git_dir} still not found after going to {cd_up}"
            )

    context.git_dir = git_dir
    repository = git.make_repository(git_dir)
    if janitor is not None:
        repository = janitor.enter(repository)
    context.repository = repository
    return repository
