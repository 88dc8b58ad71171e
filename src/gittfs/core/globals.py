# Author: PB & Claude
# Maintainer: PB
# Original date: 2026.10.16
# License: (c) HRDAG, 2025, GPL-2 or newer
#
# ------
# src/gittfs/core/globals.py

"""Per-invocation state shared by the stages of the bootstrap pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional

from gittfs.config.manager import DEFAULT_GIT_DIR, DEFAULT_REMOTE_ID
from gittfs.core.authors import IdentityMap

if TYPE_CHECKING:
    from gittfs.core.repository import GitRepository


@dataclass
class ProcessContext:
    """Mutable state of one git-tfs run.

    Created empty by the dispatcher, filled in stage by stage and read by the
    command that finally executes. Nothing here outlives the run.
    """
    git_dir: Optional[str] = None
    git_dir_set_by_user: bool = False
    starting_repository_sub_dir: str = ""
    repository: Optional[GitRepository] = None

    default_remote_id: str = DEFAULT_REMOTE_ID
    user_specified_remote_id: Optional[str] = None
    auto_find_remote: bool = False

    show_help: bool = False
    show_version: bool = False
    debug_mode: bool = False

    authors_file_path: Optional[str] = None
    authors: IdentityMap = field(default_factory=IdentityMap)

    @property
    def remote_id(self) -> str:
        """Remote the command works with: the user's choice or the default."""
        return self.user_specified_remote_id or self.default_remote_id

    @property
    def control_dir(self) -> str:
        return self.git_dir or DEFAULT_GIT_DIR
