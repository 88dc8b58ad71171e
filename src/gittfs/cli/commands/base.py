# Author: PB & Claude
# Maintainer: PB
# Original date: 2026.10.16
# License: (c) HRDAG, 2025, GPL-2 or newer
#
# ------
# src/gittfs/cli/commands/base.py

"""
Command interface and the runner that executes commands.

A command declares whether it needs an existing git repository, which
options it takes and how many positional arguments it accepts. The runner
checks the argument count and calls execute().
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, ClassVar, Optional

import click
from loguru import logger
from rich.console import Console

from gittfs.config.manager import UserConfig
from gittfs.core.globals import ProcessContext
from gittfs.core.janitor import Janitor
from gittfs.core.options import ParsedOptions
from gittfs.core.protocols import SyncEngine
from gittfs.core.repository import DERIVED_REMOTE_ID, GitRepository, TfsRemote
from gittfs.core.sync_engine import load_sync_engine
from gittfs.system.exceptions import RemoteNotFoundError, RepositoryNotFoundError
from gittfs.system.execution import GitHelpers

if TYPE_CHECKING:
    from gittfs.cli.commands import CommandRegistry
    from gittfs.cli.help import HelpRenderer


@dataclass
class CommandInvocation:
    """Everything a command needs to run."""
    context: ProcessContext
    options: ParsedOptions
    args: list[str]
    console: Console
    git: GitHelpers
    janitor: Janitor
    user_config: UserConfig
    help: HelpRenderer
    registry: CommandRegistry
    engine_factory: Callable[[UserConfig], SyncEngine] = load_sync_engine
    _engine: Optional[SyncEngine] = field(default=None, repr=False)

    @property
    def repository(self) -> GitRepository:
        if self.context.repository is None:
            raise RepositoryNotFoundError("This command must be run inside a git repository!")
        return self.context.repository

    def sync_engine(self) -> SyncEngine:
        """The TFS sync engine, loaded on first use and closed at teardown."""
        if self._engine is None:
            self._engine = self.engine_factory(self.user_config)
            self.janitor.add_cleanup(self._engine.close)
        return self._engine

    def selected_remote(self) -> TfsRemote:
        """The tfs remote chosen with -i/-I, or the default one."""
        remote_id = self.context.remote_id
        try:
            return self.repository.read_tfs_remote(remote_id)
        except RemoteNotFoundError as e:
            if remote_id == DERIVED_REMOTE_ID:
                raise RemoteNotFoundError(
                    f"{e}\nThe remote was inferred from history; run 'git tfs bootstrap' first.",
                    remote_id=remote_id,
                ) from e
            raise


class Command(ABC):
    """A git-tfs subcommand."""

    name: ClassVar[str]
    aliases: ClassVar[tuple[str, ...]] = ()
    requires_repository: ClassVar[bool] = True
    accepted_arg_counts: ClassVar[tuple[int, ...]] = (0,)
    usage: ClassVar[str] = ""
    description: ClassVar[str] = ""

    @property
    def names(self) -> tuple[str, ...]:
        return (self.name, *self.aliases)

    def option_schema(self) -> list[click.Parameter]:
        """Command specific options, in addition to the global ones."""
        return []

    @abstractmethod
    def execute(self, invocation: CommandInvocation) -> int:
        """Run the command and return the process exit code."""

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name}>"


class CommandRunner:
    """Executes a command once its positional arguments fit."""

    def run(self, command: Command, invocation: CommandInvocation) -> int:
        if len(invocation.args) not in command.accepted_arg_counts:
            logger.debug(f"{command.name} does not take {len(invocation.args)} argument(s)")
            return invocation.help.show_help_for_invalid_arguments(command)
        logger.debug(f"Executing {command.name} with {invocation.args}")
        return int(command.execute(invocation))
