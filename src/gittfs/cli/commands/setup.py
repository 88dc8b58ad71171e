# Author: PB & Claude
# Maintainer: PB
# Original date: 2026.10.16
# License: (c) HRDAG, 2025, GPL-2 or newer
#
# ------
# src/gittfs/cli/commands/setup.py

"""
Setup command handlers - create a repository tracking TFS.

Handles: init, clone
"""

import os
from pathlib import Path
from typing import Optional

import click
from loguru import logger
from rich.markup import escape

from gittfs.cli.commands.base import Command, CommandInvocation
from gittfs.config.manager import DEFAULT_GIT_DIR
from gittfs.core.repository import GitRepository, TfsRemote
from gittfs.system.exceptions import ExitCode, GitTfsError


def default_clone_directory(tfs_repository_path: str) -> str:
    """Last segment of a TFS path: '$/Project/Trunk' -> 'Trunk'."""
    segments = [s for s in tfs_repository_path.replace("\\", "/").split("/") if s and s != "$"]
    return segments[-1] if segments else "."


class InitCommand(Command):
    name = "init"
    requires_repository = False
    accepted_arg_counts = (2, 3)
    usage = "init [options] tfs-url repository-path [git-repository]"
    description = "Initialize a git repository to track a TFS path."

    def option_schema(self) -> list[click.Parameter]:
        return [
            click.Option(["-u", "--username"], default=None, help="TFS username"),
            click.Option(["--autocrlf"], type=click.Choice(["true", "false", "auto"]), default="false",
                         show_default=True, help="Value of core.autocrlf in the new repository"),
        ]

    def default_directory(self, tfs_repository_path: str) -> str:
        return "."

    def execute(self, invocation: CommandInvocation) -> int:
        self.initialize(invocation)
        return ExitCode.OK

    def initialize(self, invocation: CommandInvocation) -> tuple[GitRepository, TfsRemote]:
        """Create (or reuse) the git repository and configure the tfs remote."""
        tfs_url, tfs_repository_path, *rest = invocation.args
        target = Path(rest[0] if rest else self.default_directory(tfs_repository_path))
        context = invocation.context
        console = invocation.console

        target.mkdir(parents=True, exist_ok=True)
        os.chdir(target)
        if not Path(DEFAULT_GIT_DIR).is_dir():
            invocation.git.run("init")
            console.print(f"Initialized empty git repository in {escape(str(Path.cwd()))}")

        context.git_dir = DEFAULT_GIT_DIR
        repository = invocation.janitor.enter(invocation.git.make_repository(DEFAULT_GIT_DIR))
        context.repository = repository

        if repository.has_tfs_remote(context.remote_id):
            raise GitTfsError(f"error: a tfs remote with id '{context.remote_id}' already exists in this repository!")

        remote = TfsRemote(
            id=context.remote_id,
            tfs_url=tfs_url,
            tfs_repository_path=tfs_repository_path,
            username=invocation.options.get("username"),
        )
        repository.create_tfs_remote(remote, autocrlf=invocation.options.get("autocrlf"))
        logger.info(f"Created tfs remote {remote.id} for {tfs_url}{tfs_repository_path}")
        console.print(f"Created tfs remote '{escape(remote.id)}' for {escape(tfs_url + tfs_repository_path)}")
        return repository, remote


class CloneCommand(InitCommand):
    name = "clone"
    usage = "clone [options] tfs-url repository-path [git-repository]"
    description = "Create a git repository for a TFS path and fetch its history."

    def option_schema(self) -> list[click.Parameter]:
        return [
            *super().option_schema(),
            click.Option(["-t", "--up-to", "up_to"], type=int, default=None,
                         help="Fetch changesets up to this one only"),
        ]

    def default_directory(self, tfs_repository_path: str) -> str:
        return default_clone_directory(tfs_repository_path)

    def execute(self, invocation: CommandInvocation) -> int:
        repository, remote = self.initialize(invocation)
        engine = invocation.sync_engine()
        fetched = engine.fetch(repository, remote, invocation.context.authors, up_to=invocation.options.get("up_to"))
        invocation.console.print(f"Fetched {fetched} changeset(s) from {escape(remote.id)}")
        self._check_out(invocation, repository, remote)
        return ExitCode.OK

    @staticmethod
    def _check_out(invocation: CommandInvocation, repository: GitRepository, remote: TfsRemote) -> None:
        tip: Optional[str] = repository.resolve_commit(remote.remote_ref)
        if tip is None:
            invocation.console.print("[yellow]warning:[/yellow] nothing was fetched, the repository is empty")
            return
        if repository.resolve_commit("HEAD") is None:
            repository.update_ref("HEAD", tip)
            invocation.git.run("reset", "--hard")
