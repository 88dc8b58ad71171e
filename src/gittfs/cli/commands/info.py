# Author: PB & Claude
# Maintainer: PB
# Original date: 2026.10.16
# License: (c) HRDAG, 2025, GPL-2 or newer
#
# ------
# src/gittfs/cli/commands/info.py

"""
Local command handlers - work on the git side only.

Handles: help, bootstrap, info
"""

from typing import Any

import click
import orjson
from rich.markup import escape
from rich.table import Table

from gittfs import __version__
from gittfs.cli.commands.base import Command, CommandInvocation
from gittfs.cli.commands.setup import default_clone_directory
from gittfs.core.repository import DERIVED_REMOTE_ID, TFS_REMOTE_REFS, GitRepository, TfsChangesetInfo, TfsRemote
from gittfs.system.exceptions import ExitCode, GitTfsError


class HelpCommand(Command):
    name = "help"
    requires_repository = False
    accepted_arg_counts = (0, 1)
    usage = "help [command]"
    description = "Show the available commands, or the options of one command."

    def execute(self, invocation: CommandInvocation) -> int:
        if not invocation.args:
            return invocation.help.show_overview()

        wanted = invocation.args[0]
        command = invocation.registry.lookup_command_by_name(wanted)
        if command is None:
            invocation.console.print(f"[red]✗[/red] Unknown command: {escape(wanted)}")
            invocation.help.show_overview()
            return ExitCode.INVALID_ARGUMENTS
        return invocation.help.show_help(command)


class BootstrapCommand(Command):
    name = "bootstrap"
    accepted_arg_counts = (0, 1)
    usage = "bootstrap [options] [commit-ish]"
    description = "Turn the TFS parents found in history into configured tfs remotes."

    def execute(self, invocation: CommandInvocation) -> int:
        commitish = invocation.args[0] if invocation.args else "HEAD"
        repository = invocation.repository
        parents = repository.get_last_parent_tfs_commits(commitish)
        if not parents:
            invocation.console.print(f"No TFS parents found for {escape(commitish)}!")
            return ExitCode.OK

        for changeset in parents:
            remote = self.create_remote(invocation, repository, changeset)
            repository.update_ref(remote.remote_ref, changeset.git_commit)
        return ExitCode.OK

    def create_remote(
        self,
        invocation: CommandInvocation,
        repository: GitRepository,
        changeset: TfsChangesetInfo,
    ) -> TfsRemote:
        found = changeset.remote
        if not found.is_derived:
            invocation.console.print(f"-> existing remote {escape(found.id)} (up to date)")
            return found

        remote_id = self.available_remote_id(invocation, repository, found)
        remote = TfsRemote(id=remote_id, tfs_url=found.tfs_url, tfs_repository_path=found.tfs_repository_path)
        repository.create_tfs_remote(remote)
        invocation.console.print(f"-> new remote {escape(remote.id)}")
        return remote

    @staticmethod
    def available_remote_id(invocation: CommandInvocation, repository: GitRepository, found: TfsRemote) -> str:
        """First free id among: the -i id, 'default', the TFS path's last segment, then numbered.

        An id picked by -I came from history, not from the user, and is not
        a name for the new remote.
        """
        context = invocation.context
        chosen = context.user_specified_remote_id
        if chosen and not context.auto_find_remote and chosen != DERIVED_REMOTE_ID:
            if repository.has_tfs_remote(chosen):
                raise GitTfsError(f"error: a tfs remote with id '{chosen}' already exists!")
            return chosen

        if not repository.has_tfs_remote(context.default_remote_id):
            return context.default_remote_id

        base = default_clone_directory(found.tfs_repository_path or "")
        candidate = base
        counter = 1
        while repository.has_tfs_remote(candidate):
            counter += 1
            candidate = f"{base}-{counter}"
        return candidate


class InfoCommand(Command):
    name = "info"
    usage = "info [options]"
    description = "Show the git and git-tfs versions and the configured tfs remotes."

    def option_schema(self) -> list[click.Parameter]:
        return [
            click.Option(["--json", "to_json"], is_flag=True, default=False, help="Output results as JSON"),
        ]

    def execute(self, invocation: CommandInvocation) -> int:
        repository = invocation.repository
        data = {
            "git_version": invocation.git.command_oneline("--version"),
            "git_tfs_version": __version__,
            "remotes": [self.describe(repository, r) for r in repository.read_all_tfs_remotes()],
        }

        if invocation.options.get("to_json"):
            invocation.console.print_json(orjson.dumps(data).decode())
            return ExitCode.OK

        console = invocation.console
        console.print(escape(data["git_version"]))
        console.print(f"git-tfs version {escape(__version__)}")
        if not data["remotes"]:
            console.print("No tfs remotes defined in this repository")
            return ExitCode.OK

        table = Table(title="TFS remotes")
        table.add_column("Id")
        table.add_column("Url")
        table.add_column("Repository")
        table.add_column("Head", overflow="fold")
        for remote in data["remotes"]:
            table.add_row(
                escape(remote["id"]),
                escape(remote["url"]),
                escape(remote["repository"] or ""),
                remote["head"] or "[dim]not fetched[/dim]",
            )
        console.print(table)
        return ExitCode.OK

    @staticmethod
    def describe(repository: GitRepository, remote: TfsRemote) -> dict[str, Any]:
        head = repository.resolve_commit(TFS_REMOTE_REFS + remote.id)
        return {
            "id": remote.id,
            "url": remote.tfs_url,
            "repository": remote.tfs_repository_path,
            "username": remote.username,
            "ref": remote.remote_ref,
            "head": head[:10] if head else None,
        }
