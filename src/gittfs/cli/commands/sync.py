# Author: PB & Claude
# Maintainer: PB
# Original date: 2026.10.16
# License: (c) HRDAG, 2025, GPL-2 or newer
#
# ------
# src/gittfs/cli/commands/sync.py

"""
Sync command handlers - exchange changesets with the TFS server.

Handles: fetch, pull, checkin

The changeset work itself is done by the installed sync engine.
"""

import click
from rich.markup import escape

from gittfs.cli.commands.base import Command, CommandInvocation
from gittfs.core.repository import TfsRemote
from gittfs.system.exceptions import ExitCode, NoRemoteDefinedError


class FetchCommand(Command):
    name = "fetch"
    usage = "fetch [options]"
    description = "Fetch new TFS changesets into refs/remotes/tfs/<remote>."

    def option_schema(self) -> list[click.Parameter]:
        return [
            click.Option(["--all", "fetch_all"], is_flag=True, default=False,
                         help="Fetch all the tfs remotes"),
            click.Option(["-t", "--up-to", "up_to"], type=int, default=None,
                         help="Fetch changesets up to this one only"),
        ]

    def remotes_to_fetch(self, invocation: CommandInvocation) -> list[TfsRemote]:
        if invocation.options.get("fetch_all"):
            remotes = invocation.repository.read_all_tfs_remotes()
            if not remotes:
                raise NoRemoteDefinedError("error: no tfs remotes defined in this repository!")
            return remotes
        return [invocation.selected_remote()]

    def fetch(self, invocation: CommandInvocation) -> list[TfsRemote]:
        engine = invocation.sync_engine()
        remotes = self.remotes_to_fetch(invocation)
        for remote in remotes:
            fetched = engine.fetch(
                invocation.repository,
                remote,
                invocation.context.authors,
                up_to=invocation.options.get("up_to"),
            )
            invocation.console.print(f"{escape(remote.id)}: fetched {fetched} changeset(s)")
        return remotes

    def execute(self, invocation: CommandInvocation) -> int:
        self.fetch(invocation)
        return ExitCode.OK


class PullCommand(FetchCommand):
    name = "pull"
    usage = "pull [options]"
    description = "Fetch new TFS changesets and merge (or rebase) them into the current branch."

    def option_schema(self) -> list[click.Parameter]:
        return [
            *super().option_schema(),
            click.Option(["-r", "--rebase"], is_flag=True, default=False,
                         help="Rebase local commits onto the fetched changesets instead of merging"),
        ]

    def execute(self, invocation: CommandInvocation) -> int:
        remotes = self.fetch(invocation)
        # With --all, the current branch still follows the selected remote
        remote = remotes[0] if len(remotes) == 1 else invocation.selected_remote()

        repository = invocation.repository
        if repository.resolve_commit(remote.remote_ref) is None:
            invocation.console.print(f"Nothing to merge: {escape(remote.remote_ref)} does not exist yet")
            return ExitCode.OK

        operation = "rebase" if invocation.options.get("rebase") else "merge"
        output = invocation.git.command(operation, remote.remote_ref)
        if output.strip():
            invocation.console.print(escape(output.rstrip()))
        return ExitCode.OK


class CheckinCommand(Command):
    name = "checkin"
    aliases = ("ci",)
    usage = "checkin [options]"
    description = "Check in the commits made since the last TFS changeset."

    def option_schema(self) -> list[click.Parameter]:
        return [
            click.Option(["-m", "--message"], default=None, help="Check-in comment"),
        ]

    def execute(self, invocation: CommandInvocation) -> int:
        remote = invocation.selected_remote()
        engine = invocation.sync_engine()
        changeset_id = engine.checkin(
            invocation.repository,
            remote,
            invocation.context.authors,
            message=invocation.options.get("message"),
        )
        invocation.console.print(f"TFS Changeset #{changeset_id} was created")
        engine.fetch(invocation.repository, remote, invocation.context.authors)
        return ExitCode.OK
