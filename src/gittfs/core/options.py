# Author: PB & Claude
# Maintainer: PB
# Original date: 2026.10.16
# License: (c) HRDAG, 2025, GPL-2 or newer
#
# ------
# src/gittfs/core/options.py

"""
Command line option parsing.

Options shared by every command are declared here; each command adds its
own click parameters. Whatever is not an option is handed back as the
command's positional arguments.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import click

from gittfs.system.exceptions import InvalidArgumentsError

if TYPE_CHECKING:
    from gittfs.cli.commands.base import Command
    from gittfs.core.globals import ProcessContext

POSITIONAL_PARAM = "_positional"


def global_options() -> list[click.Parameter]:
    """Options every git-tfs command accepts."""
    return [
        click.Option(["-h", "-H", "--help", "show_help"], is_flag=True, default=False,
                     help="Show help for the command"),
        click.Option(["-V", "--version", "show_version"], is_flag=True, default=False,
                     help="Show version and exit"),
        click.Option(["-d", "--debug", "debug_mode"], is_flag=True, default=False,
                     help="Show debug output"),
        click.Option(["-i", "--tfs-remote", "--remote", "--id", "remote_id"], default=None, metavar="ID",
                     help="The remote ID of the TFS to interact with (default: default)"),
        click.Option(["-I", "--auto-remote", "auto_remote"], is_flag=True, default=False,
                     help="Autodetect (from git history) the remote ID of the TFS to interact with"),
        click.Option(["-A", "--authors", "authors_file"], default=None, metavar="FILE",
                     help="Path to an Authors file to map TFS users to git users"),
    ]


GLOBAL_OPTION_NAMES = frozenset(p.name for p in global_options())


@dataclass
class ParsedOptions:
    """Values of the global options and of the command's own options."""
    global_values: dict[str, Any] = field(default_factory=dict)
    values: dict[str, Any] = field(default_factory=dict)

    def __getitem__(self, name: str) -> Any:
        return self.values[name]

    def get(self, name: str, default: Any = None) -> Any:
        return self.values.get(name, default)

    def apply_to(self, context: ProcessContext) -> None:
        """Copy the global option values into the run context."""
        g = self.global_values
        context.show_help = bool(g.get("show_help"))
        context.show_version = bool(g.get("show_version"))
        context.debug_mode = bool(g.get("debug_mode"))
        if g.get("remote_id"):
            context.user_specified_remote_id = g["remote_id"]
        if g.get("auto_remote"):
            context.auto_find_remote = True
        if g.get("authors_file"):
            context.authors_file_path = g["authors_file"]


class OptionParser:
    """Parses arguments for a resolved command with click."""

    def build(self, command: Command) -> click.Command:
        params = [
            *global_options(),
            *command.option_schema(),
            click.Argument([POSITIONAL_PARAM], nargs=-1),
        ]
        return click.Command(command.name, params=params, add_help_option=False)

    def parse(self, command: Command, args: list[str]) -> tuple[ParsedOptions, list[str]]:
        """Split args into option values and leftover positional arguments.

        Raises:
            InvalidArgumentsError: On an unknown option or a bad option value
        """
        click_command = self.build(command)
        try:
            ctx = click_command.make_context(f"git-tfs {command.name}", list(args))
        except click.UsageError as e:
            raise InvalidArgumentsError(f"{command.name}: {e.format_message()}") from e

        params = dict(ctx.params)
        positional = list(params.pop(POSITIONAL_PARAM, ()))
        global_values = {name: params.pop(name) for name in list(params) if name in GLOBAL_OPTION_NAMES}
        return ParsedOptions(global_values=global_values, values=params), positional
