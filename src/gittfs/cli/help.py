# Author: PB & Claude
# Maintainer: PB
# Original date: 2026.10.16
# License: (c) HRDAG, 2025, GPL-2 or newer
#
# ------
# src/gittfs/cli/help.py

# Third-party imports
import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

# Local imports
from gittfs.cli.commands import Command, CommandRegistry
from gittfs.core.options import global_options
from gittfs.system.exceptions import ExitCode


def _option_label(param: click.Parameter) -> str:
    label = ", ".join([*param.opts, *param.secondary_opts])
    if isinstance(param, click.Option) and not param.is_flag:
        label += f" {param.metavar or param.type.name.upper()}"
    return label


def options_table(params: list[click.Parameter], title: str) -> Table:
    table = Table(title=title, show_header=False, box=None, padding=(0, 2))
    table.add_column("Option", style="cyan", no_wrap=True)
    table.add_column("Description")
    for param in params:
        help_text = getattr(param, "help", None) or ""
        if isinstance(param, click.Option) and param.show_default and param.default is not None:
            help_text += f" (default: {param.default})"
        table.add_row(escape(_option_label(param)), escape(help_text))
    return table


class HelpRenderer:
    """Prints usage information for git-tfs commands."""

    def __init__(self, console: Console, registry: CommandRegistry):
        self.console = console
        self.registry = registry

    def show_overview(self) -> int:
        self.console.print("Usage: git-tfs [command] [options]")
        self.console.print()
        table = Table(title="Commands", show_header=False, box=None, padding=(0, 2))
        table.add_column("Command", style="bold", no_wrap=True)
        table.add_column("Description")
        for command in self.registry.all_commands():
            names = ", ".join(command.names)
            table.add_row(escape(names), escape(command.description))
        self.console.print(table)
        self.console.print()
        self.console.print(options_table(global_options(), "Options for all commands"))
        self.console.print()
        self.console.print("Use 'git tfs help [command]' for the options of one command.")
        return ExitCode.OK

    def show_help(self, command: Command) -> int:
        if command is self.registry.default_help_command():
            return self.show_overview()

        self.console.print(f"Usage: git-tfs {escape(command.usage or command.name)}")
        if command.aliases:
            self.console.print(f"Aliases: {escape(', '.join(command.aliases))}")
        self.console.print()
        self.console.print(escape(command.description))
        own_options = command.option_schema()
        if own_options:
            self.console.print()
            self.console.print(options_table(own_options, f"Options for {command.name}"))
        self.console.print()
        self.console.print(options_table(global_options(), "Options for all commands"))
        return ExitCode.OK

    def show_help_for_invalid_arguments(self, command: Command) -> int:
        self.console.print(f"[red]✗[/red] Invalid arguments for {escape(command.name)}")
        self.show_help(command)
        return ExitCode.INVALID_ARGUMENTS
