# Author: PB & Claude
# Maintainer: PB
# Original date: 2026.10.16
# License: (c) HRDAG, 2025, GPL-2 or newer
#
# ------
# src/gittfs/cli/commands/__init__.py

"""The git-tfs commands and the table used to look them up by name."""

from typing import Optional, Sequence

from gittfs.cli.commands.base import Command, CommandInvocation, CommandRunner
from gittfs.cli.commands.info import BootstrapCommand, HelpCommand, InfoCommand
from gittfs.cli.commands.setup import CloneCommand, InitCommand
from gittfs.cli.commands.sync import CheckinCommand, FetchCommand, PullCommand

COMMANDS: tuple[type[Command], ...] = (
    HelpCommand,
    InitCommand,
    CloneCommand,
    FetchCommand,
    PullCommand,
    CheckinCommand,
    BootstrapCommand,
    InfoCommand,
)


class CommandRegistry:
    """Maps command names and aliases to command instances."""

    def __init__(self, command_types: Sequence[type[Command]] = COMMANDS):
        self._commands = [command_type() for command_type in command_types]
        self._by_name: dict[str, Command] = {}
        for command in self._commands:
            for name in command.names:
                if name in self._by_name:
                    raise ValueError(f"Command name '{name}' registered twice")
                self._by_name[name] = command

    def lookup_command_by_name(self, token: str) -> Optional[Command]:
        return self._by_name.get(token)

    def default_help_command(self) -> Command:
        return self._by_name[HelpCommand.name]

    def all_commands(self) -> list[Command]:
        return list(self._commands)

    def extract_command(self, args: list[str]) -> Command:
        """Remove the first command name found in args and return its command.

        Without a command name, args is left untouched and help is returned.
        """
        for index, token in enumerate(args):
            command = self.lookup_command_by_name(token)
            if command is not None:
                del args[index]
                return command
        return self.default_help_command()


__all__ = [
    "COMMANDS",
    "Command",
    "CommandInvocation",
    "CommandRegistry",
    "CommandRunner",
]
