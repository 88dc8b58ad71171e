# Author: PB & Claude
# Maintainer: PB
# Original date: 2026.10.16
# License: (c) HRDAG, 2025, GPL-2 or newer
#
# ------
# src/gittfs/cli/dispatcher.py

"""
Top level run sequence of git-tfs.

GitTfs.run() takes the raw argument list through a fixed pipeline:

1. initialize the run context (sub directory, GIT_DIR, default remote)
2. find the command named in the arguments (help when none)
3. locate the git repository, for commands that need one
4. parse options into the context and the command's own options
5. load the authors file
6. auto-detect the tfs remote when -I was given
7. show help / version, or execute the command

Any error before step 7 aborts the run; nothing of the command executes.
Resources acquired along the way are released in all cases.
"""

from typing import Callable, Optional, Sequence

from loguru import logger
from rich.console import Console
from rich.markup import escape

from gittfs import __version__
from gittfs.cli.commands import Command, CommandInvocation, CommandRegistry, CommandRunner
from gittfs.cli.help import HelpRenderer
from gittfs.config.manager import DEFAULT_GIT_DIR, UserConfig, authors_file_override, git_dir_override
from gittfs.core.authors import AuthorsFile, load_authors
from gittfs.core.globals import ProcessContext
from gittfs.core.janitor import Janitor
from gittfs.core.locator import locate_repository
from gittfs.core.options import OptionParser, ParsedOptions
from gittfs.core.protocols import SyncEngine
from gittfs.core.remote_detection import auto_detect_remote
from gittfs.core.sync_engine import load_sync_engine
from gittfs.system.exceptions import ExitCode, GitCommandError
from gittfs.system.execution import GitHelpers
from gittfs.system.logging_setup import setup_logging


DEBUG_FLAGS = ("-d", "--debug")


def wants_debug(args: Sequence[str]) -> bool:
    """True when -d/--debug appears among the options in args."""
    for arg in args:
        if arg == "--":
            return False
        if arg in DEBUG_FLAGS:
            return True
    return False


def version_string() -> str:
    return f"git-tfs version {__version__}"


class GitTfs:
    """Runs one git-tfs invocation."""

    def __init__(
        self,
        console: Optional[Console] = None,
        user_config: Optional[UserConfig] = None,
        registry: Optional[CommandRegistry] = None,
        git: Optional[GitHelpers] = None,
        option_parser: Optional[OptionParser] = None,
        runner: Optional[CommandRunner] = None,
        authors_file: Optional[AuthorsFile] = None,
        engine_factory: Callable[[UserConfig], SyncEngine] = load_sync_engine,
        context: Optional[ProcessContext] = None,
    ):
        self.console = console or Console()
        self.user_config = user_config or UserConfig()
        self.registry = registry or CommandRegistry()
        self.git = git or GitHelpers()
        self.option_parser = option_parser or OptionParser()
        self.runner = runner or CommandRunner()
        self.authors_file = authors_file or AuthorsFile()
        self.engine_factory = engine_factory
        self.context = context or ProcessContext()
        self.help = HelpRenderer(self.console, self.registry)
        self.janitor = Janitor()
        self._debug_logging = False

    def run(self, args: list[str]) -> int:
        """Run the command found in args and return its exit code.

        args is consumed: the command name is removed from it.
        """
        try:
            self.initialize_globals(args)
            command_line_run = "git tfs " + " ".join(args)
            command = self.extract_command(args)
            if command.requires_repository:
                self.assert_valid_git_repository()
            options, unparsed_args = self.parse_options(command, args)
            logger.debug(f"Command run: {command_line_run}")
            load_authors(self.context, self.console, self.authors_file)
            auto_detect_remote(self.context, self.console)
            return self.main(command, options, unparsed_args)
        finally:
            self.janitor.dispose()

    def initialize_globals(self, args: Sequence[str] = ()) -> None:
        context = self.context
        # Ahead of option parsing so the locator logs at DEBUG too
        if wants_debug(args):
            context.debug_mode = True
            self.enable_debug_logging()
        try:
            context.starting_repository_sub_dir = self.git.command_oneline("rev-parse", "--show-prefix")
        except GitCommandError:
            context.starting_repository_sub_dir = ""

        if context.git_dir is None:
            context.git_dir = git_dir_override()
        if context.git_dir is not None:
            context.git_dir_set_by_user = True
        else:
            context.git_dir = DEFAULT_GIT_DIR

        context.default_remote_id = self.user_config.default_remote_id
        if context.authors_file_path is None:
            context.authors_file_path = authors_file_override()

    def extract_command(self, args: list[str]) -> Command:
        return self.registry.extract_command(args)

    def assert_valid_git_repository(self) -> None:
        locate_repository(self.context, self.git, self.janitor)

    def parse_options(self, command: Command, args: list[str]) -> tuple[ParsedOptions, list[str]]:
        options, unparsed_args = self.option_parser.parse(command, args)
        options.apply_to(self.context)
        if self.context.debug_mode:
            self.enable_debug_logging()
        return options, unparsed_args

    def enable_debug_logging(self) -> None:
        if self._debug_logging:
            return
        self._debug_logging = True
        setup_logging(debug=True, user_config=self.user_config)

    def main(self, command: Command, options: ParsedOptions, unparsed_args: list[str]) -> int:
        logger.debug(version_string())
        if self.context.show_help:
            return self.help.show_help(command)
        if self.context.show_version:
            self.console.print(escape(version_string()))
            return ExitCode.OK

        invocation = CommandInvocation(
            context=self.context,
            options=options,
            args=unparsed_args,
            console=self.console,
            git=self.git,
            janitor=self.janitor,
            user_config=self.user_config,
            help=self.help,
            registry=self.registry,
            engine_factory=self.engine_factory,
        )
        try:
            return self.runner.run(command, invocation)
        finally:
            self.janitor.dispose()
