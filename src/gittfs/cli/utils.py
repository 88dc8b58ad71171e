# Author: PB & Claude
# Maintainer: PB
# Original date: 2026.10.16
# License: (c) HRDAG, 2025, GPL-2 or newer
#
# ------
# src/gittfs/cli/utils.py

"""Consistent reporting of errors that end a git-tfs run."""

from loguru import logger
from rich.console import Console
from rich.markup import escape

from gittfs.system.exceptions import ExitCode, InvalidArgumentsError


def exit_code_for(error: BaseException) -> ExitCode:
    if isinstance(error, InvalidArgumentsError):
        return ExitCode.INVALID_ARGUMENTS
    return ExitCode.EXCEPTION_THROWN


def handle_fatal_error(console: Console, error: BaseException) -> int:
    """Print the error without a traceback and return the exit code for it.

    The traceback goes to the debug log (visible with --debug).
    """
    logger.opt(exception=error).debug("git-tfs aborted")
    for line in str(error).splitlines() or [type(error).__name__]:
        console.print(f"[red]✗[/red] {escape(line)}")
    return exit_code_for(error)
