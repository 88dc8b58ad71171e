# Author: PB & Claude
# Maintainer: PB
# Original date: 2026.10.16
# License: (c) HRDAG, 2025, GPL-2 or newer
#
# ------
# src/gittfs/system/execution.py

"""
Subprocess execution for git.

CommandExecutor runs a local command and captures its output; GitHelpers
builds on it with the handful of git idioms the bootstrap pipeline needs.
"""

import subprocess
from dataclasses import dataclass
from typing import Callable, Optional, TypeVar

from loguru import logger

from gittfs.system.exceptions import GitCommandError, GitTfsError

T = TypeVar("T")


@dataclass(frozen=True)
class CommandResult:
    """Outcome of a finished subprocess."""
    returncode: int
    stdout: str
    stderr: str

    @property
    def success(self) -> bool:
        return self.returncode == 0


class CommandExecutor:
    """Thin wrapper around subprocess.run with consistent error reporting."""

    @staticmethod
    def run_local(cmd: list[str], timeout: Optional[int] = None, check: bool = True) -> CommandResult:
        """Run a command locally and capture its output.

        Args:
            cmd: Command and arguments
            timeout: Seconds before the command is killed
            check: Raise GitCommandError on a non-zero exit code

        Returns:
            CommandResult with decoded stdout/stderr

        Raises:
            GitCommandError: If check is True and the command failed, or the
                executable could not be started
        """
        logger.debug(f"Running: {' '.join(cmd)}")
        try:
            completed = subprocess.run(cmd, capture_output=True, text=True, timeout=timeout)
        except FileNotFoundError as e:
            raise GitCommandError(f"Command not found: {cmd[0]}", command=cmd) from e

        result = CommandResult(
            returncode=completed.returncode,
            stdout=completed.stdout,
            stderr=completed.stderr,
        )
        if check and not result.success:
            stderr = result.stderr.strip()
            message = stderr or f"Command failed with exit code {result.returncode}"
            raise GitCommandError(message, command=cmd, returncode=result.returncode, stderr=result.stderr)
        return result


class GitHelpers:
    """Runs git commands in the current working directory."""

    def __init__(self, executor: type[CommandExecutor] = CommandExecutor, git_executable: str = "git"):
        self.executor = executor
        self.git_executable = git_executable

    def run(self, *args: str, check: bool = True) -> CommandResult:
        return self.executor.run_local([self.git_executable, *args], check=check)

    def command(self, *args: str) -> str:
        """Run git and return its whole standard output."""
        return self.run(*args).stdout

    def command_oneline(self, *args: str) -> str:
        """Run git and return the first line of its output."""
        output = self.command(*args)
        return output.splitlines()[0] if output else ""

    def wrap_git_command_errors(
        self,
        message: str,
        action: Callable[[], T],
        error_type: type[GitTfsError] = GitTfsError,
    ) -> T:
        """Run action, replacing any git failure with error_type(message)."""
        try:
            return action()
        except GitCommandError as e:
            logger.debug(f"git failed: {e}")
            raise error_type(message) from e

    def make_repository(self, git_dir: str):
        from gittfs.core.repository import GitRepository

        return GitRepository(git_dir, self)
