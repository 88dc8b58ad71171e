# Author: PB & Claude
# Maintainer: PB
# Original date: 2026.10.16
# License: (c) HRDAG, 2025, GPL-2 or newer
#
# ------
# src/gittfs/system/exceptions.py

"""
git-tfs specific exception classes and process exit codes.

Every failure the bootstrap pipeline can raise derives from GitTfsError so the
process boundary can turn it into a readable message and a non-zero exit code.
"""

from enum import IntEnum


class ExitCode(IntEnum):
    """Process exit codes returned by git-tfs."""
    OK = 0
    INVALID_ARGUMENTS = 2
    EXCEPTION_THROWN = 254


class GitTfsError(Exception):
    """Base exception for all git-tfs errors."""
    pass


class ConfigError(GitTfsError):
    """Raised when the user configuration cannot be loaded or validated."""
    pass


class ConfigurationConflictError(GitTfsError):
    """Raised when mutually exclusive options are used together."""
    pass


class RepositoryNotFoundError(GitTfsError):
    """Raised when no valid git repository could be located."""
    pass


# === REMOTE SELECTION ===

class RemoteSelectionError(GitTfsError):
    """Base class for failures to pick the tfs remote to work with."""
    pass


class NoRemoteDefinedError(RemoteSelectionError):
    """No tfs remote is configured in the repository."""
    pass


class AmbiguousRemoteError(RemoteSelectionError):
    """Several tfs remotes are configured and none can be inferred."""
    pass


class RemoteNotFoundError(GitTfsError):
    """Raised when a tfs remote id does not match any configured remote."""

    def __init__(self, message: str, remote_id: str = None):
        self.remote_id = remote_id
        super().__init__(message)


class IdentityMapError(GitTfsError):
    """Raised when an authors file is missing or malformed."""

    def __init__(self, message: str, path: str = None, line_number: int = None):
        self.path = path
        self.line_number = line_number
        super().__init__(message)


class InvalidArgumentsError(GitTfsError):
    """Raised when the command line cannot be parsed."""
    pass


class GitCommandError(GitTfsError):
    """Raised when an invocation of git fails."""

    def __init__(self, message: str, command: list[str] = None, returncode: int = None, stderr: str = ""):
        self.command = command
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(message)


class SyncEngineUnavailableError(GitTfsError):
    """Raised when a command needs a TFS sync engine and none is installed."""
    pass
