# Author: PB & Claude
# Maintainer: PB
# Original date: 2026.10.16
# License: (c) HRDAG, 2025, GPL-2 or newer
#
# ------
# tests/conftest.py

"""
Shared test fixtures for the git-tfs test suite.
"""

import io
import shutil
import subprocess
from pathlib import Path

import pytest
from loguru import logger
from rich.console import Console

from gittfs.cli.commands import CommandRegistry
from gittfs.cli.commands.base import CommandInvocation
from gittfs.cli.help import HelpRenderer
from gittfs.config.manager import UserConfig
from gittfs.core.globals import ProcessContext
from gittfs.core.janitor import Janitor
from gittfs.core.options import ParsedOptions
from tests.fixtures.fakes import FakeGit, FakeRepository, FakeSyncEngine


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path_factory, monkeypatch):
    """Keep the user's environment and config files out of every test."""
    for name in ("GIT_DIR", "GIT_TFS_AUTHORS", "XDG_CONFIG_HOME"):
        monkeypatch.delenv(name, raising=False)
    home = tmp_path_factory.mktemp("home")
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("GITTFS_CONFIG_HOME", str(home / "gittfs"))
    yield
    # CliRunner swaps sys.stderr; drop sinks bound to the old stream
    logger.remove()


@pytest.fixture
def console():
    """Console recording plain text output, read back with console.file.getvalue()."""
    return Console(file=io.StringIO(), width=200, color_system=None, force_terminal=False)


@pytest.fixture
def fake_repository():
    return FakeRepository()


@pytest.fixture
def fake_git(fake_repository):
    return FakeGit(repository=fake_repository)


@pytest.fixture
def sync_engine():
    return FakeSyncEngine()


@pytest.fixture
def make_invocation(console, fake_git, sync_engine):
    """Build a CommandInvocation around a context and parsed option values."""
    registry = CommandRegistry()
    janitors = []

    def _make(context=None, args=(), values=None, git=None):
        janitor = Janitor()
        janitors.append(janitor)
        return CommandInvocation(
            context=context or ProcessContext(),
            options=ParsedOptions(values=dict(values or {})),
            args=list(args),
            console=console,
            git=git or fake_git,
            janitor=janitor,
            user_config=UserConfig(),
            help=HelpRenderer(console, registry),
            registry=registry,
            engine_factory=lambda user_config: sync_engine,
        )

    yield _make
    for janitor in janitors:
        janitor.dispose()


def _git(cwd: Path, *args: str) -> str:
    completed = subprocess.run(["git", *args], cwd=cwd, capture_output=True, text=True, check=True)
    return completed.stdout


class GitWorkTree:
    """A real git repository in a temporary directory."""

    def __init__(self, path: Path):
        self.path = path

    def git(self, *args: str) -> str:
        return _git(self.path, *args)

    def commit(self, subject: str, tfs_id: str = None) -> str:
        """Create an empty commit, optionally tagged as imported from TFS."""
        args = ["commit", "--allow-empty", "-q", "-m", subject]
        if tfs_id:
            args += ["-m", f"git-tfs-id: {tfs_id}"]
        self.git(*args)
        return self.git("rev-parse", "HEAD").strip()

    def add_remote(self, remote_id: str, url: str, path: str) -> None:
        self.git("config", f"tfs-remote.{remote_id}.url", url)
        self.git("config", f"tfs-remote.{remote_id}.repository", path)


@pytest.fixture
def git_work_tree(tmp_path, monkeypatch):
    """Fresh git repository with a committer identity; cwd is its root."""
    if shutil.which("git") is None:
        pytest.skip("git executable not available")
    path = tmp_path / "work"
    path.mkdir()
    _git(path, "init", "-q")
    _git(path, "config", "user.name", "Test User")
    _git(path, "config", "user.email", "test@example.com")
    _git(path, "config", "commit.gpgsign", "false")
    monkeypatch.chdir(path)
    return GitWorkTree(path)
