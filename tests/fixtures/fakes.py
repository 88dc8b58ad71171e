# Author: PB & Claude
# Maintainer: PB
# Original date: 2026.10.16
# License: (c) HRDAG, 2025, GPL-2 or newer
#
# ------
# tests/fixtures/fakes.py

"""
In-memory stand-ins for the git side of git-tfs.

FakeRepository answers the handful of queries the bootstrap pipeline makes
and records what was asked. FakeGit plays the git executable for the
probes the dispatcher and the locator run.
"""

from typing import Optional

from gittfs.core.repository import TfsChangesetInfo, TfsRemote
from gittfs.system.exceptions import GitCommandError, RemoteNotFoundError
from gittfs.system.execution import CommandResult, GitHelpers


def make_remote(remote_id: str = "default", url: str = "http://tfs:8080/tfs",
                path: str = "$/Project/Trunk") -> TfsRemote:
    return TfsRemote(id=remote_id, tfs_url=url, tfs_repository_path=path)


def make_derived(url: str = "http://tfs:8080/tfs", path: str = "$/Project/Branch") -> TfsRemote:
    return TfsRemote(id="(derived)", tfs_url=url, tfs_repository_path=path, is_derived=True)


def tfs_parent(remote: TfsRemote, changeset_id: int = 42, sha: str = "a" * 40) -> TfsChangesetInfo:
    return TfsChangesetInfo(remote=remote, changeset_id=changeset_id, git_commit=sha)


class FakeRepository:
    """Repository handle with canned history and remotes."""

    def __init__(self, parents=(), remotes=(), git_dir: str = ".git"):
        self.parents = list(parents)
        self.remotes = list(remotes)
        self.git_dir = git_dir
        self.history_reads = 0
        self.refs: dict[str, str] = {}
        self.closed = False

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def close(self):
        self.closed = True

    def get_last_parent_tfs_commits(self, head: str = "HEAD"):
        self.history_reads += 1
        return list(self.parents)

    def read_all_tfs_remotes(self):
        return list(self.remotes)

    def read_tfs_remote(self, remote_id: str) -> TfsRemote:
        for remote in self.remotes:
            if remote.id == remote_id:
                return remote
        raise RemoteNotFoundError(f"Unable to locate git-tfs remote with id = {remote_id}", remote_id=remote_id)

    def has_tfs_remote(self, remote_id: str) -> bool:
        return any(r.id == remote_id for r in self.remotes)

    def create_tfs_remote(self, remote: TfsRemote, autocrlf: Optional[str] = None):
        self.remotes.append(remote)

    def update_ref(self, ref: str, commit: str):
        self.refs[ref] = commit

    def resolve_commit(self, ref: str) -> Optional[str]:
        return self.refs.get(ref)


class FakeGit(GitHelpers):
    """GitHelpers answering rev-parse probes without running git.

    prefix / cdup set to None make the matching probe fail the way git does
    outside a repository.
    """

    def __init__(self, repository: Optional[FakeRepository] = None,
                 prefix: Optional[str] = "", cdup: Optional[str] = None):
        super().__init__()
        self.repository = repository if repository is not None else FakeRepository()
        self.prefix = prefix
        self.cdup = cdup
        self.calls: list[tuple[str, ...]] = []

    def run(self, *args: str, check: bool = True) -> CommandResult:
        self.calls.append(args)
        if args[:2] == ("rev-parse", "--show-prefix"):
            return self._answer(self.prefix)
        if args[:2] == ("rev-parse", "--show-cdup"):
            return self._answer(self.cdup)
        if args[:1] == ("--version",):
            return CommandResult(0, "git version 2.43.0\n", "")
        return CommandResult(0, "", "")

    @staticmethod
    def _answer(value: Optional[str]) -> CommandResult:
        if value is None:
            raise GitCommandError("fatal: not a git repository (or any of the parent directories): .git",
                                  returncode=128)
        return CommandResult(0, value + "\n", "")

    def make_repository(self, git_dir: str):
        self.repository.git_dir = git_dir
        return self.repository


class FakeSyncEngine:
    """Sync engine recording the calls it receives."""

    def __init__(self, fetched: int = 3, changeset_id: int = 100):
        self.fetched = fetched
        self.changeset_id = changeset_id
        self.fetch_calls = []
        self.checkin_calls = []
        self.closed = False

    def fetch(self, repository, remote, authors, up_to=None) -> int:
        self.fetch_calls.append((remote.id, up_to))
        return self.fetched

    def checkin(self, repository, remote, authors, message=None) -> int:
        self.checkin_calls.append((remote.id, message))
        return self.changeset_id

    def close(self) -> None:
        self.closed = True
