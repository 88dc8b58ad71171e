# Author: PB & Claude
# Maintainer: PB
# Original date: 2026.10.16
# License: (c) HRDAG, 2025, GPL-2 or newer
#
# ------
# src/gittfs/core/repository.py

"""
Git repository handle and the tfs remotes recorded in it.

TFS remotes live in the git config under ``tfs-remote.<id>.*`` and every
commit imported from TFS carries a trailer of the form::

    git-tfs-id: [http://server:8080/tfs]$/Project/Trunk;C1234

which ties the commit to a TFS location and changeset.
"""

from __future__ import annotations

import re
from collections import deque
from dataclasses import dataclass
from typing import TYPE_CHECKING, Final, Optional

from loguru import logger

from gittfs.system.exceptions import GitCommandError, RemoteNotFoundError

if TYPE_CHECKING:
    from gittfs.system.execution import GitHelpers


TFS_REMOTE_SECTION: Final = "tfs-remote"
TFS_REMOTE_REFS: Final = "refs/remotes/tfs/"
DERIVED_REMOTE_ID: Final = "(derived)"

GIT_TFS_ID_PATTERN: Final = re.compile(
    r"^git-tfs-id:\s+\[(?P<url>[^\]]+)\](?P<path>.+?);C(?P<changeset>\d+)\s*$",
    re.MULTILINE,
)


@dataclass(frozen=True)
class TfsRemote:
    """A TFS location the repository tracks."""
    id: str
    tfs_url: str
    tfs_repository_path: Optional[str] = None
    username: Optional[str] = None
    legacy_urls: tuple[str, ...] = ()
    # Inferred from commit history rather than read from the git config
    is_derived: bool = False

    @property
    def remote_ref(self) -> str:
        if self.is_derived:
            return f"{self.tfs_url}{self.tfs_repository_path or ''}"
        return TFS_REMOTE_REFS + self.id

    def matches(self, tfs_url: str, tfs_repository_path: str) -> bool:
        """True when the url (or a legacy url) and path identify this remote."""
        known_urls = {_normalize_url(u) for u in (self.tfs_url, *self.legacy_urls) if u}
        if _normalize_url(tfs_url) not in known_urls:
            return False
        return (self.tfs_repository_path or "").lower() == tfs_repository_path.lower()


@dataclass(frozen=True)
class TfsChangesetInfo:
    """A git commit imported from a TFS changeset."""
    remote: TfsRemote
    changeset_id: int
    git_commit: str


def _normalize_url(url: str) -> str:
    return url.rstrip("/").lower()


class _HistoryPages:
    """Commits reachable from head, read from git log one page at a time.

    A page is only read when the walk asks for a commit not loaded yet, so
    a TFS commit close to head costs a single short git log.
    """

    def __init__(self, git: GitHelpers, head_commit: str, page_size: int):
        self.git = git
        self.head_commit = head_commit
        self.page_size = page_size
        self.commits: dict[str, tuple[list[str], str]] = {}
        self.loaded = 0
        self.exhausted = False

    def get(self, sha: str) -> Optional[tuple[list[str], str]]:
        while sha not in self.commits and not self.exhausted:
            self._read_page()
        return self.commits.get(sha)

    def _read_page(self) -> None:
        output = self.git.command(
            "log",
            "--format=%H %P%x1f%B%x1e",
            f"--skip={self.loaded}",
            f"--max-count={self.page_size}",
            self.head_commit,
        )
        count = 0
        for record in output.split("\x1e"):
            if not record.strip():
                continue
            header, _, message = record.lstrip("\n").partition("\x1f")
            shas = header.split()
            self.commits[shas[0]] = (shas[1:], message)
            count += 1
        self.loaded += count
        if count < self.page_size:
            self.exhausted = True


class GitRepository:
    """Handle on a local git repository, driven through the git executable."""

    history_page_size = 200

    def __init__(self, git_dir: str, git: GitHelpers):
        self.git_dir = git_dir
        self.git = git
        self._remotes: Optional[list[TfsRemote]] = None
        self.closed = False

    def __enter__(self) -> "GitRepository":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        if self.closed:
            return
        logger.debug(f"Closing repository {self.git_dir}")
        self._remotes = None
        self.closed = True

    # ---- config and refs ----

    def config_get_regexp(self, pattern: str) -> list[tuple[str, str]]:
        """All (key, value) pairs whose key matches pattern; empty if none."""
        result = self.git.run("config", "--get-regexp", pattern, check=False)
        if result.returncode == 1:
            # git config exits 1 when nothing matches
            return []
        if not result.success:
            raise GitCommandError(
                result.stderr.strip() or "git config failed",
                command=["git", "config", "--get-regexp", pattern],
                returncode=result.returncode,
                stderr=result.stderr,
            )
        entries = []
        for line in result.stdout.splitlines():
            key, _, value = line.partition(" ")
            entries.append((key, value))
        return entries

    def set_config(self, key: str, value: str) -> None:
        self.git.run("config", key, value)
        self._remotes = None

    def update_ref(self, ref: str, commit: str) -> None:
        self.git.run("update-ref", ref, commit)

    def resolve_commit(self, ref: str) -> Optional[str]:
        """Commit id ref points to, or None if it does not name a commit."""
        result = self.git.run("rev-parse", "--verify", "--quiet", f"{ref}^{{commit}}", check=False)
        if not result.success:
            return None
        return result.stdout.strip() or None

    # ---- tfs remotes ----

    def read_all_tfs_remotes(self) -> list[TfsRemote]:
        """Remotes configured under tfs-remote.<id>.*, in config order."""
        if self._remotes is not None:
            return list(self._remotes)

        settings: dict[str, dict[str, str]] = {}
        prefix = TFS_REMOTE_SECTION + "."
        for key, value in self.config_get_regexp(r"^tfs-remote\."):
            remote_id, _, prop = key[len(prefix):].rpartition(".")
            if not remote_id:
                continue
            settings.setdefault(remote_id, {})[prop] = value

        remotes = []
        for remote_id, props in settings.items():
            legacy = props.get("legacy-urls", "")
            remotes.append(TfsRemote(
                id=remote_id,
                tfs_url=props.get("url", ""),
                tfs_repository_path=props.get("repository"),
                username=props.get("username"),
                legacy_urls=tuple(u for u in legacy.split(",") if u),
            ))
        self._remotes = remotes
        return list(remotes)

    def read_tfs_remote(self, remote_id: str) -> TfsRemote:
        for remote in self.read_all_tfs_remotes():
            if remote.id == remote_id:
                return remote
        raise RemoteNotFoundError(f"Unable to locate git-tfs remote with id = {remote_id}", remote_id=remote_id)

    def has_tfs_remote(self, remote_id: str) -> bool:
        return any(r.id == remote_id for r in self.read_all_tfs_remotes())

    def create_tfs_remote(self, remote: TfsRemote, autocrlf: Optional[str] = None) -> None:
        """Write a remote's settings into the git config."""
        section = f"{TFS_REMOTE_SECTION}.{remote.id}"
        self.set_config(f"{section}.url", remote.tfs_url)
        if remote.tfs_repository_path:
            self.set_config(f"{section}.repository", remote.tfs_repository_path)
        if remote.username:
            self.set_config(f"{section}.username", remote.username)
        if remote.legacy_urls:
            self.set_config(f"{section}.legacy-urls", ",".join(remote.legacy_urls))
        if autocrlf is not None:
            self.set_config("core.autocrlf", autocrlf)

    # ---- history ----

    def get_last_parent_tfs_commits(self, head: str = "HEAD") -> list[TfsChangesetInfo]:
        """Nearest commits imported from TFS, walking back from head.

        Each ancestry path stops at its first TFS commit, so a merge of two
        TFS branches yields one entry per branch. Results are ordered
        breadth-first from head; an unborn head yields an empty list.
        """
        head_commit = self.resolve_commit(head)
        if head_commit is None:
            logger.debug(f"{head} does not name a commit; no tfs parents")
            return []

        history = _HistoryPages(self.git, head_commit, self.history_page_size)
        remotes = self.read_all_tfs_remotes()

        found = []
        seen = set()
        queue = deque([head_commit])
        while queue:
            sha = queue.popleft()
            if sha in seen:
                continue
            seen.add(sha)
            commit = history.get(sha)
            if commit is None:
                continue
            parents, message = commit
            info = self._parse_tfs_id(sha, message, remotes)
            if info is not None:
                found.append(info)
                continue
            queue.extend(parents)

        logger.debug(f"Found {len(found)} tfs parent(s) of {head} reading {history.loaded} commit(s)")
        return found

    @staticmethod
    def _parse_tfs_id(sha: str, message: str, remotes: list[TfsRemote]) -> Optional[TfsChangesetInfo]:
        matches = list(GIT_TFS_ID_PATTERN.finditer(message))
        if not matches:
            return None
        # Rewritten commits may carry several trailers; the last one wins
        match = matches[-1]
        url, path = match.group("url"), match.group("path")
        remote = next((r for r in remotes if r.matches(url, path)), None)
        if remote is None:
            remote = TfsRemote(id=DERIVED_REMOTE_ID, tfs_url=url, tfs_repository_path=path, is_derived=True)
        return TfsChangesetInfo(remote=remote, changeset_id=int(match.group("changeset")), git_commit=sha)
