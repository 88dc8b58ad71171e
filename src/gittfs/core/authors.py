# Author: PB & Claude
# Maintainer: PB
# Original date: 2026.10.16
# License: (c) HRDAG, 2025, GPL-2 or newer
#
# ------
# src/gittfs/core/authors.py

"""
Authors file: translation between TFS logins and git identities.

One mapping per line::

    DOMAIN\\jdoe = John Doe <john.doe@example.com>

Blank lines and lines starting with '#' are ignored. A copy of the last
explicitly supplied file is cached in the control directory so later runs
pick it up without -A.
"""

from __future__ import annotations

import re
import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Final, Optional

from loguru import logger
from rich.console import Console
from rich.markup import escape

from gittfs.system.exceptions import IdentityMapError

if TYPE_CHECKING:
    from gittfs.core.globals import ProcessContext

CACHED_AUTHORS_FILE_NAME: Final = "git-tfs_authors"

AUTHOR_LINE_PATTERN: Final = re.compile(r"^(?P<tfs>.+?)\s*=\s*(?P<name>.+?)\s*<(?P<email>[^<>]*)>\s*$")


@dataclass(frozen=True)
class Author:
    """A git identity."""
    name: str
    email: str

    def __str__(self) -> str:
        return f"{self.name} <{self.email}>"


@dataclass
class IdentityMap:
    """TFS login to git author mapping; lookups ignore case of the login."""
    authors: dict[str, Author] = field(default_factory=dict)
    source: Optional[Path] = None

    def __len__(self) -> int:
        return len(self.authors)

    def __bool__(self) -> bool:
        return bool(self.authors)

    def find_by_tfs_login(self, login: str) -> Optional[Author]:
        return self.authors.get(login.lower())

    def find_tfs_login(self, email: str) -> Optional[str]:
        """Reverse lookup: the TFS login mapped to a git e-mail address."""
        wanted = email.lower()
        for login, author in self.authors.items():
            if author.email.lower() == wanted:
                return login
        return None


def parse_identity_map(text: str, source: Optional[Path] = None) -> IdentityMap:
    """Parse authors file content.

    Raises:
        IdentityMapError: On a malformed line or a login mapped twice
    """
    authors: dict[str, Author] = {}
    for line_number, raw in enumerate(text.splitlines(), start=1):
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        match = AUTHOR_LINE_PATTERN.match(line)
        if match is None:
            raise IdentityMapError(
                f"Invalid format of Authors file on line {line_number}.",
                path=str(source) if source else None,
                line_number=line_number,
            )
        login = match.group("tfs").lower()
        if login in authors:
            raise IdentityMapError(
                f"Duplicate TFS login '{match.group('tfs')}' in Authors file on line {line_number}.",
                path=str(source) if source else None,
                line_number=line_number,
            )
        authors[login] = Author(name=match.group("name"), email=match.group("email").strip())
    return IdentityMap(authors=authors, source=source)


class AuthorsFile:
    """Reads the authors file named on the command line or the cached copy."""

    def cached_path(self, git_dir: str) -> Path:
        return Path(git_dir) / CACHED_AUTHORS_FILE_NAME

    def parse(self, authors_file_path: Optional[str], git_dir: str) -> IdentityMap:
        """Load the identity map for this run.

        Args:
            authors_file_path: File given by the user, or None
            git_dir: Control directory holding the cached copy

        Returns:
            The parsed map; empty when no file is available

        Raises:
            IdentityMapError: If the file is missing (explicit path) or malformed
        """
        if authors_file_path:
            path = Path(authors_file_path)
            if not path.is_file():
                raise IdentityMapError(f"Authors file cannot be found: '{path}'", path=str(path))
            identity_map = self._read(path)
            self._save_cache(path, git_dir)
            return identity_map

        cached = self.cached_path(git_dir)
        if cached.is_file():
            return self._read(cached)
        return IdentityMap()

    def _read(self, path: Path) -> IdentityMap:
        logger.debug(f"Reading authors file {path}")
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise IdentityMapError(f"Unable to read Authors file '{path}': {e}", path=str(path)) from e
        return parse_identity_map(text, source=path)

    def _save_cache(self, path: Path, git_dir: str) -> None:
        if not Path(git_dir).is_dir():
            return
        cached = self.cached_path(git_dir)
        if cached.exists() and path.resolve() == cached.resolve():
            return
        shutil.copyfile(path, cached)
        logger.debug(f"Cached authors file to {cached}")


def load_authors(context: "ProcessContext", console: Console, authors_file: Optional[AuthorsFile] = None) -> IdentityMap:
    """Load the identity map into the run context.

    A file the user named explicitly must load; a problem with the cached
    copy only produces a warning and the run continues without mappings.
    """
    authors_file = authors_file or AuthorsFile()
    git_dir = context.control_dir
    try:
        context.authors = authors_file.parse(context.authors_file_path, git_dir)
    except Exception as e:
        logger.opt(exception=e).debug("Failed to read authors file")
        if context.authors_file_path:
            raise
        console.print(
            f"warning: author file ignored due to a problem occuring when reading it :\n\t{escape(str(e))}"
        )
        console.print(f"         Verify the file :{escape(str(authors_file.cached_path(git_dir)))}")
        context.authors = IdentityMap()
    return context.authors
