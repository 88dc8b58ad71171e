# Author: PB & Claude
# Maintainer: PB
# Original date: 2026.10.16
# License: (c) HRDAG, 2025, GPL-2 or newer
#
# ------
# src/gittfs/core/protocols.py

"""
Interface of the TFS synchronization engine.

The engine that talks to the TFS server and converts changesets into git
commits is installed separately and found through the ``gittfs.sync_engines``
entry point group. Any object implementing these methods will do.
"""

from typing import Optional, Protocol

from gittfs.core.authors import IdentityMap
from gittfs.core.repository import GitRepository, TfsRemote


class SyncEngine(Protocol):
    """Operations git-tfs delegates to the TFS sync engine."""

    def fetch(
        self,
        repository: GitRepository,
        remote: TfsRemote,
        authors: IdentityMap,
        up_to: Optional[int] = None,
    ) -> int:
        """Import new TFS changesets into refs/remotes/tfs/<remote id>.

        Args:
            repository: Repository to import into
            remote: Remote to fetch
            authors: Identity map for commit authors
            up_to: Last changeset to fetch, or None for all

        Returns:
            Number of changesets fetched
        """
        ...

    def checkin(
        self,
        repository: GitRepository,
        remote: TfsRemote,
        authors: IdentityMap,
        message: Optional[str] = None,
    ) -> int:
        """Check in the commits since the last TFS commit.

        Returns:
            Id of the new TFS changeset
        """
        ...

    def close(self) -> None:
        """Release server connections."""
        ...
