"""
Poll cache for new-commit detection.

Holds the commit IDs seen on the most recent poll so the next poll can tell
which commits are new.
"""

from collections.abc import Iterable

from ..models import Commit


class CommitPollCache:
    """
    Set of commit IDs from the last poll cycle.

    The cache is replaced wholesale after every cycle, never merged, so it
    always reflects exactly the last fetched page.
    """

    def __init__(self) -> None:
        self._ids: frozenset[int] = frozenset()

    def __len__(self) -> int:
        return len(self._ids)

    def __contains__(self, commit_id: object) -> bool:
        return commit_id in self._ids

    @property
    def ids(self) -> frozenset[int]:
        """IDs currently held in the cache."""
        return self._ids

    def is_empty(self) -> bool:
        """Check if no poll has populated the cache yet (or the last one was empty)."""
        return not self._ids

    def new_commits(self, commits: Iterable[Commit]) -> list[Commit]:
        """Return the commits not seen in the last poll, in their original order."""
        return [commit for commit in commits if commit.id not in self._ids]

    def replace(self, commits: Iterable[Commit]) -> None:
        """Replace the cached IDs with those of the given commits."""
        self._ids = frozenset(commit.id for commit in commits)
