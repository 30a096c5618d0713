"""
Polling system for the Rust commits client.

This package contains the timed polling loop and the cache used to detect
newly published commits.
"""

from .cache import CommitPollCache
from .poller import CommitPoller

__all__ = ["CommitPoller", "CommitPollCache"]
