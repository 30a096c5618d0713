"""
Rust Commits

An async client for the Facepunch commits website that can poll for and
announce newly published commits.
"""

__version__ = "0.1.0"

from .client import RustCommitsClient, normalize_branch, normalize_page
from .config import Settings
from .exceptions import CommitsAPIError, RustCommitsError
from .log_setup import setup_logging
from .models import Commit, CommitResult, CommitUser
from .polling import CommitPoller, CommitPollCache

__all__ = [
    "Settings",
    "RustCommitsClient",
    "CommitPoller",
    "CommitPollCache",
    "Commit",
    "CommitUser",
    "CommitResult",
    "RustCommitsError",
    "CommitsAPIError",
    "normalize_branch",
    "normalize_page",
    "setup_logging",
]
