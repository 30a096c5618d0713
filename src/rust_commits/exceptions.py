"""
Custom exceptions for the Rust commits client.

Fetch operations never raise these to the caller; they are recorded on the
client as a diagnostic channel instead.
"""

from typing import Any


class RustCommitsError(Exception):
    """Base exception for Rust commits client errors."""

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.code = code or "RUST_COMMITS_ERROR"
        self.context = context or {}


class CommitsAPIError(RustCommitsError):
    """Exception for commits API related errors."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        endpoint: str | None = None,
        context: dict[str, Any] | None = None,
    ):
        super().__init__(message, "COMMITS_API_ERROR", context)
        self.status_code = status_code
        self.endpoint = endpoint
