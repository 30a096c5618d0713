"""
Commits API client.

This module provides a small HTTP client for the commits website. Every fetch
operation is fail-soft: transport errors, bad status codes and unparseable
payloads all degrade to "no data" instead of raising.
"""

from types import TracebackType

import httpx
import structlog
from pydantic import ValidationError

from .config import Settings, get_settings
from .exceptions import CommitsAPIError
from .models import Commit, CommitResult

logger = structlog.get_logger(__name__)

MAX_PAGE = 2**31 - 1


def normalize_branch(branch: str) -> str:
    """Remove one leading and one trailing slash from a branch path."""
    if branch.startswith("/"):
        branch = branch[1:]
    if branch.endswith("/"):
        branch = branch[:-1]
    return branch


def normalize_page(page: int) -> int:
    """Clamp a page number into the range the API accepts."""
    if page < 1:
        page = 1
    if page > MAX_PAGE:
        page = MAX_PAGE
    return page


class RustCommitsClient:
    """
    Client for the commits website.

    The client owns its HTTP connection pool unless one is passed in, and
    should be closed with ``close()`` or used as an async context manager.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """
        Initialize the commits client.

        Args:
            settings: Client settings (defaults to the global settings)
            http_client: Optional pre-built HTTP client; the caller keeps
                ownership of it
        """
        self.settings = settings or get_settings()
        self._owns_http_client = http_client is None
        self._http = http_client or httpx.AsyncClient(
            timeout=self.settings.request_timeout_seconds
        )
        self.last_error: CommitsAPIError | None = None
        self.is_closed = False

    async def __aenter__(self) -> "RustCommitsClient":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.close()

    async def close(self) -> None:
        """Release the HTTP client. Safe to call more than once."""
        if self.is_closed:
            return
        self.is_closed = True
        if self._owns_http_client:
            await self._http.aclose()

    async def _send(self, endpoint: str) -> CommitResult:
        """
        GET an endpoint and parse the response as a page of commits.

        Raises:
            CommitsAPIError: On transport, status or parse failures
        """
        url = self.settings.base_url + endpoint
        if self.is_closed or self._http.is_closed:
            raise CommitsAPIError("Client has been closed", endpoint=endpoint)

        try:
            response = await self._http.get(url)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise CommitsAPIError(
                f"Commits API returned {e.response.status_code}",
                status_code=e.response.status_code,
                endpoint=endpoint,
            ) from e
        except httpx.HTTPError as e:
            raise CommitsAPIError(
                f"Commits API request failed: {e}", endpoint=endpoint
            ) from e
        except httpx.InvalidURL as e:
            raise CommitsAPIError(f"Invalid commits URL: {e}", endpoint=endpoint) from e

        try:
            return CommitResult.model_validate_json(response.content)
        except ValidationError as e:
            raise CommitsAPIError(
                f"Invalid commits payload: {e.error_count()} error(s)",
                status_code=response.status_code,
                endpoint=endpoint,
            ) from e

    async def _fetch(self, endpoint: str) -> CommitResult | None:
        """Fetch a page, recording and logging failures instead of raising."""
        try:
            result = await self._send(endpoint)
        except CommitsAPIError as e:
            self.last_error = e
            logger.warning(
                "Failed to fetch commits",
                endpoint=endpoint,
                status_code=e.status_code,
                error=str(e),
            )
            return None

        self.last_error = None
        return result

    async def get_commit(self, commit_id: int) -> Commit | None:
        """
        Get the commit with the specified ID.

        Args:
            commit_id: The ID of the commit

        Returns:
            The commit, or None if it was not found or the request failed
        """
        result = await self._fetch(f"{commit_id}?format=json")
        if result is None or result.total < 1 or not result.results:
            return None
        return result.results[0]

    async def get_commits(self, page: int, branch: str = "") -> list[Commit]:
        """
        Get the commits on a page of a branch.

        Args:
            page: Page number (clamped to at least 1)
            branch: Branch path; leading/trailing slashes are stripped.
                Defaults to all branches.

        Returns:
            List of commits, empty on failure
        """
        endpoint = (
            f"r/{self.settings.repository}/{normalize_branch(branch)}"
            f"?p={normalize_page(page)}&format=json"
        )
        result = await self._fetch(endpoint)
        if result is None:
            return []
        return list(result.results)

    async def get_user_commits(
        self, username: str, page: int, branch: str = ""
    ) -> list[Commit]:
        """
        Get the commits by a user on a page, optionally limited to a branch.

        Args:
            username: The username of the author
            page: Page number (clamped to at least 1)
            branch: Branch path; leading/trailing slashes are stripped

        Returns:
            List of commits, empty on failure
        """
        # The query string precedes the repository path in this template.
        endpoint = (
            f"{username}?p={normalize_page(page)}&format=json"
            f"/{self.settings.repository}/{normalize_branch(branch)}"
        )
        result = await self._fetch(endpoint)
        if result is None:
            return []
        return list(result.results)
