"""
Pytest configuration and fixtures for Rust commits client tests.
"""

from collections.abc import AsyncIterator
from typing import Any

import httpx
import pytest
import pytest_asyncio

from rust_commits.client import RustCommitsClient
from rust_commits.config import Settings


def make_commit_payload(commit_id: int, **overrides: Any) -> dict[str, Any]:
    """Build a commit JSON object as the commits website returns it."""
    payload = {
        "id": commit_id,
        "repo": "rust_reboot",
        "branch": "main",
        "changeset": f"cs{commit_id}",
        "created": "2024-01-15T10:00:00",
        "likes": 3,
        "dislikes": 1,
        "message": f"Commit number {commit_id}",
        "user": {"name": "Helk", "avatar": "https://example.com/helk.png"},
    }
    payload.update(overrides)
    return payload


def make_page(*commit_ids: int, total: int | None = None) -> dict[str, Any]:
    """Build a commit listing response."""
    return {
        "total": len(commit_ids) if total is None else total,
        "results": [make_commit_payload(commit_id) for commit_id in commit_ids],
    }


class CommitsAPIStub:
    """
    Fake commits website served through httpx.MockTransport.

    Queued responses are served in order; the last one is repeated once the
    queue runs dry. Exceptions are raised instead of returning a response.
    """

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self._responses: list[Any] = []

    def queue(self, *responses: Any) -> None:
        self._responses.extend(responses)

    def queue_pages(self, *pages: dict[str, Any]) -> None:
        self.queue(*(httpx.Response(200, json=page) for page in pages))

    @property
    def urls(self) -> list[str]:
        return [str(request.url) for request in self.requests]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if not self._responses:
            return httpx.Response(200, json=make_page())

        response = (
            self._responses.pop(0) if len(self._responses) > 1 else self._responses[0]
        )
        if isinstance(response, Exception):
            raise response
        # Fresh copy so repeated responses are never reused across requests
        return httpx.Response(
            response.status_code, headers=response.headers, content=response.content
        )


@pytest.fixture
def mock_settings() -> Settings:
    """Settings for testing."""
    return Settings(_env_file=None, log_level="DEBUG", log_format="console")


@pytest.fixture
def commits_api() -> CommitsAPIStub:
    """Fake commits website."""
    return CommitsAPIStub()


@pytest_asyncio.fixture
async def http_client(commits_api: CommitsAPIStub) -> AsyncIterator[httpx.AsyncClient]:
    """HTTP client wired to the fake commits website."""
    async with httpx.AsyncClient(
        transport=httpx.MockTransport(commits_api.handler)
    ) as client:
        yield client


@pytest.fixture
def commits_client(
    mock_settings: Settings, http_client: httpx.AsyncClient
) -> RustCommitsClient:
    """Commits client backed by the fake commits website."""
    return RustCommitsClient(mock_settings, http_client=http_client)
