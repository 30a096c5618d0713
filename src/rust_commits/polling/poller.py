"""
Commit poller.

This module runs the timed polling loop that fetches the latest commits and
notifies subscribers about commits that appeared since the previous poll.
"""

import asyncio
import inspect
from collections.abc import Awaitable, Callable
from datetime import UTC, datetime, timedelta
from types import TracebackType

import structlog

from ..client import RustCommitsClient
from ..config import Settings, get_settings
from ..models import Commit
from .cache import CommitPollCache

logger = structlog.get_logger(__name__)

CommitCallback = Callable[[list[Commit]], Awaitable[None] | None]


class CommitPoller:
    """
    Polls the commits website and notifies subscribers about new commits.

    The first successful poll only seeds the cache; subscribers are notified
    from the second poll onwards, and only when new commits were found.
    """

    def __init__(
        self,
        client: RustCommitsClient | None = None,
        settings: Settings | None = None,
    ):
        """
        Initialize the commit poller.

        Args:
            client: Commits API client; one is created from settings if omitted.
                The poller closes it on dispose either way.
            settings: Client settings (defaults to the client's settings)
        """
        if client is not None:
            self.settings = settings or client.settings
            self.client = client
        else:
            self.settings = settings or get_settings()
            self.client = RustCommitsClient(self.settings)

        self.cache = CommitPollCache()
        self.next_poll_time: datetime | None = None

        self._subscribers: list[CommitCallback] = []
        self._is_running = False
        self._is_disposed = False
        self._disposed_event = asyncio.Event()

    @property
    def is_running(self) -> bool:
        """Check if the polling loop is active."""
        return self._is_running

    @property
    def is_disposed(self) -> bool:
        """Check if the poller has been disposed."""
        return self._is_disposed

    async def __aenter__(self) -> "CommitPoller":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.dispose()

    def subscribe(self, callback: CommitCallback) -> Callable[[], None]:
        """
        Register a callback for new commits.

        Args:
            callback: Called with the list of new commits after a poll.
                May be a plain function or a coroutine function.

        Returns:
            A handle that unsubscribes the callback when called
        """
        self._subscribers.append(callback)
        return lambda: self.unsubscribe(callback)

    def unsubscribe(self, callback: CommitCallback) -> None:
        """Remove a previously registered callback. Unknown callbacks are ignored."""
        if callback in self._subscribers:
            self._subscribers.remove(callback)

    async def _notify(self, commits: list[Commit]) -> None:
        """Call every subscriber in registration order."""
        for callback in list(self._subscribers):
            try:
                result = callback(list(commits))
                if inspect.isawaitable(result):
                    await result
            except Exception as e:
                logger.error(
                    "Commit subscriber failed",
                    subscriber=getattr(callback, "__name__", repr(callback)),
                    error=str(e),
                )

    async def poll_once(self) -> list[Commit]:
        """
        Run a single poll cycle.

        Returns:
            The new commits subscribers were notified about, or an empty list
            if no notification was sent
        """
        commits = await self.client.get_commits(1)
        new_commits = self.cache.new_commits(commits)
        should_notify = not self.cache.is_empty() and bool(new_commits)

        if should_notify:
            logger.info(
                "New commits found",
                count=len(new_commits),
                commit_ids=[commit.id for commit in new_commits],
            )
            await self._notify(new_commits)

        self.cache.replace(commits)

        logger.debug(
            "Poll cycle completed",
            fetched=len(commits),
            new=len(new_commits),
            notified=should_notify,
        )

        return new_commits if should_notify else []

    async def start_polling(
        self, interval: timedelta | float | None = None
    ) -> None:
        """
        Poll the commits website until the poller is disposed.

        Args:
            interval: Time between polls, as a timedelta or seconds.
                Defaults to the configured interval (5 minutes).
        """
        if self._is_disposed:
            logger.warning("Cannot start polling on a disposed poller")
            return
        if self._is_running:
            logger.warning("Polling already running")
            return

        if interval is None:
            interval = timedelta(seconds=self.settings.poll_interval_seconds)
        elif not isinstance(interval, timedelta):
            interval = timedelta(seconds=interval)
        if interval <= timedelta(0):
            raise ValueError(f"Polling interval must be positive, got {interval}")

        self._is_running = True
        logger.info(
            "Starting commit polling",
            repository=self.settings.repository,
            interval_seconds=interval.total_seconds(),
        )

        try:
            while not self._is_disposed:
                now = datetime.now(UTC)
                if self.next_poll_time is not None and now < self.next_poll_time:
                    await self._wait_until(self.next_poll_time)
                    continue

                self.next_poll_time = now + interval
                await self.poll_once()
        except asyncio.CancelledError:
            logger.info("Commit polling cancelled")
            raise
        finally:
            self._is_running = False
            logger.info("Commit polling stopped")

    async def _wait_until(self, deadline: datetime) -> None:
        """Sleep until the deadline, waking early if the poller is disposed."""
        delay = (deadline - datetime.now(UTC)).total_seconds()
        if delay <= 0:
            return
        try:
            await asyncio.wait_for(self._disposed_event.wait(), timeout=delay)
        except asyncio.TimeoutError:
            pass

    async def dispose(self) -> None:
        """Stop polling and release the HTTP client. Safe to call more than once."""
        if self._is_disposed:
            return

        self._is_disposed = True
        self._disposed_event.set()
        await self.client.close()
        logger.info("Commit poller disposed")
