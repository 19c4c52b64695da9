"""
Polling view controller base.

Each chart view owns its state for its lifetime: the parameters the user
picked, the last successfully computed result and a request counter. A
refresh fetches from the archive (the only step that may suspend) and then
reshapes the rows synchronously.

Refreshes may overlap when a poll fires while the previous fetch is still
outstanding. Every refresh is numbered, and a response older than the one
already applied is discarded, so the latest request always wins. A failed
query leaves the previous result in place and raises a non-blocking
notification.
"""

import asyncio
import inspect
import logging
import time
from abc import ABC, abstractmethod
from typing import Any, Callable, List, Optional

from ..archive.base import ArchiveGateway, Row
from ..config import get_config
from ..models.config import AppConfig
from ..validation import ArchiveQueryError, ErrorSeverity, handle_query_error

logger = logging.getLogger(__name__)

Notifier = Callable[[str], None]
Clock = Callable[[], float]


def _log_notification(message: str) -> None:
    logger.warning(message)


class PollingView(ABC):
    """
    Base class for views that periodically re-query the archive.

    Subclasses implement ``_prepare`` (capture the parameters of one request,
    including the current time) and ``_apply`` (turn fetched rows into the
    view's result).
    """

    def __init__(
        self,
        gateway: ArchiveGateway,
        config: Optional[AppConfig] = None,
        clock: Optional[Clock] = None,
        notify: Optional[Notifier] = None,
    ):
        """
        Args:
            gateway: Archive gateway to query
            config: Application configuration (defaults to the global one)
            clock: Returns the current time in epoch seconds (defaults to time.time)
            notify: Receives user-facing messages about failed refreshes
        """
        self.gateway = gateway
        self.config = config or get_config()
        self.clock = clock or time.time
        self.notify = notify or _log_notification
        self.interval_ms = self.config.archive.update_interval_ms
        self.last_error: Optional[Exception] = None
        self._request_seq = 0
        self._applied_seq = 0

    def now_ms(self) -> int:
        return int(self.clock() * 1000)

    @property
    def applied_seq(self) -> int:
        """Sequence number of the request whose result is currently shown."""
        return self._applied_seq

    async def _load(self, query: str) -> List[Row]:
        load = self.gateway.load
        if inspect.iscoroutinefunction(load):
            return await load(query)
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, load, query)

    @abstractmethod
    def _prepare(self) -> Any:
        """Capture everything one refresh needs, before any await."""

    @abstractmethod
    async def _fetch(self, request: Any) -> Any:
        """Run the archive queries of ``request``."""

    @abstractmethod
    def _apply(self, request: Any, fetched: Any) -> None:
        """Reshape fetched rows into the view's result."""

    async def refresh(self) -> bool:
        """
        Fetch and recompute the view once.

        Returns:
            True if the result was updated, False if the query failed or a
            newer refresh had already been applied
        """
        self._request_seq += 1
        seq = self._request_seq
        request = self._prepare()

        try:
            fetched = await self._fetch(request)
        except ArchiveQueryError as e:
            self.last_error = e
            handle_query_error(
                error=e,
                context=f"{type(self).__name__} refresh #{seq}",
                severity=ErrorSeverity.ERROR,
                reraise=False,
                logger=logger,
            )
            self.notify(f"Could not load history: {e}")
            return False

        if seq < self._applied_seq:
            logger.debug(
                f"Discarding stale response #{seq} (showing #{self._applied_seq})"
            )
            return False

        self._apply(request, fetched)
        self._applied_seq = seq
        self.last_error = None
        return True

    async def run(self, stop_event: asyncio.Event, interval_s: Optional[float] = None) -> None:
        """
        Refresh now and then every archive interval until ``stop_event`` is set.
        """
        interval = interval_s if interval_s is not None else self.interval_ms / 1000
        logger.info(f"Starting {type(self).__name__} polling every {interval}s")
        while not stop_event.is_set():
            await self.refresh()
            try:
                await asyncio.wait_for(stop_event.wait(), timeout=interval)
            except asyncio.TimeoutError:
                pass
        logger.info(f"Stopped {type(self).__name__} polling")
