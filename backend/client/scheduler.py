"""
Client-side request coalescing.

Reads: callers asking for the same key before the next read tick share one
network call; each caller holds its own future so abandoning (cancelling) one
never cancels the call for the others. Keys whose callers have all gone away
by tick time issue nothing.

Writes: new identifiers accumulate in an ordered set flushed as one bulk call
per bulk interval; selection updates keep only the latest full order, sent on
the next selection flush. Write failures are logged and dropped, the next
user edit re-sends a fresher snapshot.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, List, Optional
from urllib.parse import urlencode

from core.config import ClientConfigs
from core.exceptions import TransportFailure
from client.picker_api import unselected_params

logger = logging.getLogger(__name__)

Fetcher = Callable[[], Awaitable[Any]]


@dataclass
class PendingRead:
    fetcher: Fetcher
    waiters: List[asyncio.Future] = field(default_factory=list)

    def live_waiters(self) -> List[asyncio.Future]:
        return [w for w in self.waiters if not w.done()]


class RequestScheduler:
    def __init__(
        self,
        transport,
        read_interval: Optional[float] = None,
        bulk_interval: Optional[float] = None,
        selection_interval: Optional[float] = None,
        auto_start: bool = True,
    ):
        self.transport = transport
        self.read_interval = read_interval or ClientConfigs.READ_TICK_SECONDS
        self.bulk_interval = bulk_interval or ClientConfigs.BULK_FLUSH_SECONDS
        self.selection_interval = selection_interval or ClientConfigs.SELECTION_FLUSH_SECONDS
        self.auto_start = auto_start

        self._pending_reads: Dict[str, PendingRead] = {}
        # dict as an insertion-ordered set
        self._pending_add_ids: Dict[int, None] = {}
        self._pending_selection: Optional[List[int]] = None
        self.last_sent_selection: Optional[List[int]] = None

        self._timers: Dict[str, asyncio.Task] = {}
        self._in_flight: set = set()

    # -- reads -----------------------------------------------------------

    def enqueue_read(self, key: str, fetcher: Fetcher) -> asyncio.Future:
        """
        Register interest in ``key``; the returned future resolves with the
        shared result (or fails with the shared TransportFailure).
        """
        loop = asyncio.get_running_loop()
        pending = self._pending_reads.get(key)
        if pending is None:
            pending = PendingRead(fetcher=fetcher)
            self._pending_reads[key] = pending
        waiter = loop.create_future()
        pending.waiters.append(waiter)
        self._ensure_timer("reads", self.read_interval, self.drain_reads)
        return waiter

    def fetch_state(self) -> asyncio.Future:
        return self.enqueue_read("state", self.transport.get_state)

    def fetch_unselected(self, filter_text: str, offset: int, limit: int) -> asyncio.Future:
        params = unselected_params(filter_text, offset, limit)
        key = f"unselected?{urlencode(sorted(params.items()))}"
        return self.enqueue_read(
            key, lambda: self.transport.get_unselected_page(filter_text, offset, limit)
        )

    @property
    def pending_read_keys(self) -> List[str]:
        return list(self._pending_reads)

    async def drain_reads(self) -> int:
        """Issue one call per pending key; returns how many calls were started."""
        if not self._pending_reads:
            return 0
        entries = list(self._pending_reads.items())
        self._pending_reads.clear()

        started = 0
        for key, pending in entries:
            if not pending.live_waiters():
                logger.debug(f"Dropping read {key}: no callers left")
                continue
            task = asyncio.ensure_future(self._execute_read(key, pending))
            self._in_flight.add(task)
            task.add_done_callback(self._in_flight.discard)
            started += 1
        return started

    async def _execute_read(self, key: str, pending: PendingRead) -> None:
        try:
            data = await pending.fetcher()
        except TransportFailure as e:
            logger.warning(f"Read {key} failed for {len(pending.waiters)} caller(s): {e}")
            self._fan_out(pending, error=e)
            return
        except Exception as e:
            logger.error(f"Read {key} raised unexpectedly: {e}", exc_info=True)
            self._fan_out(pending, error=TransportFailure(f"Request failed: {e}"))
            return
        self._fan_out(pending, result=data)

    @staticmethod
    def _fan_out(pending: PendingRead, result: Any = None, error: Optional[BaseException] = None) -> None:
        for waiter in pending.live_waiters():
            if error is not None:
                waiter.set_exception(error)
            else:
                waiter.set_result(result)

    async def wait_in_flight(self) -> None:
        """Wait until every started read has fanned out its outcome."""
        while self._in_flight:
            await asyncio.gather(*list(self._in_flight), return_exceptions=True)

    # -- writes ----------------------------------------------------------

    def enqueue_add(self, identifier: Any) -> bool:
        """Queue a new identifier for the next bulk flush; returns False if ignored."""
        if isinstance(identifier, bool) or not isinstance(identifier, int) or identifier <= 0:
            return False
        if identifier in self._pending_add_ids:
            return False
        self._pending_add_ids[identifier] = None
        self._ensure_timer("bulk", self.bulk_interval, self.flush_bulk)
        return True

    def enqueue_selection(self, order: List[int]) -> None:
        """Replace any pending selection snapshot with a copy of ``order``."""
        self._pending_selection = list(order)
        self._ensure_timer("selection", self.selection_interval, self.flush_selection)

    @property
    def pending_add_ids(self) -> List[int]:
        return list(self._pending_add_ids)

    @property
    def pending_selection(self) -> Optional[List[int]]:
        return None if self._pending_selection is None else list(self._pending_selection)

    async def flush_bulk(self) -> bool:
        if not self._pending_add_ids:
            return False
        ids = list(self._pending_add_ids)
        self._pending_add_ids.clear()
        try:
            result = await self.transport.post_bulk(ids)
        except TransportFailure as e:
            logger.error(f"Bulk flush of {len(ids)} id(s) dropped: {e}")
            return False
        logger.debug(f"Bulk flush sent {len(ids)} id(s): {result}")
        return True

    async def flush_selection(self) -> bool:
        if self._pending_selection is None:
            return False
        order = self._pending_selection
        self._pending_selection = None
        try:
            await self.transport.put_selection(order)
        except TransportFailure as e:
            logger.error(f"Selection flush of {len(order)} id(s) dropped: {e}")
            return False
        self.last_sent_selection = order
        logger.debug(f"Selection flush sent {len(order)} id(s)")
        return True

    # -- lifecycle -------------------------------------------------------

    def _ensure_timer(self, name: str, interval: float, tick: Callable[[], Awaitable[Any]]) -> None:
        if not self.auto_start:
            return
        task = self._timers.get(name)
        if task is not None and not task.done():
            return
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            # Queued outside the event loop; start() picks it up later
            return
        self._timers[name] = loop.create_task(self._run_periodic(name, interval, tick))

    async def _run_periodic(self, name: str, interval: float, tick: Callable[[], Awaitable[Any]]) -> None:
        while True:
            await asyncio.sleep(interval)
            try:
                await tick()
            except Exception as e:
                logger.error(f"Scheduler tick '{name}' failed: {e}", exc_info=True)

    def start(self) -> None:
        self.auto_start = True
        self._ensure_timer("reads", self.read_interval, self.drain_reads)
        self._ensure_timer("bulk", self.bulk_interval, self.flush_bulk)
        self._ensure_timer("selection", self.selection_interval, self.flush_selection)

    async def stop(self, flush: bool = True) -> None:
        """Cancel the periodic loops, optionally sending whatever writes are pending."""
        self.auto_start = False
        timers = list(self._timers.values())
        self._timers.clear()
        for task in timers:
            task.cancel()
        for task in timers:
            try:
                await task
            except asyncio.CancelledError:
                pass
        if flush:
            await self.flush_bulk()
            await self.flush_selection()
        await self.wait_in_flight()
