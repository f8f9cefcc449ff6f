import asyncio
import logging
from typing import Any, List, Optional, Set

from core.config import ClientConfigs
from core.exceptions import TransportFailure
from client.scheduler import RequestScheduler
from client.view_state import PickerViewState

logger = logging.getLogger(__name__)


class PickerSession:
    """
    Drives a PickerViewState through a RequestScheduler: UI intents become
    optimistic edits plus queued writes, reads go through the coalescer.
    """

    def __init__(self, scheduler: RequestScheduler, view: Optional[PickerViewState] = None,
                 resync_interval: Optional[float] = None):
        self.scheduler = scheduler
        self.view = view or PickerViewState()
        self.resync_interval = resync_interval or ClientConfigs.RESYNC_SECONDS
        self.load_error: Optional[str] = None
        self._resync_task: Optional[asyncio.Task] = None
        self._refresh_tasks: Set[asyncio.Task] = set()
        # Left page was loaded before the server saw the latest local edit
        self._left_stale = False

    async def load(self) -> bool:
        """Fetch the initial state and the first left page."""
        try:
            state = await self.scheduler.fetch_state()
        except TransportFailure as e:
            self.load_error = str(e)
            logger.warning(f"Initial state load failed: {e}")
            return False
        self.load_error = None
        self.view.apply_server_state(state)
        await self.refresh_left()
        return True

    async def _load_left_page(self) -> bool:
        page = self.view.left_page
        filter_text, offset, limit = self.view.begin_left_load()
        try:
            result = await self.scheduler.fetch_unselected(filter_text, offset, limit)
        except TransportFailure as e:
            logger.warning(f"Left page {page} failed: {e}")
            self.view.fail_left_load(page)
            return False
        return self.view.apply_left_page(page, result, filter_text=filter_text)

    async def refresh_left(self) -> bool:
        """Reload the left pane from its first page."""
        self.view.reset_left_paging()
        return await self._load_left_page()

    async def set_left_filter(self, text: str) -> bool:
        self.view.set_left_filter(text)
        return await self.refresh_left()

    async def load_more_left(self) -> bool:
        if self.view.request_next_left_page() is None:
            return False
        return await self._load_left_page()

    async def resync(self) -> bool:
        """Poll the server state; returns True when the selection changed."""
        # Only a write finished before the GET is issued can be in the snapshot
        sent = self.scheduler.last_sent_selection
        try:
            state = await self.scheduler.fetch_state()
        except TransportFailure as e:
            logger.warning(f"Resync failed: {e}")
            return False
        if sent is not None:
            self.view.acknowledge_selection(sent)
        changed = self.view.apply_server_state(state)
        if changed or (self._left_stale and self.view.unacknowledged_order is None):
            self._left_stale = False
            await self.refresh_left()
        return changed

    def _schedule_left_refresh(self) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            return
        task = loop.create_task(self.refresh_left())
        self._refresh_tasks.add(task)
        task.add_done_callback(self._refresh_tasks.discard)

    def _queue_order(self, order: Optional[List[int]]) -> Optional[List[int]]:
        if order is not None:
            self.scheduler.enqueue_selection(order)
            self._left_stale = True
            self._schedule_left_refresh()
        return order

    def select(self, identifier: int) -> Optional[List[int]]:
        return self._queue_order(self.view.add_to_selected(identifier))

    def deselect(self, identifier: int) -> Optional[List[int]]:
        return self._queue_order(self.view.remove_from_selected(identifier))

    def move(self, from_id: int, to_id: int) -> Optional[List[int]]:
        return self._queue_order(self.view.move_selected(from_id, to_id))

    def add_new(self, raw: Any) -> Optional[int]:
        identifier = self.view.submit_new_id(raw)
        if identifier is not None:
            self.scheduler.enqueue_add(identifier)
        return identifier

    async def _run_resync(self) -> None:
        while True:
            await asyncio.sleep(self.resync_interval)
            await self.resync()

    def start(self) -> None:
        self.scheduler.start()
        if self._resync_task is None or self._resync_task.done():
            self._resync_task = asyncio.get_running_loop().create_task(self._run_resync())

    async def close(self) -> None:
        tasks = list(self._refresh_tasks)
        if self._resync_task is not None:
            tasks.append(self._resync_task)
            self._resync_task = None
        for task in tasks:
            task.cancel()
        for task in tasks:
            try:
                await task
            except asyncio.CancelledError:
                pass
        await self.scheduler.stop(flush=True)
