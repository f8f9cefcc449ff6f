"""
Render state for the two picker panes.

The left pane merges the server-paged unselected view with identifiers added
locally that the server has not reported yet. The right pane is the
optimistic selection order, filtered and truncated to a visible count that
grows each time the scroll sentinel becomes visible.

Local edits win over server snapshots until the server reports the edited
order back (or the edit is superseded by a newer server-side change after
acknowledgement).
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

from core.config import ClientConfigs, PickerConfigs
from core.exceptions import InvalidIdentifier
from services.picker.identifiers import coerce_identifier, matches_filter

logger = logging.getLogger(__name__)


class PickerViewState:
    def __init__(self, max_id: int = 0, page_size: Optional[int] = None, max_identifier: Optional[int] = None):
        self.max_id = max_id
        self.page_size = page_size or ClientConfigs.PAGE_SIZE
        self.max_identifier = max_identifier or PickerConfigs.MAX_IDENTIFIER
        self.loaded = False

        self.selected_order: List[int] = []
        # Last order handed to the scheduler that the server has not echoed back
        self.unacknowledged_order: Optional[List[int]] = None

        self.left_filter = ""
        self.left_items: List[int] = []
        self.left_total = 0
        self.left_page = 0
        self.left_loading = False
        self.local_extra_ids: List[int] = []

        self.right_filter = ""
        self.right_visible_count = self.page_size

    # -- server snapshots -------------------------------------------------

    def apply_server_state(self, state: Dict[str, Any]) -> bool:
        """
        Merge a /state snapshot. Returns True when the visible selection changed.
        """
        self.max_id = int(state.get("maxId", self.max_id))
        server_order = list(state.get("selectedOrder") or [])
        server_extras = set(state.get("extraIds") or [])
        self.loaded = True

        if server_extras:
            self.local_extra_ids = [i for i in self.local_extra_ids if i not in server_extras]

        if self.unacknowledged_order is not None:
            if server_order != self.unacknowledged_order:
                logger.debug("Server selection is behind local edits; keeping local order")
                return False
            self.unacknowledged_order = None

        if server_order == self.selected_order:
            return False
        self.selected_order = server_order
        self._on_selection_changed()
        return True

    def acknowledge_selection(self, order: List[int]) -> None:
        """Called when a flushed order is known to have reached the server."""
        if self.unacknowledged_order is not None and order == self.unacknowledged_order:
            self.unacknowledged_order = None

    # -- left pane --------------------------------------------------------

    def set_left_filter(self, text: str) -> None:
        if text == self.left_filter:
            return
        self.left_filter = text
        self.reset_left_paging()

    def reset_left_paging(self) -> None:
        self.left_items = []
        self.left_total = 0
        self.left_page = 0
        self.left_loading = False

    def begin_left_load(self) -> Tuple[str, int, int]:
        """Mark the current page as loading and return its (filter, offset, limit)."""
        self.left_loading = True
        return self.left_filter, self.left_page * self.page_size, self.page_size

    def apply_left_page(self, page: int, result: Dict[str, Any], filter_text: Optional[str] = None) -> bool:
        """
        Apply a fetched page. Results for a stale filter or page are dropped.
        """
        if filter_text is not None and filter_text != self.left_filter:
            return False
        if page != self.left_page:
            return False
        items = list(result.get("items") or [])
        if page == 0:
            self.left_items = items
        else:
            self.left_items = self.left_items + items
        self.left_total = int(result.get("total") or 0)
        self.left_loading = False
        return True

    def fail_left_load(self, page: Optional[int] = None) -> None:
        """A load failed; a failed later page is requested again on the next sentinel."""
        self.left_loading = False
        if page is not None and page > 0 and page == self.left_page:
            self.left_page -= 1

    def request_next_left_page(self) -> Optional[int]:
        """
        Scroll sentinel on the left pane became visible. Returns the page to
        load next, or None while loading or once everything is loaded.
        """
        if self.left_loading:
            return None
        items, total = self.left_view()
        if len(items) >= total:
            return None
        self.left_page += 1
        return self.left_page

    def local_only_ids(self) -> List[int]:
        selected = set(self.selected_order)
        filter_text = self.left_filter.strip()
        return [
            i for i in self.local_extra_ids
            if i not in selected and matches_filter(filter_text, i)
        ]

    def left_view(self) -> Tuple[List[int], int]:
        """
        Local-only identifiers first, then the server page, without duplicates.
        Server items selected locally since the page was fetched are hidden.
        """
        local = self.local_only_ids()
        selected = set(self.selected_order)
        merged = list(local)
        seen = set(local)
        hidden = 0
        for identifier in self.left_items:
            if identifier in selected:
                hidden += 1
            elif identifier not in seen:
                seen.add(identifier)
                merged.append(identifier)
        # May double count once the server has caught up with a local id
        return merged, self.left_total + len(local) - hidden

    # -- right pane -------------------------------------------------------

    def set_right_filter(self, text: str) -> None:
        if text == self.right_filter:
            return
        self.right_filter = text
        self.right_visible_count = self.page_size

    def filtered_selected(self) -> List[int]:
        filter_text = self.right_filter.strip()
        if not filter_text:
            return list(self.selected_order)
        return [i for i in self.selected_order if matches_filter(filter_text, i)]

    def selected_view(self) -> List[int]:
        return self.filtered_selected()[:self.right_visible_count]

    def on_right_sentinel_visible(self) -> int:
        if self.right_visible_count < len(self.filtered_selected()):
            self.right_visible_count += self.page_size
        return self.right_visible_count

    # -- edits ------------------------------------------------------------

    def _commit(self, order: List[int]) -> List[int]:
        self.selected_order = order
        self.unacknowledged_order = list(order)
        self._on_selection_changed()
        return list(order)

    def _on_selection_changed(self) -> None:
        self.reset_left_paging()
        self.right_visible_count = self.page_size

    def add_to_selected(self, identifier: int) -> Optional[List[int]]:
        if identifier in self.selected_order:
            return None
        return self._commit(self.selected_order + [identifier])

    def remove_from_selected(self, identifier: int) -> Optional[List[int]]:
        if identifier not in self.selected_order:
            return None
        return self._commit([i for i in self.selected_order if i != identifier])

    def move_selected(self, from_id: int, to_id: int) -> Optional[List[int]]:
        """
        Drop ``from_id`` onto ``to_id``; it ends up immediately before the
        target in either direction.
        """
        if from_id == to_id:
            return None
        order = list(self.selected_order)
        try:
            from_index = order.index(from_id)
            to_index = order.index(to_id)
        except ValueError:
            return None
        order.pop(from_index)
        adjusted_to = to_index - 1 if from_index < to_index else to_index
        order.insert(adjusted_to, from_id)
        return self._commit(order)

    def submit_new_id(self, raw: Any) -> Optional[int]:
        """
        Record an identifier typed by the user. Returns it when it should be
        sent to the server, None when it is invalid or inside the dense range.
        """
        try:
            identifier = coerce_identifier(raw, self.max_identifier)
        except InvalidIdentifier as e:
            logger.debug(f"Ignoring new id: {e}")
            return None
        if identifier <= self.max_id:
            return None
        if identifier not in self.local_extra_ids:
            self.local_extra_ids.append(identifier)
        return identifier
