import logging
import threading
from typing import Any, Dict, List

from core.exceptions import InvalidIdentifier
from services.picker.domain import IdentifierDomain
from services.picker.pagination import Page, page_unselected
from services.picker.selection import Selection

logger = logging.getLogger(__name__)


class PickerService:
    """
    Owns the identifier domain and the selection for the lifetime of the process.

    FastAPI runs sync endpoints on a worker pool, so every operation takes the
    same lock: admission and selection replace must not interleave with a
    page walk over the selection.
    """

    def __init__(self, max_id: int, max_identifier: int):
        self.domain = IdentifierDomain(max_id=max_id, max_identifier=max_identifier)
        self.selection = Selection()
        self._lock = threading.Lock()

    @property
    def max_id(self) -> int:
        return self.domain.max_id

    def get_state(self) -> Dict[str, Any]:
        with self._lock:
            return {
                "selectedOrder": self.selection.order,
                "extraIds": self.domain.extra_ids,
                "maxId": self.domain.max_id,
            }

    def admit_bulk(self, ids: List[Any]) -> Dict[str, List[Any]]:
        """
        Admit new identifiers above max_id.

        Invalid values are reported in ``skipped`` as received; dense-range
        and already-known identifiers are reported in ``skipped`` as coerced
        integers. Both lists follow input order.
        """
        added: List[int] = []
        skipped: List[Any] = []
        with self._lock:
            for raw in ids:
                try:
                    identifier = self.domain.coerce(raw)
                except InvalidIdentifier as e:
                    logger.debug(f"Bulk intake skipped {e}")
                    skipped.append(raw)
                    continue
                if self.domain.admit_extra(identifier):
                    added.append(identifier)
                else:
                    skipped.append(identifier)
        logger.info(f"Bulk intake: {len(added)} added, {len(skipped)} skipped")
        return {"added": added, "skipped": skipped}

    def replace_selection(self, order: List[Any]) -> List[int]:
        """
        Replace the selection with ``order``.

        Invalid entries are dropped; identifiers above max_id that the domain
        has not seen are admitted as a side effect.
        """
        coerced: List[int] = []
        with self._lock:
            for raw in order:
                try:
                    identifier = self.domain.coerce(raw)
                except InvalidIdentifier as e:
                    logger.debug(f"Selection dropped {e}")
                    continue
                if identifier > self.domain.max_id:
                    self.domain.admit_extra(identifier)
                coerced.append(identifier)
            selected_order = self.selection.replace(coerced)
        logger.info(f"Selection replaced: {len(selected_order)} identifiers")
        return selected_order

    def unselected_page(self, filter_text: str, offset: int, limit: int) -> Page:
        with self._lock:
            page = page_unselected(self.domain, self.selection, filter_text, offset, limit)
        logger.debug(
            f"Unselected page filter={filter_text!r} offset={offset} limit={limit} "
            f"-> {len(page.items)} items of {page.total}"
        )
        return page
