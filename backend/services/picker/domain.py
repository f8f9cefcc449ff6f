"""
Identifier domain: the dense range [1, max_id] plus extra identifiers.

Extra identifiers are strictly greater than max_id, admitted one at a time
and never removed. They are kept both in admission order (reported by the
state endpoint) and in a sorted list (walked by the pagination engine).
"""

import bisect
import logging
from typing import Any, List, Set

from services.picker.identifiers import coerce_identifier

logger = logging.getLogger(__name__)


class IdentifierDomain:
    def __init__(self, max_id: int, max_identifier: int):
        if max_id < 0:
            raise ValueError("max_id must be non-negative")
        if max_identifier < max_id:
            raise ValueError("max_identifier must not be below max_id")
        self.max_id = max_id
        self.max_identifier = max_identifier
        self._extra_set: Set[int] = set()
        self._extra_order: List[int] = []
        self._extra_sorted: List[int] = []

    def coerce(self, raw: Any) -> int:
        return coerce_identifier(raw, self.max_identifier)

    def contains(self, identifier: int) -> bool:
        if 1 <= identifier <= self.max_id:
            return True
        return identifier in self._extra_set

    def is_extra(self, identifier: int) -> bool:
        return identifier in self._extra_set

    def admit_extra(self, raw: Any) -> bool:
        """
        Admit an identifier above max_id.

        Returns False when the identifier belongs to the dense range or is
        already admitted. Raises InvalidIdentifier when ``raw`` does not coerce.
        """
        identifier = self.coerce(raw)
        if identifier <= self.max_id or identifier in self._extra_set:
            return False
        self._extra_set.add(identifier)
        self._extra_order.append(identifier)
        bisect.insort(self._extra_sorted, identifier)
        logger.debug(f"Admitted extra identifier {identifier}")
        return True

    def size(self) -> int:
        return self.max_id + len(self._extra_set)

    @property
    def extra_ids(self) -> List[int]:
        """Extra identifiers in admission order."""
        return list(self._extra_order)

    @property
    def sorted_extra_ids(self) -> List[int]:
        return self._extra_sorted
