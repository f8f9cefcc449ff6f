"""
Ordered, duplicate-free selection with rank queries.

The user-visible order is kept as a list; a sorted copy answers "how many
selected identifiers are <= x" in O(log n), which the pagination engine uses
to jump over the dense range without visiting it.
"""

import bisect
from typing import Iterable, List, Set


class Selection:
    def __init__(self, order: Iterable[int] = ()):
        self._order: List[int] = []
        self._members: Set[int] = set()
        self._sorted: List[int] = []
        self.replace(order)

    def replace(self, order: Iterable[int]) -> List[int]:
        """Replace the whole selection; duplicates keep their first position."""
        members: Set[int] = set()
        result: List[int] = []
        for identifier in order:
            if identifier in members:
                continue
            members.add(identifier)
            result.append(identifier)
        self._order = result
        self._members = members
        self._sorted = sorted(result)
        return list(result)

    @property
    def order(self) -> List[int]:
        return list(self._order)

    @property
    def sorted_ids(self) -> List[int]:
        return self._sorted

    def __contains__(self, identifier: int) -> bool:
        return identifier in self._members

    def __len__(self) -> int:
        return len(self._order)

    def rank(self, identifier: int) -> int:
        """Number of selected identifiers <= ``identifier``."""
        return bisect.bisect_right(self._sorted, identifier)
