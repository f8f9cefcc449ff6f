"""
Virtual pagination over the unselected complement of the domain.

Enumeration order is fixed: the dense range ascending, then the extra
identifiers ascending. ``offset`` counts positions in that enumeration after
selected and non-matching identifiers are removed, so infinite scroll keeps
working while the selection changes between page requests.

Without a filter the dense range is never walked: the position of the
offset-th unselected identifier is found by a binary search over the sorted
selection, and the total is a subtraction. With a filter every identifier has
to be tested, so the engine falls back to a linear scan.
"""

from dataclasses import dataclass, field
from typing import Iterator, List, Tuple

from services.picker.domain import IdentifierDomain
from services.picker.selection import Selection


@dataclass
class Page:
    """One window of the unselected view."""
    items: List[int] = field(default_factory=list)
    total: int = 0


def page_unselected(
    domain: IdentifierDomain,
    selection: Selection,
    filter_text: str,
    offset: int,
    limit: int,
) -> Page:
    """
    Return ``limit`` unselected identifiers starting at ``offset``.

    Args:
        domain: Identifier universe
        selection: Current selection
        filter_text: Substring the decimal form must contain; empty disables
        offset: Position of the first item to return; negative means 0
        limit: Maximum number of items; non-positive returns no items

    Returns:
        Page with the items and the size of the whole filtered complement
    """
    filter_text = (filter_text or "").strip()
    offset = max(0, offset)
    limit = max(0, limit)

    if not filter_text:
        return _unfiltered_page(domain, selection, offset, limit)
    if not (filter_text.isascii() and filter_text.isdigit()):
        # A decimal representation only ever contains ASCII digits
        return Page()
    return _filtered_page(domain, selection, filter_text, offset, limit)


def _unfiltered_page(domain: IdentifierDomain, selection: Selection, offset: int, limit: int) -> Page:
    selected = selection.sorted_ids
    dense_selected = selection.rank(domain.max_id)
    dense_free = domain.max_id - dense_selected
    extras_free = [e for e in domain.sorted_extra_ids if e not in selection]
    total = dense_free + len(extras_free)

    items: List[int] = []
    if limit == 0 or offset >= total:
        return Page(items=items, total=total)

    if offset < dense_free:
        candidate, next_selected = _nth_unselected_dense(selected, dense_selected, offset)
        while len(items) < limit and candidate <= domain.max_id:
            if next_selected < dense_selected and selected[next_selected] == candidate:
                next_selected += 1
            else:
                items.append(candidate)
            candidate += 1

    if len(items) < limit:
        start = max(0, offset - dense_free)
        items.extend(extras_free[start:start + limit - len(items)])

    return Page(items=items, total=total)


def _nth_unselected_dense(selected: List[int], dense_selected: int, rank: int) -> Tuple[int, int]:
    """
    Locate the dense identifier with the given 0-based unselected rank.

    ``selected[i] - i`` is non-decreasing over a strictly increasing list, and
    exactly the selected ids with ``selected[i] - i <= rank + 1`` lie below the
    answer. Returns the identifier and the index of the first selected id
    above it.
    """
    lo, hi = 0, dense_selected
    while lo < hi:
        mid = (lo + hi) // 2
        if selected[mid] - mid <= rank + 1:
            lo = mid + 1
        else:
            hi = mid
    return rank + 1 + lo, lo


def _filtered_page(
    domain: IdentifierDomain,
    selection: Selection,
    filter_text: str,
    offset: int,
    limit: int,
) -> Page:
    items: List[int] = []
    total = 0
    end = offset + limit
    for identifier in iter_domain(domain):
        if filter_text not in str(identifier) or identifier in selection:
            continue
        if offset <= total < end:
            items.append(identifier)
        total += 1
    return Page(items=items, total=total)


def iter_domain(domain: IdentifierDomain) -> Iterator[int]:
    """Enumerate the domain: dense range ascending, then extras ascending."""
    yield from range(1, domain.max_id + 1)
    yield from list(domain.sorted_extra_ids)
