"""
Picker API Endpoints

State snapshot, bulk intake of new identifiers, selection replace and the
paged unselected view. Malformed input never fails a request: bodies and
fields of the wrong type fall back to empty defaults.
"""

import logging
from typing import Any, Optional

from fastapi import APIRouter, Body, Depends

from core.config import PickerConfigs
from deps import get_picker_service
from schemas.picker.picker import (
    BulkAddRequest,
    BulkAddResponse,
    SelectionResponse,
    SelectionUpdateRequest,
    StateSchema,
    UnselectedPageSchema,
)
from services.picker.identifiers import parse_int_param
from services.picker.picker_service import PickerService

router = APIRouter()
logger = logging.getLogger(__name__)


def _as_object(payload: Any) -> dict:
    return payload if isinstance(payload, dict) else {}


@router.get("/state", response_model=StateSchema)
def get_state(service: PickerService = Depends(get_picker_service)):
    return service.get_state()


@router.post("/items/bulk", response_model=BulkAddResponse)
def add_items_bulk(
    payload: Any = Body(default=None),
    service: PickerService = Depends(get_picker_service),
):
    """
    Admit identifiers above maxId.

    Returns:
        added: identifiers admitted by this call, in input order
        skipped: everything else, invalid values reported as received
    """
    request = BulkAddRequest.model_validate(_as_object(payload))
    return service.admit_bulk(request.ids)


@router.put("/selected", response_model=SelectionResponse)
def replace_selected(
    payload: Any = Body(default=None),
    service: PickerService = Depends(get_picker_service),
):
    request = SelectionUpdateRequest.model_validate(_as_object(payload))
    return {"selectedOrder": service.replace_selection(request.order)}


@router.get("/unselected", response_model=UnselectedPageSchema)
def get_unselected(
    filter: Optional[str] = None,
    offset: Optional[str] = None,
    limit: Optional[str] = None,
    service: PickerService = Depends(get_picker_service),
):
    """
    Get one page of unselected identifiers.

    Args:
        filter: Substring of the decimal identifier; absent means no filtering
        offset: Position of the first item (default 0)
        limit: Page size (default 20, capped by PICKER_MAX_PAGE_LIMIT)
    """
    page_offset = parse_int_param(offset, 0)
    page_limit = min(
        parse_int_param(limit, PickerConfigs.DEFAULT_PAGE_LIMIT),
        PickerConfigs.MAX_PAGE_LIMIT,
    )
    page = service.unselected_page(filter or "", page_offset, page_limit)
    return {"items": page.items, "total": page.total}
