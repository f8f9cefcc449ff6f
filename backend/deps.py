import logging
from fastapi import HTTPException, Request
from services.picker.picker_service import PickerService

logger = logging.getLogger(__name__)


def get_picker_service(request: Request) -> PickerService:
    """
    Dependency returning the process-wide PickerService created at startup.
    """
    service = getattr(request.app.state, "picker_service", None)
    if service is None:
        logger.error("Picker service requested before application startup")
        raise HTTPException(status_code=503, detail="Picker service is not ready")
    return service
