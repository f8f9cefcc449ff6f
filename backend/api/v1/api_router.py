from fastapi import APIRouter
from .endpoints.picker import router as picker_router


api_router = APIRouter()

api_router.include_router(picker_router, prefix="/api", tags=["picker"])
