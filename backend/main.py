from dotenv import load_dotenv
load_dotenv()  # Load environment variables before importing config classes

from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging
import os
from typing import Optional

from api.v1.api_router import api_router
from core.config import CorsConfigs, PickerConfigs
from core.logging_config import setup_logging
from core.rate_limit import setup_rate_limiting
from services.picker.picker_service import PickerService

logger = logging.getLogger(__name__)


def create_app(
    max_id: Optional[int] = None,
    max_identifier: Optional[int] = None,
    rate_limit: Optional[bool] = None,
) -> FastAPI:
    """
    Build the picker application.

    The PickerService is created when the app starts and dropped when it
    stops; state lives only in process memory.
    """
    max_id = PickerConfigs.MAX_ID if max_id is None else max_id
    max_identifier = PickerConfigs.MAX_IDENTIFIER if max_identifier is None else max_identifier

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        app.state.picker_service = PickerService(max_id=max_id, max_identifier=max_identifier)
        logger.info(f"Picker service started (maxId={max_id})")
        try:
            yield
        finally:
            app.state.picker_service = None
            logger.info("Picker service stopped")

    app = FastAPI(title="id picker backend", lifespan=lifespan)

    # Include API router
    app.include_router(api_router)

    setup_rate_limiting(app, enabled=rate_limit)

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=CorsConfigs.ALLOW_ORIGINS,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    return app


# Setup logging
setup_logging()

# Create FastAPI app
app = create_app()


if __name__ == "__main__":
    import uvicorn
    from core.config import HostingConfigs

    # Avoid infinite reload loops by excluding changing files like logs
    reload_enabled = os.getenv("RELOAD", "false").lower() == "true"
    reload_excludes = [
        "logs/*",
        "**/*.log",
        "**/__pycache__/**",
    ]

    uvicorn.run(
        "main:app",
        host=HostingConfigs.HOST,
        port=HostingConfigs.PORT,
        reload=reload_enabled,
        reload_excludes=reload_excludes,
    )
