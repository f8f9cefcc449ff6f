from pydantic_settings import BaseSettings
from .env_config import (
    get_picker_config,
    get_client_config,
    get_logging_config,
    env_config,
)
import os
from pathlib import Path
from dotenv import load_dotenv

# Ensure backend/.env is loaded into process env before any os.getenv calls
_ENV_PATH = Path(__file__).resolve().parents[1] / ".env"
if _ENV_PATH.exists():
    load_dotenv(_ENV_PATH, override=True)
else:
    load_dotenv()


class Settings(BaseSettings):
    _picker_config = get_picker_config()
    _client_config = get_client_config()
    _logging_config = get_logging_config()

    PICKER_MAX_ID: int = int(_picker_config["PICKER_MAX_ID"])
    PICKER_MAX_IDENTIFIER: int = int(_picker_config["PICKER_MAX_IDENTIFIER"])
    PICKER_DEFAULT_PAGE_LIMIT: int = int(_picker_config["PICKER_DEFAULT_PAGE_LIMIT"])
    PICKER_MAX_PAGE_LIMIT: int = int(_picker_config["PICKER_MAX_PAGE_LIMIT"])

    PICKER_API_BASE_URL: str = _client_config["PICKER_API_BASE_URL"]
    PICKER_READ_TICK_SECONDS: float = float(_client_config["PICKER_READ_TICK_SECONDS"])
    PICKER_BULK_FLUSH_SECONDS: float = float(_client_config["PICKER_BULK_FLUSH_SECONDS"])
    PICKER_SELECTION_FLUSH_SECONDS: float = float(_client_config["PICKER_SELECTION_FLUSH_SECONDS"])
    PICKER_RESYNC_SECONDS: float = float(_client_config["PICKER_RESYNC_SECONDS"])
    PICKER_PAGE_SIZE: int = int(_client_config["PICKER_PAGE_SIZE"])
    PICKER_HTTP_TIMEOUT_SECONDS: float = float(_client_config["PICKER_HTTP_TIMEOUT_SECONDS"])

    LOG_LEVEL: str = _logging_config["LOG_LEVEL"]
    LOG_TO_FILE: bool = _logging_config["LOG_TO_FILE"].lower() == "true"

    HOST: str = os.getenv("HOST", "0.0.0.0")
    PORT: int = int(os.getenv("PORT", "8000"))

    CORS_ALLOW_ORIGINS: str = os.getenv("CORS_ALLOW_ORIGINS", "*")

    RATE_LIMIT_ENABLED: bool = os.getenv("RATE_LIMIT_ENABLED", "true").lower() == "true"
    RATE_LIMIT_PER_MINUTE: int = int(os.getenv("RATE_LIMIT_PER_MINUTE", "600"))

    ENVIRONMENT: str = env_config.environment

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "allow"


settings = Settings()


class PickerConfigs:
    MAX_ID = settings.PICKER_MAX_ID
    MAX_IDENTIFIER = settings.PICKER_MAX_IDENTIFIER
    DEFAULT_PAGE_LIMIT = settings.PICKER_DEFAULT_PAGE_LIMIT
    MAX_PAGE_LIMIT = settings.PICKER_MAX_PAGE_LIMIT


class ClientConfigs:
    API_BASE_URL = settings.PICKER_API_BASE_URL
    READ_TICK_SECONDS = settings.PICKER_READ_TICK_SECONDS
    BULK_FLUSH_SECONDS = settings.PICKER_BULK_FLUSH_SECONDS
    SELECTION_FLUSH_SECONDS = settings.PICKER_SELECTION_FLUSH_SECONDS
    RESYNC_SECONDS = settings.PICKER_RESYNC_SECONDS
    PAGE_SIZE = settings.PICKER_PAGE_SIZE
    HTTP_TIMEOUT_SECONDS = settings.PICKER_HTTP_TIMEOUT_SECONDS


class LoggingConfigs:
    LEVEL = settings.LOG_LEVEL
    TO_FILE = settings.LOG_TO_FILE


class CorsConfigs:
    ALLOW_ORIGINS = [o.strip() for o in settings.CORS_ALLOW_ORIGINS.split(",") if o.strip()]


class RateLimitConfigs:
    ENABLED = settings.RATE_LIMIT_ENABLED
    PER_MINUTE = settings.RATE_LIMIT_PER_MINUTE


class HostingConfigs:
    HOST = settings.HOST
    PORT = settings.PORT
    URL = f"http://{HOST}:{PORT}"
