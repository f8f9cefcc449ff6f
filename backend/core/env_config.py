import os
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


class EnvConfig:
    """
    Minimal environment configuration helpers. Provides typed getters for
    the picker domain, the coalescing client and logging.
    """

    def __init__(self) -> None:
        # Environment name (default/local/dev/qa/prod)
        self.environment = os.getenv("ENVIRONMENT", "default")


env_config = EnvConfig()


def get_config_value(key: str, default: str | None = None) -> str:
    return os.getenv(key, default or "")


def get_picker_config() -> dict:
    return {
        "PICKER_MAX_ID": os.getenv("PICKER_MAX_ID", "1000000"),
        # 2**53 - 1, the largest integer a JSON client can hold exactly
        "PICKER_MAX_IDENTIFIER": os.getenv("PICKER_MAX_IDENTIFIER", "9007199254740991"),
        "PICKER_DEFAULT_PAGE_LIMIT": os.getenv("PICKER_DEFAULT_PAGE_LIMIT", "20"),
        "PICKER_MAX_PAGE_LIMIT": os.getenv("PICKER_MAX_PAGE_LIMIT", "1000"),
    }


def get_client_config() -> dict:
    return {
        "PICKER_API_BASE_URL": os.getenv("PICKER_API_BASE_URL", "http://localhost:8000/api"),
        "PICKER_READ_TICK_SECONDS": os.getenv("PICKER_READ_TICK_SECONDS", "1.0"),
        "PICKER_BULK_FLUSH_SECONDS": os.getenv("PICKER_BULK_FLUSH_SECONDS", "10.0"),
        "PICKER_SELECTION_FLUSH_SECONDS": os.getenv("PICKER_SELECTION_FLUSH_SECONDS", "1.0"),
        "PICKER_RESYNC_SECONDS": os.getenv("PICKER_RESYNC_SECONDS", "30.0"),
        "PICKER_PAGE_SIZE": os.getenv("PICKER_PAGE_SIZE", "20"),
        "PICKER_HTTP_TIMEOUT_SECONDS": os.getenv("PICKER_HTTP_TIMEOUT_SECONDS", "30"),
    }


def get_logging_config() -> dict:
    return {
        "LOG_LEVEL": os.getenv("LOG_LEVEL", "INFO"),
        "LOG_TO_FILE": os.getenv("LOG_TO_FILE", "true"),
    }
