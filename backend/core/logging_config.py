import logging
from pathlib import Path
from logging.handlers import RotatingFileHandler

from core.config import LoggingConfigs

# Logs live next to the application tree
log_dir = Path(__file__).parent.parent / "logs"

# Log file path
log_file = log_dir / "picker.log"


def setup_logging(level: str | None = None, to_file: bool | None = None):
    """
    Set up centralized logging configuration.
    Configures logging to output to the console and, unless disabled,
    to a rotating file under backend/logs.
    """
    level = (level or LoggingConfigs.LEVEL).upper()
    to_file = LoggingConfigs.TO_FILE if to_file is None else to_file

    logger = logging.getLogger()
    logger.setLevel(getattr(logging, level, logging.INFO))

    # Clear any existing handlers
    logger.handlers.clear()

    formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if to_file:
        log_dir.mkdir(exist_ok=True)
        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=10*1024*1024,
            backupCount=5,
            encoding='utf-8'
        )
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.info(f"Logging system initialized (level={level}, file={'on' if to_file else 'off'})")
