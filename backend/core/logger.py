import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

DEFAULT_LOG_DIR = Path(__file__).parent.parent / 'logs'
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logger(name: str = 'science_fair', log_level: Optional[str] = None,
                 log_dir: Optional[str] = None):
    """
    Setup application logger.

    Console output always; a rotating app.log under log_dir (LOG_DIR,
    default backend/logs) unless LOG_TO_FILE=false. Submission details
    logged on failures stay in these handlers and never reach API responses.
    """
    logger = logging.getLogger(name)

    # Don't add handlers if they already exist
    if logger.handlers:
        return logger

    if log_level is None:
        log_level = os.getenv('LOG_LEVEL', 'INFO')
    logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))
    logger.propagate = False

    formatter = logging.Formatter(LOG_FORMAT, datefmt='%Y-%m-%d %H:%M:%S')

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.INFO)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if os.getenv('LOG_TO_FILE', 'true').lower() == 'false':
        return logger

    log_path = Path(log_dir or os.getenv('LOG_DIR') or DEFAULT_LOG_DIR)
    log_path.mkdir(parents=True, exist_ok=True)

    file_handler = RotatingFileHandler(
        log_path / 'app.log',
        maxBytes=10 * 1024 * 1024,  # 10MB
        backupCount=5
    )
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)

    return logger

# Create default logger instance
logger = setup_logger()
