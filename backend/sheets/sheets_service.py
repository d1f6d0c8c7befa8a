"""
Pick the sheets manager for the current environment.
"""
from typing import Optional, Union

from core.config import Config
from core.logger import logger
from sheets.google_sheets_manager import GoogleSheetsManager
from sheets.mock_sheets_manager import InMemorySheetsManager

SheetsManager = Union[GoogleSheetsManager, InMemorySheetsManager]


def create_sheets_manager(config: Config) -> Optional[SheetsManager]:
    """
    Return the in-memory manager when mocking is requested, else the Google one.

    Returns None (after logging) when Google credentials are unusable, so the
    app still starts and the routes answer with 500.
    """
    if config.use_mock_sheets:
        logger.info("Using in-memory sheets manager (USE_MOCK_SHEETS/CI)")
        return InMemorySheetsManager()

    try:
        return GoogleSheetsManager(config)
    except Exception as e:
        logger.warning(f"Google Sheets manager not initialized: {type(e).__name__}: {e}")
        return None
