"""
Logging setup: console output always, a daily log file when enabled.
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

from expense_tracker.config import settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(enable_file: Optional[bool] = None) -> None:
    """
    Configure the root logger.

    Args:
        enable_file: If True, also log to a file. If None, uses ENABLE_FILE_LOGGING.
    """
    if enable_file is None:
        enable_file = settings.ENABLE_FILE_LOGGING

    logging.basicConfig(level=settings.LOG_LEVEL.upper(), format=LOG_FORMAT)

    if enable_file:
        log_dir = Path(settings.LOG_DIR)
        log_dir.mkdir(parents=True, exist_ok=True)
        log_file = log_dir / f"expense_tracker_{datetime.now().strftime('%Y%m%d')}.log"

        root = logging.getLogger()
        # Avoid adding the same file handler twice on reload
        for handler in root.handlers:
            if isinstance(handler, logging.FileHandler) and Path(handler.baseFilename) == log_file.resolve():
                return

        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(settings.LOG_LEVEL.upper())
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(file_handler)
