"""
Centralized logging configuration for the BGG search package.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

from .config import LOGS_DIR


def setup_logging(log_file: Optional[str] = "bgg_search.log", level: int = logging.INFO) -> None:
    """
    Set up centralized logging for the BGG search package.
    
    Args:
        log_file: Name of the log file, or None to log to stdout only
        level: Logging level
    """
    # Avoid duplicate handlers if already configured
    if logging.getLogger().handlers:
        return

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    # Console handler; stdout is reserved for command output
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    console_handler.setLevel(level)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.addHandler(console_handler)

    if log_file:
        # Default to logs dir if bare filename provided
        log_path = Path(log_file)
        if not log_path.is_absolute():
            LOGS_DIR.mkdir(parents=True, exist_ok=True)
            log_path = LOGS_DIR / log_path.name
        file_handler = logging.FileHandler(str(log_path))
        file_handler.setFormatter(formatter)
        file_handler.setLevel(level)
        root_logger.addHandler(file_handler)

    # Reduce noise from external libraries
    logging.getLogger('requests').setLevel(logging.WARNING)
    logging.getLogger('urllib3').setLevel(logging.WARNING)
    logging.getLogger('uvicorn.access').setLevel(logging.WARNING)
