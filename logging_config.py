"""
TinyGraph - Logging Configuration
Console (and optional file) logging for the application entry point.
Modules log through `logging.getLogger(__name__)`.
"""

import logging
import sys
from typing import Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: int = logging.INFO, log_file: Optional[str] = None) -> None:
    """Route every module logger to stdout, and to `log_file` when given."""
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode="w", encoding="utf-8"))

    # force=True replaces handlers from an earlier call
    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt="%H:%M:%S", handlers=handlers, force=True)
    logging.getLogger(__name__).info("Logging initialized.")
