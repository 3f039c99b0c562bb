"""
Logging setup for the sketchboard application.
"""
from __future__ import annotations

import logging
import sys
from typing import Optional

LOGGER_NAME = "sketchboard"


def setup_logger(level: Optional[str] = None) -> logging.Logger:
    """Attach a console handler to the ``sketchboard`` logger and return it.

    Calling it again only updates the level.
    """
    log_level = getattr(logging, (level or "INFO").upper(), logging.INFO)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(log_level)

    # Avoid duplicate handlers
    for handler in logger.handlers:
        if getattr(handler, "_sketchboard_console", False):
            handler.setLevel(log_level)
            return logger

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(
        logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s", datefmt="%H:%M:%S")
    )
    console_handler._sketchboard_console = True
    logger.addHandler(console_handler)
    return logger


__all__ = ["setup_logger", "LOGGER_NAME"]
