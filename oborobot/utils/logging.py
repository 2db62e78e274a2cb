# =============================================
# File: oborobot/utils/logging.py
# Purpose: loguru configuration (level + optional rotating file sink)
# =============================================
import os
import sys

from loguru import logger

_configured = False


def configure_logging() -> None:
    """Idempotent: stderr sink at LOG_LEVEL, plus LOG_FILE rotated at 10 MB when set."""
    global _configured
    if _configured:
        return
    level = os.getenv("LOG_LEVEL", "INFO").upper()
    logger.remove()
    logger.add(sys.stderr, level=level)
    log_file = os.getenv("LOG_FILE")
    if log_file:
        logger.add(log_file, rotation="10 MB", level=level)
    _configured = True
