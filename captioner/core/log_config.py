"""
Purpose:
- One JSON logger for the whole package, written to stdout.
- configure_logging() is idempotent so the app factory and tests can both call it.
"""

import logging
import sys
from pythonjsonlogger import jsonlogger

logger = logging.getLogger("captioner")


def configure_logging(level: str = "INFO") -> logging.Logger:
    logger.setLevel(level.upper())
    if not any(getattr(h, "_captioner", False) for h in logger.handlers):
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(jsonlogger.JsonFormatter(
            "%(asctime)s %(levelname)s %(name)s %(message)s",
            rename_fields={"levelname": "level", "asctime": "timestamp"},
        ))
        handler._captioner = True
        logger.addHandler(handler)
    return logger
