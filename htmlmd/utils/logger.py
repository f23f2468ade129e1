"""Logging for the conversion pipeline.

Handlers live on the ``htmlmd`` namespace logger only; module loggers carry
none and propagate to it, so stage modules just call ``get_logger(__name__)``.
"""

import logging
import sys
from pathlib import Path
from typing import List, Optional

NAMESPACE = "htmlmd"
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def _level(name: str) -> int:
    return getattr(logging, name.upper(), logging.INFO)


def configure_logging(level: Optional[str] = None, log_file: Optional[str] = None) -> logging.Logger:
    """(Re)attach handlers to the namespace logger and return it.

    Arguments left as None fall back to ``settings``; an empty *log_file*
    disables the file handler.
    """
    from htmlmd.utils.config import settings

    logger = logging.getLogger(NAMESPACE)
    for old in list(logger.handlers):
        logger.removeHandler(old)
        old.close()
    logger.setLevel(_level(level or settings.log_level))

    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    path = settings.log_file if log_file is None else log_file
    if path:
        Path(path).parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(path, encoding="utf-8"))
    for handler in handlers:
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    return logger


def get_logger(name: str, level: Optional[str] = None) -> logging.Logger:
    """Return the logger for *name*, configuring the namespace on first use."""
    if not logging.getLogger(NAMESPACE).handlers:
        configure_logging()
    logger = logging.getLogger(name)
    if level:
        logger.setLevel(_level(level))
    return logger
