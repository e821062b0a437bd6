"""
utils/logger.py
---------------
Logging setup for LedgerWise.
Every module takes its logger from `get_logger(__name__)`; the first call
attaches a single stdout handler to the root logger at LOG_LEVEL.
"""

import logging
import sys

from config import LOG_LEVEL

_LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
_initialized = False


def _resolve_level(name: str) -> int:
    """Map a LOG_LEVEL name such as 'debug' to its numeric level (INFO if unknown)."""
    level = logging.getLevelName(name.strip().upper())
    return level if isinstance(level, int) else logging.INFO


def _init_logging() -> None:
    global _initialized
    if _initialized:
        return
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(_LOG_FORMAT, _DATE_FORMAT))
    root = logging.getLogger()
    root.setLevel(_resolve_level(LOG_LEVEL))
    root.addHandler(handler)
    _initialized = True


def get_logger(name: str) -> logging.Logger:
    """
    Get a named logger.

    Args:
        name: Usually ``__name__`` of the calling module.

    Returns:
        A logging.Logger propagating to the ledger's root handler.
    """
    _init_logging()
    return logging.getLogger(name)
