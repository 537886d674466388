"""
Logger factory.

Module loggers are children of one "key_ledger" logger, which
owns the only handler. Level and format come from the settings.
"""

import logging
import sys

from key_ledger.config import get_settings

ROOT_LOGGER_NAME = "key_ledger"


def _configure_root() -> logging.Logger:
    settings = get_settings()
    root = logging.getLogger(ROOT_LOGGER_NAME)
    root.setLevel(settings.LOG_LEVEL)

    if not root.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(settings.LOG_FORMAT))
        root.addHandler(handler)
        # Records stop here and never reach the root logger
        root.propagate = False

    return root


def get_logger(name: str) -> logging.Logger:
    """Return the logger for a key_ledger module."""
    root = _configure_root()
    if name == ROOT_LOGGER_NAME or name.startswith(ROOT_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return root.getChild(name)
