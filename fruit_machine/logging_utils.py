"""Logging setup for the ``fruit-machine`` command.

Every module logs under the ``fruit_machine`` package logger
(``fruit_machine.ledger``, ``fruit_machine.cli``, ...), so configuring that
one logger covers the whole tree.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

PACKAGE_LOGGER = "fruit_machine"

_LEVELS_BY_VERBOSE = {
    0: logging.WARNING,  # default
    1: logging.INFO,
    2: logging.DEBUG,    # 2 or more → DEBUG
}

_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def _find_handler(logger: logging.Logger) -> Optional[logging.StreamHandler]:
    for h in logger.handlers:
        if getattr(h, "_fruit_machine_handler", False):
            return h  # type: ignore[return-value]
    return None


def setup_logging(verbose_count: int = 0, logger_name: Optional[str] = None) -> logging.Logger:
    """
    Configure the package logger (or ``logger_name``) from the -v count.

    -v  → INFO
    -vv → DEBUG
    default → WARNING

    Calling it again changes the level and points the existing handler at
    the current ``sys.stderr``; it never stacks a second handler.
    """
    level = _LEVELS_BY_VERBOSE.get(verbose_count, logging.DEBUG)
    logger = logging.getLogger(logger_name or PACKAGE_LOGGER)
    logger.setLevel(level)

    handler = _find_handler(logger)
    if handler is None:
        handler = logging.StreamHandler(stream=sys.stderr)
        handler._fruit_machine_handler = True  # type: ignore[attr-defined]
        handler.setFormatter(logging.Formatter(fmt=_FORMAT, datefmt="%H:%M:%S"))
        logger.addHandler(handler)
    elif handler.stream is not sys.stderr:
        handler.setStream(sys.stderr)

    return logger
