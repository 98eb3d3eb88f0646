"""Logging configuration for the ``bankfeed`` package.

Library modules only call ``logging.getLogger(__name__)``. Handlers are
attached once, by the CLI or a host application, through
``configure_logging``.
"""

import logging
import os
import sys
from typing import IO, Optional, Union

_PKG_LOGGER_NAME = "bankfeed"
_DEFAULT_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"
_handler: Optional[logging.Handler] = None

# Keep library use silent until an application configures logging
logging.getLogger(_PKG_LOGGER_NAME).addHandler(logging.NullHandler())


def parse_level(level: Union[int, str, None]) -> int:
    """Return a numeric level from an int, a level name, or BANKFEED_LOG_LEVEL."""
    if isinstance(level, int):
        return level
    if level is None:
        level = os.getenv("BANKFEED_LOG_LEVEL")
    if isinstance(level, str) and level.strip():
        level = level.strip().upper()
        if level.isdigit():
            return int(level)
        numeric = getattr(logging, level, None)
        if isinstance(numeric, int):
            return numeric
        raise ValueError(f"Unknown log level '{level}'")
    return logging.WARNING


def configure_logging(
    level: Union[int, str, None] = None,
    stream: Optional[IO[str]] = None,
    fmt: str = _DEFAULT_FORMAT,
) -> None:
    """Attach a single stream handler to the package logger.

    Calling again replaces the handler, so the level can be changed.
    """
    global _handler
    numeric = parse_level(level)
    logger = logging.getLogger(_PKG_LOGGER_NAME)
    if _handler is not None:
        logger.removeHandler(_handler)

    _handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    _handler.setLevel(numeric)
    _handler.setFormatter(logging.Formatter(fmt))

    logger.setLevel(numeric)
    logger.addHandler(_handler)
    # Avoid double emission via the root logger
    logger.propagate = False
