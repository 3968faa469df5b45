"""Logging configuration for SpringWell.

All modules obtain their logger through :func:`get_logger` so that log
records share the ``springwell`` namespace and can be configured once from
the command line.
"""

from __future__ import annotations

import logging
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER_NAME = "springwell"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def get_logger(name: str) -> logging.Logger:
    """Return a logger inside the ``springwell`` namespace.

    Args:
        name: Usually ``__name__`` of the calling module.

    Returns:
        Configured logger instance.
    """
    if name == ROOT_LOGGER_NAME or name.startswith(ROOT_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def setup_logging(
    level: int | str = logging.WARNING,
    log_file: str | Path | None = None,
    console: Console | None = None,
) -> logging.Logger:
    """Install handlers on the ``springwell`` root logger.

    Console records go to stderr through rich; an optional plain-text file
    handler receives everything at DEBUG and above.

    Args:
        level: Level for the console handler.
        log_file: Optional path for a log file.
        console: Rich console to log to (defaults to stderr).

    Returns:
        The ``springwell`` root logger.
    """
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(logging.DEBUG)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    rich_handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    rich_handler.setLevel(level)
    logger.addHandler(rich_handler)

    if log_file:
        file_handler = logging.FileHandler(Path(log_file), encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(file_handler)

    logger.propagate = False
    logger.debug("Logging configured (level=%s, file=%s)", level, log_file)
    return logger
