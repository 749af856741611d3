"""Logging setup for the AEM component generator.

All modules obtain their logger through :func:`get_logger` so that records
share the ``aem_generator`` namespace and can be configured in one place.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER_NAME = "aem_generator"

_configured = False


def get_logger(name: str) -> logging.Logger:
    """Return a logger namespaced under ``aem_generator``.

    Args:
        name: Usually ``__name__`` of the calling module.

    Returns:
        Logger instance.
    """
    if name == ROOT_LOGGER_NAME or name.startswith(f"{ROOT_LOGGER_NAME}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def setup_logging(
    level: int | str = logging.WARNING,
    rich_output: bool = True,
    console: Console | None = None,
) -> logging.Logger:
    """Configure the package logger.

    Safe to call more than once; later calls only adjust the level.

    Args:
        level: Logging level name or number.
        rich_output: Use a ``RichHandler`` instead of a plain stream handler.
        console: Console the rich handler writes to (stderr by default).

    Returns:
        The package root logger.
    """
    global _configured

    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(level)

    if not _configured:
        if rich_output:
            handler: logging.Handler = RichHandler(
                console=console or Console(stderr=True),
                show_path=False,
                rich_tracebacks=True,
            )
            handler.setFormatter(logging.Formatter("%(message)s"))
        else:
            handler = logging.StreamHandler()
            handler.setFormatter(
                logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
            )
        logger.addHandler(handler)
        logger.propagate = False
        _configured = True

    logger.debug("Logging configured at level %s", logging.getLevelName(level))
    return logger
