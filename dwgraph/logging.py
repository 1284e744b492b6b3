"""Package logging for DWGraph.

Every module logs through ``get_logger(__name__)``, so all package loggers sit
under the ``dwgraph`` logger. That logger owns one handler writing to stderr,
which keeps the results the command line prints on stdout free of log lines.
Records still propagate to the Python root logger.
"""

import logging
from typing import Optional

from dwgraph.config import LOGGING_CONFIG

ROOT_LOGGER_NAME = "dwgraph"

_handler: Optional[logging.Handler] = None


def configure_logging(
    level: Optional[int] = None, handler: Optional[logging.Handler] = None
) -> logging.Logger:
    """Attach the package handler to the ``dwgraph`` logger.

    Only the first call installs a handler; later calls return the configured
    logger unchanged. Use ``set_log_level`` to change the level afterwards.

    Args:
        level: Initial level; defaults to ``LOGGING_CONFIG.level``.
        handler: Handler to install; defaults to a stderr ``StreamHandler``.

    Returns:
        The ``dwgraph`` logger.
    """
    global _handler

    package_logger = logging.getLogger(ROOT_LOGGER_NAME)
    if _handler is not None:
        return package_logger

    _handler = handler or logging.StreamHandler()
    _handler.setFormatter(logging.Formatter(LOGGING_CONFIG.format))
    package_logger.addHandler(_handler)
    package_logger.setLevel(LOGGING_CONFIG.level if level is None else level)
    return package_logger


def get_logger(name: str) -> logging.Logger:
    """Return the logger for a package module, configuring the package first."""
    configure_logging()
    return logging.getLogger(name)


def set_log_level(level: int) -> None:
    """Set the level of the ``dwgraph`` logger and its handler."""
    package_logger = configure_logging()
    package_logger.setLevel(level)
    if _handler is not None:
        _handler.setLevel(level)


def level_for_flags(verbose: bool = False, quiet: bool = False) -> int:
    """Map the command-line verbosity flags to a logging level.

    ``verbose`` wins over ``quiet``; neither keeps the configured default.
    """
    if verbose:
        return logging.DEBUG
    if quiet:
        return logging.WARNING
    return LOGGING_CONFIG.level


def reset_logging() -> None:
    """Remove the package handler; the next ``get_logger`` installs a new one."""
    global _handler

    package_logger = logging.getLogger(ROOT_LOGGER_NAME)
    if _handler is not None:
        package_logger.removeHandler(_handler)
        _handler = None
    package_logger.setLevel(logging.NOTSET)
