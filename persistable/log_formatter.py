##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Persistable
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Persistable.
##############################################################################

"""
Console logging for applications that use Persistable.

The library itself only attaches a `NullHandler`; call `setup_logging` to see
the entity and backend messages (inserted payloads, generated WHERE clauses,
dropped columns) on stdout.
"""

import logging
import sys

import coloredlogs


PACKAGE_LOGGER = "persistable"

FORMATS = {
    "DEFAULT": "[%(asctime)s: %(levelname)s] %(name)s: %(message)s",
    "DEBUG": "[%(asctime)s: %(levelname)s] [%(name)s:%(lineno)d] %(message)s",
}


class _PersistableStreamHandler(logging.StreamHandler):
    """Stdout handler installed by `setup_logging`, so later calls can find and replace it."""


def setup_logging(logger: logging.Logger = None, log_level: str = "INFO", colors: bool = True) -> logging.Logger:
    """
    Send Persistable log records to stdout.

    Calling this again replaces the handler added by the previous call
    instead of stacking a second one.

    Args:
        logger: The logger to configure. Defaults to the `persistable` package logger.
        log_level: Logger level name, case-insensitive.
        colors: If True use colored logs.

    Returns:
        The configured logger.
    """
    logger = logger or logging.getLogger(PACKAGE_LOGGER)
    log_level = log_level.upper()
    fmt = FORMATS["DEBUG"] if log_level == "DEBUG" else FORMATS["DEFAULT"]

    for handler in [h for h in logger.handlers if isinstance(h, _PersistableStreamHandler)]:
        logger.removeHandler(handler)

    handler = _PersistableStreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(fmt))
    logger.addHandler(handler)

    logger.setLevel(log_level)
    logger.propagate = False

    if colors:
        coloredlogs.install(level=log_level, logger=logger, fmt=fmt)

    return logger
