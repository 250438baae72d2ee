"""Logging configuration for the `labels` command.

Attaches a console handler to the package logger and, when asked, a
rotating file handler. Library modules only ever call logging.getLogger.
"""
from __future__ import annotations

import logging
import logging.handlers
import os
from typing import Optional

PACKAGE_LOGGER = "sensitivity_labels"
LOG_FORMAT = "%(asctime)s %(name)s %(levelname)s: %(message)s"


def configure_logging(verbose: bool = False,
                      log_file: Optional[str] = None,
                      *,
                      max_bytes: int = 5 * 1024 * 1024,
                      backup_count: int = 3) -> logging.Logger:
    """Configure the package logger.

    - Console output goes to stderr at DEBUG when verbose, WARNING otherwise.
    - If `log_file` is given, a RotatingFileHandler records everything at DEBUG.
    - Calling it again replaces the handlers it installed before.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        if getattr(handler, "_labels_handler", False):
            logger.removeHandler(handler)
            handler.close()

    formatter = logging.Formatter(LOG_FORMAT)

    console = logging.StreamHandler()
    console.setLevel(logging.DEBUG if verbose else logging.WARNING)
    console.setFormatter(formatter)
    console._labels_handler = True
    logger.addHandler(console)

    if log_file:
        directory = os.path.dirname(os.path.abspath(log_file))
        os.makedirs(directory, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            log_file, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        file_handler._labels_handler = True
        logger.addHandler(file_handler)

    logger.setLevel(logging.DEBUG)
    logger.debug("Logging initialized (verbose=%s, log_file=%s)", verbose, log_file)
    return logger
