"""Diagnostic logging for the Project Updater.

User-facing progress goes through the Rich console helpers in
:mod:`project_updater.utils`; this module only wires the ``project_updater``
logger hierarchy to a :class:`rich.logging.RichHandler` sharing that console,
so debug traces (commands, exit codes, manifest edits) interleave cleanly with
spinners.
"""

from __future__ import annotations

import logging

from rich.logging import RichHandler

from project_updater.utils import console

LOGGER_NAME = "project_updater"


def setup_logging(level: str = "WARNING") -> logging.Logger:
    """Configure and return the package logger.  Safe to call repeatedly."""
    logger = logging.getLogger(LOGGER_NAME)
    logger.handlers.clear()
    logger.setLevel(getattr(logging, level.upper(), logging.WARNING))
    logger.propagate = False

    handler = RichHandler(console=console, show_path=False, markup=False)
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    logger.addHandler(handler)
    return logger


def get_logger(name: str) -> logging.Logger:
    """Return a child of the package logger (``project_updater.<name>``)."""
    return logging.getLogger(f"{LOGGER_NAME}.{name}")
