"""Logging setup for the chronomark CLI.

Exports are written to stdout, so diagnostics always go to stderr and
never mix with a table piped into a file.  Verbosity is chosen once on
the ``chronomark`` group and applies to every subcommand:

========================  ==================  ====================
Options                   Console level       Console format
========================  ==================  ====================
(none)                    INFO                message only
``-q``                    WARNING             message only
``-v``                    DEBUG               level, logger, message
``--log-file PATH``       (unchanged)         file always at DEBUG
========================  ==================  ====================
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

LOGGER_NAME = "chronomark"
_FILE_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"
_VERBOSE_FORMAT = "%(levelname)-8s %(name)s: %(message)s"
_CONSOLE_FORMAT = "%(message)s"


def console_level(*, verbose: bool = False, quiet: bool = False) -> int:
    """Map the CLI verbosity flags to a console log level.

    Raises:
        ValueError: If both *verbose* and *quiet* are set.
    """
    if verbose and quiet:
        raise ValueError("--verbose and --quiet are mutually exclusive.")
    if verbose:
        return logging.DEBUG
    if quiet:
        return logging.WARNING
    return logging.INFO


def setup_logging(
    *,
    verbose: bool = False,
    quiet: bool = False,
    log_file: Path | None = None,
) -> logging.Logger:
    """Route chronomark's log records to stderr and, optionally, a file.

    Calling it again replaces the previous handlers, so each CLI
    invocation starts from a clean configuration.

    Returns:
        The ``chronomark`` logger.
    """
    level = console_level(verbose=verbose, quiet=quiet)

    logger = logging.getLogger(LOGGER_NAME)
    logger.handlers.clear()
    # Only build DEBUG records when some handler will keep them.
    logger.setLevel(logging.DEBUG if log_file is not None else level)

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(level)
    console.setFormatter(logging.Formatter(_VERBOSE_FORMAT if verbose else _CONSOLE_FORMAT))
    logger.addHandler(console)

    if log_file is not None:
        fh = logging.FileHandler(log_file, encoding="utf-8")
        fh.setLevel(logging.DEBUG)
        fh.setFormatter(logging.Formatter(_FILE_FORMAT))
        logger.addHandler(fh)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Child logger ``chronomark.<name>``."""
    return logging.getLogger(f"{LOGGER_NAME}.{name}")
