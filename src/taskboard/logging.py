"""Logging for the board and the API server.

Every module logs through ``logging.getLogger(__name__)``, so all records end
up under the ``taskboard`` namespace configured here.
"""

import logging
import sys
from pathlib import Path

from .utils import now_utc

LOGGER_NAME = "taskboard"
LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _open_handlers(verbose: int, log_file: Path | None) -> list[logging.Handler]:
    handlers: list[logging.Handler] = []
    if verbose > 0:
        handlers.append(logging.StreamHandler(sys.stderr))
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))
    return handlers


def setup_logging(
    verbose: int = 0, log_file: Path | None = None, component: str = "board"
) -> logging.Logger | None:
    """
    Attach stderr and/or file handlers to the ``taskboard`` logger.

    Verbosity 1 logs at INFO and 2 or more at DEBUG. A log file on its own
    logs at INFO. With neither, logging stays unconfigured and None is
    returned. Handlers from an earlier call are closed and replaced.

    Args:
        verbose: Number of ``-v`` flags given
        log_file: Optional file to append records to
        component: ``board`` or ``server``, named in the first record
    """
    handlers = _open_handlers(verbose, log_file)
    if not handlers:
        return None

    level = logging.DEBUG if verbose >= 2 else logging.INFO
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    for previous in list(logger.handlers):
        logger.removeHandler(previous)
        previous.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.info(
        "%s %s started at %s, level %s",
        LOGGER_NAME,
        component,
        now_utc().isoformat(timespec="seconds"),
        logging.getLevelName(level),
    )
    return logger
