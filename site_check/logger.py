# === FILE: site_check/logger.py ===
"""Logging for SiteCheck.

Every component logs through :data:`logger`, the ``SiteCheck`` logger::

    from site_check.logger import logger
    logger.info("[crawl] visited=%d/%d ...", ...)

Progress lines and failure dumps go to stdout. The CLI calls
:func:`init_logging` once to apply ``--log-level``, ``--log-file`` and
``--log-format``; the file sink rotates at 5 MiB and keeps 3 backups.
"""
from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Final, List, Union

DEFAULT_FORMAT: Final[str] = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOGGER_NAME: Final[str] = "SiteCheck"

LOG_FILE_MAX_BYTES: Final[int] = 5 * 1024 * 1024
LOG_FILE_BACKUPS: Final[int] = 3

logger: logging.Logger = logging.getLogger(LOGGER_NAME)


def init_logging(
    level: Union[int, str] = "INFO",
    log_file: str | Path | None = None,
    log_format: str = DEFAULT_FORMAT,
) -> logging.Logger:
    """Swap the handlers of :data:`logger` for stdout (plus *log_file* when given)."""
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file is not None:
        handlers.append(
            RotatingFileHandler(
                filename=str(log_file),
                maxBytes=LOG_FILE_MAX_BYTES,
                backupCount=LOG_FILE_BACKUPS,
                encoding="utf-8",
            )
        )
    formatter = logging.Formatter(log_format)
    for handler in handlers:
        handler.setFormatter(formatter)

    logger.handlers[:] = handlers
    logger.setLevel(level)
    logger.propagate = False
    return logger


init_logging()

__all__ = ["logger", "init_logging", "DEFAULT_FORMAT", "LOGGER_NAME"]
