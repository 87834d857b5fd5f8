"""The ``LinkScout`` logger shared by the crawler, the reports and the CLI.

Modules log through the ready-made instance::

    from link_scout.logger import logger
    logger.info("[%d] Visiting: %s", n, url)

The CLI calls :func:`init_logging` once per invocation to apply
``--log-level``, ``--log-file`` and ``--log-format``.
"""
from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Final, Union

_DEFAULT_FORMAT: Final[str] = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_LOGGER_NAME: Final[str] = "LinkScout"

# a crawl logs one line per visited URL; keep a few runs' worth on disk
_MAX_LOG_BYTES: Final[int] = 5 * 1024 * 1024
_LOG_BACKUPS: Final[int] = 3

_LevelT = Union[int, str]


def init_logging(
    level: _LevelT = "INFO",
    log_file: str | Path | None = None,
    log_format: str = _DEFAULT_FORMAT,
) -> logging.Logger:
    """Reset the project logger to stdout plus an optional rotating log file.

    Existing handlers are dropped, so calling this again (one CLI invocation
    after another) never duplicates output.
    """
    lg = logging.getLogger(_LOGGER_NAME)
    lg.setLevel(level.upper() if isinstance(level, str) else level)
    lg.handlers.clear()
    formatter = logging.Formatter(log_format)

    stdout = logging.StreamHandler(sys.stdout)
    stdout.setFormatter(formatter)
    lg.addHandler(stdout)

    if log_file is not None:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        rotating = RotatingFileHandler(path, maxBytes=_MAX_LOG_BYTES, backupCount=_LOG_BACKUPS, encoding="utf-8")
        rotating.setFormatter(formatter)
        lg.addHandler(rotating)

    lg.propagate = False
    return lg


logger: logging.Logger = init_logging()

__all__ = ["logger", "init_logging"]
