"""Logging for trim-exactly.

One package logger, ``trim-exactly``, writes to stderr so that stdout
carries nothing but trimmed text.  The trimmer only emits DEBUG records,
so it stays silent at the default INFO level.

The ``[logging]`` settings section is applied with
:func:`apply_logging_config`: it moves the stderr level and, when
``log_dir`` is set, adds a timestamped log file at the same level.
"""

from __future__ import annotations

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from trim_exactly.config import LoggingConfig

LOG_LEVELS: dict[str, int] = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
}

_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
_LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"


def _formatter() -> logging.Formatter:
    return logging.Formatter(_LOG_FORMAT, datefmt=_LOG_DATEFMT)


logger = logging.getLogger("trim-exactly")
logger.setLevel(logging.INFO)

handler = logging.StreamHandler(sys.stderr)
handler.setLevel(logging.INFO)
handler.setFormatter(_formatter())
logger.addHandler(handler)


def set_level(level: int | str) -> None:
    """Move the logger and its stderr handler to *level*.

    *level* is a ``logging`` constant or one of the :data:`LOG_LEVELS` names.
    """
    if isinstance(level, str):
        level = LOG_LEVELS[level.upper()]
    logger.setLevel(level)
    handler.setLevel(level)


def configure_file_logging(
    log_dir: str | Path,
    *,
    level: int = logging.INFO,
) -> logging.FileHandler:
    """Also write records at *level* and above to a timestamped file.

    The file is ``<log_dir>/trim-exactly_YYYY-MM-DDTHH-MM-SS.log``;
    ``log_dir`` is created on demand.  The handler is returned so that
    callers can detach it again.
    """
    directory = Path(log_dir)
    directory.mkdir(parents=True, exist_ok=True)
    stamp = datetime.now().strftime("%Y-%m-%dT%H-%M-%S")

    file_handler = logging.FileHandler(directory / f"{logger.name}_{stamp}.log", encoding="utf-8")
    file_handler.setLevel(level)
    file_handler.setFormatter(_formatter())

    # The logger gates records before any handler sees them.
    logger.setLevel(min(logger.level, level))
    logger.addHandler(file_handler)
    return file_handler


def apply_logging_config(config: LoggingConfig) -> logging.FileHandler | None:
    """Apply a validated ``[logging]`` section.

    Returns the file handler when ``log_dir`` is set, else ``None``.
    """
    level = LOG_LEVELS[config.level]
    set_level(level)
    if config.log_dir is None:
        return None
    return configure_file_logging(config.log_dir, level=level)


__all__ = [
    "LOG_LEVELS",
    "apply_logging_config",
    "configure_file_logging",
    "logger",
    "set_level",
]
