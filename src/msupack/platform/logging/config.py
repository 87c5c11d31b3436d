"""Logger configuration bootstrap.

Where: platform/logging/config.py
What: Wire the rich console handler and the rotating debug file for ``msupack``.
Why: Commands only pick levels; handler wiring lives in one place.
"""

from __future__ import annotations

import logging
import logging.handlers
import os
from pathlib import Path
from typing import Final, override

from rich.console import Console

from msupack.config.paths import default_log_file

from .handlers import ApplyRichHandler


DEFAULT_LOG_FILE: Final[Path] = default_log_file()
LOGGER_NAME: Final[str] = "msupack"
# Catalog downloads go through requests; its pool chatter is not useful at DEBUG.
_NOISY_LOGGERS: Final[tuple[str, ...]] = ("urllib3", "requests")


class EventTagFormatter(logging.Formatter):
    """Plain-text formatter that tags structured records with their event name."""

    @override
    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        event = getattr(record, "apply_event", None)
        if isinstance(event, str):
            return f"{line} [{event}]"
        return line


def setup_logger(
    log_file: Path | None = None,
    console_level: int = logging.INFO,
    file_level: int = logging.DEBUG,
) -> logging.Logger:
    """(Re)configure the ``msupack`` logger and return it.

    Args:
        log_file: Rotating debug log; ``None`` keeps output on the console only.
        console_level: Threshold for the rich stderr handler.
        file_level: Threshold for the file handler.
    """

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG)

    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    # stderr keeps stdout free for tables and summaries.
    console_handler = ApplyRichHandler(console=Console(stderr=True, soft_wrap=True))
    console_handler.setLevel(console_level)
    logger.addHandler(console_handler)

    if log_file is not None:
        target = Path(log_file).expanduser().resolve()
        os.makedirs(target.parent, exist_ok=True)

        file_handler = logging.handlers.RotatingFileHandler(
            target,
            maxBytes=5 * 1024 * 1024,
            backupCount=3,
            encoding="utf-8",
        )
        file_handler.setLevel(file_level)
        file_handler.setFormatter(
            EventTagFormatter("%(asctime)s %(levelname)-8s %(name)s: %(message)s")
        )
        logger.addHandler(file_handler)

    return logger


logger: Final[logging.Logger] = setup_logger(log_file=DEFAULT_LOG_FILE)


__all__ = ["DEFAULT_LOG_FILE", "EventTagFormatter", "LOGGER_NAME", "setup_logger", "logger"]
