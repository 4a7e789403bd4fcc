"""Talentgate — Logging Setup.

Provides a centralized logging configuration with colored console output
and rotating file handler. All modules should use get_logger() to obtain
a named logger instance.
"""

from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

# ── Constants ─────────────────────────────────────────────
LOG_DIR = Path(__file__).resolve().parent.parent.parent / "logs"
LOG_FILE = LOG_DIR / "talentgate.log"
MAX_BYTES = 10 * 1024 * 1024  # 10 MB
BACKUP_COUNT = 5

# ── ANSI Color Codes ─────────────────────────────────────
COLORS = {
    "DEBUG": "\033[36m",     # Cyan
    "INFO": "\033[32m",      # Green
    "WARNING": "\033[33m",   # Yellow
    "ERROR": "\033[31m",     # Red
    "CRITICAL": "\033[41m",  # Red background
}
RESET = "\033[0m"

_initialized = False
_console_handler: logging.Handler | None = None


class ColoredFormatter(logging.Formatter):
    """Formatter that colors the level name and timestamp on the console."""

    def format(self, record: logging.LogRecord) -> str:
        color = COLORS.get(record.levelname, "")
        # Work on a copy so the file handler keeps the plain level name.
        record = logging.makeLogRecord(record.__dict__)
        record.levelname = f"{color}{record.levelname:<8}{RESET}"
        record.asctime = f"{color}{self.formatTime(record, self.datefmt)}{RESET}"
        return super().format(record)


def _setup_logging() -> None:
    """Initialize the global logging configuration.

    Sets up two handlers on the root logger:
    - Console handler: INFO level with colored timestamps.
    - Rotating file handler: DEBUG level, 10MB max, 5 backups.

    Calling it more than once has no effect after the first initialization.
    """
    global _initialized, _console_handler
    if _initialized:
        return

    LOG_DIR.mkdir(parents=True, exist_ok=True)

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    # ── Console Handler (INFO) ───────────────────────────
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.INFO)
    console_handler.setFormatter(ColoredFormatter(
        fmt="%(asctime)s │ %(levelname)s │ %(name)s │ %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    ))
    root_logger.addHandler(console_handler)

    # ── Rotating File Handler (DEBUG) ────────────────────
    file_handler = RotatingFileHandler(
        filename=str(LOG_FILE),
        maxBytes=MAX_BYTES,
        backupCount=BACKUP_COUNT,
        encoding="utf-8",
    )
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(
        fmt="%(asctime)s │ %(levelname)-8s │ %(name)s │ %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    ))
    root_logger.addHandler(file_handler)

    _console_handler = console_handler
    _initialized = True


def set_console_level(level: str) -> None:
    """Apply a configured level name (e.g. "DEBUG") to the console handler.

    Args:
        level: Standard logging level name, case-insensitive.

    Raises:
        ValueError: If the name is not a known logging level.
    """
    _setup_logging()
    numeric = logging.getLevelName(level.upper())
    if not isinstance(numeric, int):
        raise ValueError(f"Unknown log level: {level!r}")
    _console_handler.setLevel(numeric)


def get_logger(name: str) -> logging.Logger:
    """Get a named logger instance with the global configuration applied.

    All application modules should use this function instead of
    calling logging.getLogger() directly.

    Args:
        name: The logger name, typically __name__ of the calling module.

    Returns:
        A configured logging.Logger instance.
    """
    _setup_logging()
    return logging.getLogger(name)
