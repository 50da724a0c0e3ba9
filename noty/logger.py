"""
Logging setup for noty.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Optional

from loguru import logger as _logger

_LOG_INITIALISED = False
LOG_DIR_ENV = "NOTY_LOG_DIR"
DEFAULT_LOG_DIR = Path.home() / ".noty" / "logs"
LOG_FILE_NAME = "noty.log"
LOG_LEVEL_ENV = "NOTY_LOG_LEVEL"
DEFAULT_CONSOLE_LEVEL = "INFO"
_CONSOLE_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")


def default_log_path() -> Path:
    """Resolve the log file location, honouring ``NOTY_LOG_DIR``."""
    override = os.environ.get(LOG_DIR_ENV)
    base = Path(override) if override else DEFAULT_LOG_DIR
    return base / LOG_FILE_NAME


def console_level() -> str:
    """Level of the stderr sink; ``NOTY_LOG_LEVEL`` overrides the INFO default."""
    level = (os.environ.get(LOG_LEVEL_ENV) or DEFAULT_CONSOLE_LEVEL).strip().upper()
    return level if level in _CONSOLE_LEVELS else DEFAULT_CONSOLE_LEVEL


def configure(log_path: Optional[Path] = None) -> None:
    """Install the stderr and rotating file sinks; repeat calls are no-ops."""
    global _LOG_INITIALISED
    if _LOG_INITIALISED:
        return
    target = log_path or default_log_path()
    target.parent.mkdir(parents=True, exist_ok=True)

    _logger.remove()
    if sys.stderr is not None:
        _logger.add(sys.stderr, level=console_level(), enqueue=True)
    _logger.add(
        target,
        level="DEBUG",
        rotation="10 MB",
        retention=5,
        encoding="utf-8",
        enqueue=True,
        backtrace=True,
        diagnose=False,
    )
    _LOG_INITIALISED = True


def get_logger():
    """Return the shared logger instance."""
    configure()
    return _logger
