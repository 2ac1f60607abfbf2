"""
loguru sinks shared by the queue core, its widgets and the demo app.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Optional

from loguru import logger as _logger

_LOG_INITIALISED = False
LOG_DIR = Path(
    os.environ.get(
        "FLASH_QUEUE_LOG_DIR",
        str(Path.home() / ".local" / "state" / "flash-queue"),
    )
)
DEFAULT_LOG_PATH = LOG_DIR / "flash_queue.log"


def configure(log_path: Optional[Path] = None, *, console_level: str = "INFO") -> None:
    """
    Install a console sink at ``console_level`` and a rotating DEBUG file
    sink under ``FLASH_QUEUE_LOG_DIR``.

    Only the first call takes effect. An unwritable log directory leaves the
    console sink in place and logs a warning.
    """
    global _LOG_INITIALISED
    if _LOG_INITIALISED:
        return
    target = log_path or DEFAULT_LOG_PATH

    _logger.remove()
    if sys.stderr is not None:
        _logger.add(sys.stderr, level=console_level, enqueue=True)
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        _logger.warning("Log directory {} unavailable ({}); file logging disabled.", target.parent, exc)
    else:
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
    """Logger used by every flash queue module; configures sinks on first use."""
    configure()
    return _logger
