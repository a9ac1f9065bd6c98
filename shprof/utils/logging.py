"""Logging setup for short-lived profiler processes, built on :mod:`loguru`.

Standard output belongs to the instrumented shell function, so console
messages go to standard error. Many ``shprof`` processes may share one
terminal or log file; each line carries the process id.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

from loguru import logger

CONSOLE_FORMAT = "shprof[{process}] {level}: {message}"
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSSSSS} | {process} | {level: <8} | {name}:{line} - {message}"


def setup_logging(log_file: Optional[Path] = None, level: str = "WARNING") -> None:
    """Route loguru output to stderr and, optionally, a rotating file.

    Args:
        log_file: Optional file path for an extra sink.
        level: Minimum log level (string understood by loguru).
    Raises:
        OSError: if ``log_file`` cannot be created.
    """

    logger.remove()
    logger.add(lambda msg: sys.stderr.write(msg), level=level, format=CONSOLE_FORMAT, colorize=False)
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        logger.add(log_file, level=level, format=FILE_FORMAT, rotation="10 MB", retention="7 days")


__all__ = ["setup_logging", "logger", "CONSOLE_FORMAT", "FILE_FORMAT"]
