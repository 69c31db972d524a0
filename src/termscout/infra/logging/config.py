from __future__ import annotations

"""
Logging Settings.

Holds the immutable settings the logging subsystem is started with and
the translation of textual severity names to logging constants. Console
output goes to stderr so that stdout only ever carries the run summary
or its JSON rendering.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Optional

_LEVEL_MAP: Dict[str, int] = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}

# Per-finding and per-file records only appear at DEBUG; name them there
_DEBUG_CONSOLE_FMT = "%(levelname)s | %(name)s | %(message)s"


def parse_level(level: Optional[str]) -> int:
    """Convert a severity name to its numeric constant, defaulting to INFO."""
    if not level:
        return logging.INFO
    return _LEVEL_MAP.get(str(level).strip().upper(), logging.INFO)


@dataclass(frozen=True)
class LoggingConfig:
    """
    Settings for configure_logging().

    Attributes:
        level: Minimum severity written to any output.
        console: Whether records are written to stderr.
        log_file: Optional rotating log file receiving the same records.
        max_bytes: Size at which the log file is rolled over.
        backup_count: Number of rolled-over files kept.
        console_fmt: Record layout on stderr.
        file_fmt: Record layout in the log file.
        datefmt: Timestamp layout in the log file.
    """
    level: str = "INFO"
    console: bool = True
    log_file: Optional[str] = None

    max_bytes: int = 5 * 1024 * 1024
    backup_count: int = 3

    console_fmt: str = "%(levelname)s | %(message)s"
    file_fmt: str = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
    datefmt: str = "%Y-%m-%d %H:%M:%S"

    @classmethod
    def for_cli(cls, debug: bool = False, log_file: Optional[str] = None) -> LoggingConfig:
        """
        Build the settings used by the command line front end.

        Args:
            debug: Lower the threshold to DEBUG and show logger names.
            log_file: Optional log file path from --log-file.

        Returns:
            LoggingConfig: Settings ready for configure_logging().
        """
        if debug:
            return cls(level="DEBUG", log_file=log_file, console_fmt=_DEBUG_CONSOLE_FMT)
        return cls(level="INFO", log_file=log_file)
