from __future__ import annotations

"""
Logging Settings.

The run's logging setup is derived from two CLI switches (``--debug`` and
``--log-file``); everything else has a fixed default.
"""

import logging
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class LoggingConfig:
    """
    Settings consumed by ``configure_logging``.

    Attributes:
        level: Severity name ("DEBUG", "INFO", ...). Unknown names mean INFO.
        console: Write records to stderr.
        log_file: Optional rotating log file.
        max_bytes: Size at which the log file rolls over.
        backup_count: Rolled-over files kept next to the log file.
    """
    level: str = "INFO"
    console: bool = True
    log_file: Optional[str] = None

    max_bytes: int = 1024 * 1024
    backup_count: int = 2

    console_fmt: str = "%(levelname)s | %(message)s"
    file_fmt: str = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
    datefmt: str = "%Y-%m-%d %H:%M:%S"

    @classmethod
    def for_cli(cls, *, debug: bool = False, log_file: Optional[str] = None) -> "LoggingConfig":
        """Settings for one command line invocation."""
        return cls(level="DEBUG" if debug else "INFO", log_file=log_file or None)

    @property
    def level_number(self) -> int:
        name = (self.level or "").strip().upper()
        number = logging.getLevelName(name)
        return number if isinstance(number, int) else logging.INFO
