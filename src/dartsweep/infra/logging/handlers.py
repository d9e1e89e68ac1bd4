from __future__ import annotations

"""
Logging Handlers.

Builds the sink handlers drained by the queue listener and tags every
handler dartsweep installs, so reconfiguration never touches handlers
owned by someone else (pytest's caplog, an embedding application).
"""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import List, Optional

from dartsweep.infra.logging.config import LoggingConfig

HANDLER_TAG_ATTR: str = "_dartsweep_handler"


def tag_handler(handler: logging.Handler) -> logging.Handler:
    setattr(handler, HANDLER_TAG_ATTR, True)
    return handler


def is_tagged(handler: logging.Handler) -> bool:
    return bool(getattr(handler, HANDLER_TAG_ATTR, False))


def build_sink_handlers(cfg: LoggingConfig) -> List[logging.Handler]:
    """
    Create the console and file handlers requested by the settings.

    A log file that cannot be opened is reported on stderr and skipped;
    console logging still works.

    Args:
        cfg: Logging settings.

    Returns:
        List[logging.Handler]: Tagged handlers, possibly empty.
    """
    level = cfg.level_number
    sinks: List[logging.Handler] = []

    if cfg.console:
        console = logging.StreamHandler(sys.stderr)
        console.setFormatter(logging.Formatter(cfg.console_fmt))
        sinks.append(console)

    if cfg.log_file:
        file_handler = _open_log_file(cfg)
        if file_handler is not None:
            file_handler.setFormatter(logging.Formatter(cfg.file_fmt, datefmt=cfg.datefmt))
            sinks.append(file_handler)

    for handler in sinks:
        handler.setLevel(level)
        tag_handler(handler)
    return sinks


def _open_log_file(cfg: LoggingConfig) -> Optional[RotatingFileHandler]:
    path = os.path.abspath(cfg.log_file or "")
    try:
        os.makedirs(os.path.dirname(path), exist_ok=True)
        return RotatingFileHandler(
            path,
            maxBytes=int(cfg.max_bytes),
            backupCount=int(cfg.backup_count),
            encoding="utf-8",
        )
    except OSError as e:
        sys.stderr.write(f"WARNING: Cannot open log file '{path}': {e}\n")
        return None
