from __future__ import annotations

"""
Logging Lifecycle.

``configure_logging`` installs a single QueueHandler on the root logger
and starts a QueueListener that feeds the console and file sinks, so
analysis code never waits on log I/O. ``shutdown_logging`` drains the
queue, closes the sinks and removes every handler dartsweep installed.
"""

import atexit
import logging
import queue
import sys
from logging.handlers import QueueHandler, QueueListener
from typing import Optional

from dartsweep.infra.logging.config import LoggingConfig
from dartsweep.infra.logging.handlers import build_sink_handlers, is_tagged, tag_handler

CONFIGURED_FLAG_ATTR: str = "_dartsweep_configured"
LISTENER_ATTR: str = "_dartsweep_queue_listener"


# ==============================================================================
# PUBLIC API
# ==============================================================================

def configure_logging(cfg: LoggingConfig, *, force: bool = False) -> logging.Logger:
    """
    Configure the root logger.

    Repeated calls are no-ops unless ``force`` is set, in which case the
    previous dartsweep setup is shut down first.

    Args:
        cfg: Logging settings.
        force: Replace an existing configuration.

    Returns:
        logging.Logger: The root logger.
    """
    root = logging.getLogger()
    if getattr(root, CONFIGURED_FLAG_ATTR, False) and not force:
        return root

    shutdown_logging()
    root.setLevel(cfg.level_number)

    try:
        sinks = build_sink_handlers(cfg)
    except (ValueError, TypeError) as e:
        _install_emergency_console(root, e)
        return root

    if sinks:
        log_queue: queue.Queue[logging.LogRecord] = queue.Queue(-1)
        listener = QueueListener(log_queue, *sinks, respect_handler_level=True)
        listener.start()
        root.addHandler(tag_handler(QueueHandler(log_queue)))
        setattr(root, LISTENER_ATTR, listener)
        atexit.register(_stop_listener, listener)

    setattr(root, CONFIGURED_FLAG_ATTR, True)
    return root


def shutdown_logging() -> None:
    """Flush pending records, close the sinks and detach our handlers."""
    root = logging.getLogger()

    listener = getattr(root, LISTENER_ATTR, None)
    if listener is not None:
        _stop_listener(listener)
        for sink in listener.handlers:
            sink.close()
        setattr(root, LISTENER_ATTR, None)

    for handler in [h for h in root.handlers if is_tagged(h)]:
        root.removeHandler(handler)
        handler.close()

    if hasattr(root, CONFIGURED_FLAG_ATTR):
        delattr(root, CONFIGURED_FLAG_ATTR)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


# ==============================================================================
# PRIVATE HELPERS
# ==============================================================================

def _stop_listener(listener: Optional[QueueListener]) -> None:
    # stop() fails on a listener whose thread was already joined
    if listener is not None and getattr(listener, "_thread", None) is not None:
        listener.stop()


def _install_emergency_console(root: logging.Logger, error: Exception) -> None:
    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(logging.Formatter("CRITICAL FALLBACK | %(levelname)s | %(message)s"))
    root.addHandler(tag_handler(console))
    root.setLevel(logging.INFO)
    setattr(root, CONFIGURED_FLAG_ATTR, True)
    root.warning(f"Logging setup failed ({error}). Switched to emergency console.")
