"""
Logging utilities for redirecting logs to a queue for GUI display.
"""
from __future__ import annotations

import logging
from queue import Queue
from typing import Optional


class QueueLogHandler(logging.Handler):
    """
    A logging handler that sends log records to a queue.

    Used to capture logs from the composer and display them in the GUI console.
    """

    def __init__(self, log_queue: Queue, level: int = logging.INFO):
        super().__init__(level)
        self.log_queue = log_queue
        self.setFormatter(logging.Formatter("%(message)s"))

    def emit(self, record: logging.LogRecord) -> None:
        try:
            message = self.format(record)
            level = record.levelname
            # Map DEBUG to INFO for GUI display
            if level == "DEBUG":
                level = "INFO"
            self.log_queue.put((message, level))
        except Exception:
            self.handleError(record)


def attach_queue_handler(
    log_queue: Queue,
    logger_name: Optional[str] = None,
    level: int = logging.INFO,
) -> QueueLogHandler:
    """
    Attach a QueueLogHandler to the specified logger (or root logger if None).

    The logger's own level is lowered to `level` if it would filter out
    records the handler should see.

    Args:
        log_queue: Queue to send log messages to.
        logger_name: Name of logger to attach to. None = root logger.
        level: Minimum level forwarded to the queue.

    Returns:
        The attached handler (for later removal).
    """
    logger = logging.getLogger(logger_name)
    handler = QueueLogHandler(log_queue, level)
    logger.addHandler(handler)
    if logger.getEffectiveLevel() > level:
        logger.setLevel(level)
    return handler


def detach_queue_handler(handler: QueueLogHandler, logger_name: Optional[str] = None) -> None:
    """
    Remove a QueueLogHandler from the specified logger.

    Args:
        handler: The handler to remove.
        logger_name: Name of logger to detach from. None = root logger.
    """
    logger = logging.getLogger(logger_name)
    logger.removeHandler(handler)
