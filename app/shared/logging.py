"""
Logging configuration for the application.

Sets up structured logging with a consistent format.
Logging must not change program behavior.

Records are enqueued by a QueueHandler on the root logger and written to
stdout by a QueueListener thread, so emitting a record on the request
path never waits on I/O.
"""

import atexit
import logging
import queue
import sys
from logging.handlers import QueueHandler, QueueListener
from typing import TextIO

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_listener: QueueListener | None = None


def stop_logging() -> None:
    """Flush queued records and stop the listener thread."""
    global _listener
    if _listener is not None:
        _listener.stop()
        _listener = None


def configure_logging(level: str = "INFO", stream: TextIO | None = None) -> None:
    """Configure structured logging for the application.

    Safe to call more than once; a previous listener is stopped first.

    Args:
        level: The log level string (DEBUG, INFO, WARNING, ERROR).
        stream: Where records are written. Defaults to stdout.
    """
    global _listener
    stop_logging()

    if stream is None:
        stream = sys.stdout
    stream_handler = logging.StreamHandler(stream)
    stream_handler.setFormatter(logging.Formatter(LOG_FORMAT, LOG_DATE_FORMAT))

    log_queue: queue.SimpleQueue = queue.SimpleQueue()
    _listener = QueueListener(log_queue, stream_handler)
    _listener.start()

    # The listener applies LOG_FORMAT; the queue side only merges args.
    queue_handler = QueueHandler(log_queue)
    queue_handler.setFormatter(logging.Formatter("%(message)s"))

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        handlers=[queue_handler],
        force=True,
    )

    # Suppress noisy third-party loggers
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.error").setLevel(logging.WARNING)


atexit.register(stop_logging)
