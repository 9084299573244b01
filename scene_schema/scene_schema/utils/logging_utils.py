import logging
import sys
from typing import Optional, TextIO

DEFAULT_FORMAT = "%(name)s - %(levelname)s - %(message)s"


class _BelowLevelFilter(logging.Filter):
    """Pass only records strictly below ``threshold``."""

    def __init__(self, threshold: int) -> None:
        super().__init__()
        self.threshold = threshold

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno < self.threshold


def _stream_handler(stream: TextIO, level: int, formatter: logging.Formatter) -> logging.StreamHandler:
    handler = logging.StreamHandler(stream=stream)
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def configure_split_stream_logging(
    *,
    level: int = logging.INFO,
    stderr_level: int = logging.WARNING,
    formatter: Optional[logging.Formatter] = None,
    logger_name: Optional[str] = None,
) -> logging.Logger:
    """Route a logger's output by severity and return the logger.

    Loading and registration chatter (below ``stderr_level``) is written to
    stdout. Definition problems and dropped snippet fields (``stderr_level``
    and above) are written to stderr, so they still reach the terminal when a
    documentation build redirects stdout. Any handlers already attached to the
    logger are replaced.
    """
    logger = logging.getLogger(logger_name)
    logger.handlers.clear()
    logger.setLevel(level)

    formatter = formatter or logging.Formatter(DEFAULT_FORMAT)
    threshold = max(stderr_level, logging.DEBUG)

    chatter = _stream_handler(sys.stdout, logging.DEBUG, formatter)
    chatter.addFilter(_BelowLevelFilter(threshold))
    logger.addHandler(chatter)
    logger.addHandler(_stream_handler(sys.stderr, threshold, formatter))
    return logger
