"""Console logging for the payload-validate command.

Reports go to stdout, so log records are split across the two streams: routine
progress stays next to the report, while schema and validator problems land on
stderr where ``--format json | jq`` style pipelines still show them.
"""

import logging
import sys
from typing import IO, Optional

LOGGER_NAME = "payload_validator"
DEFAULT_FORMAT = "%(name)s - %(levelname)s - %(message)s"


def _stream_handler(
    stream: IO[str],
    formatter: logging.Formatter,
    *,
    at_least: int = logging.NOTSET,
    below: Optional[int] = None,
) -> logging.Handler:
    handler = logging.StreamHandler(stream=stream)
    handler.setLevel(at_least)
    handler.setFormatter(formatter)
    if below is not None:
        handler.addFilter(lambda record: record.levelno < below)
    return handler


def configure_split_stream_logging(
    *,
    level: int = logging.INFO,
    stderr_level: int = logging.WARNING,
    formatter: Optional[logging.Formatter] = None,
) -> logging.Logger:
    """Replace the root handlers with a stdout/stderr pair split at ``stderr_level``.

    Args:
        level: Root logger level; records below it are dropped entirely.
        stderr_level: Lowest level sent to stderr. Values below DEBUG count
            as DEBUG.
        formatter: Shared formatter, ``DEFAULT_FORMAT`` when omitted.

    Returns:
        The package logger.
    """
    split_at = max(stderr_level, logging.DEBUG)
    formatter = formatter or logging.Formatter(DEFAULT_FORMAT)

    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(level)
    for handler in (
        _stream_handler(sys.stdout, formatter, below=split_at),
        _stream_handler(sys.stderr, formatter, at_least=split_at),
    ):
        root.addHandler(handler)

    return logging.getLogger(LOGGER_NAME)
