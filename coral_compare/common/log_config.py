"""
Logging Configuration

One handler on the "coral_compare" logger, writing to stderr so stdout
stays free for JSON run reports. A full run takes minutes of paced
requests, so records carry a wall-clock time.

The HTTP libraries underneath the fetcher and the Supabase client log
every request at INFO; they are held at WARNING unless running verbose.
"""

import logging
import os
import sys
from typing import Optional, TextIO

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"
DATE_FORMAT = "%H:%M:%S"

NOISY_LOGGERS = ("urllib3", "httpx", "httpcore", "hpack")


def resolve_level(verbose: bool = False, quiet: bool = False, env: Optional[str] = None) -> int:
    """
    Pick the package log level.

    Flags win over the LOG_LEVEL environment variable; an unknown
    LOG_LEVEL name falls back to INFO.
    """
    if verbose:
        return logging.DEBUG
    if quiet:
        return logging.WARNING

    name = (env if env is not None else os.environ.get("LOG_LEVEL", "")).strip().upper()
    level = logging.getLevelName(name) if name else logging.INFO
    return level if isinstance(level, int) else logging.INFO


def setup_logging(verbose: bool = False, quiet: bool = False, stream: Optional[TextIO] = None) -> None:
    """
    Configure logging for scrape runs and the trigger server.

    Args:
        verbose: DEBUG for the package and the HTTP libraries
        quiet: WARNING and above only
        stream: Output stream (stderr by default)
    """
    level = resolve_level(verbose, quiet)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))

    logger = logging.getLogger("coral_compare")
    logger.setLevel(level)
    logger.handlers.clear()
    logger.addHandler(handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.DEBUG if verbose else logging.WARNING)
