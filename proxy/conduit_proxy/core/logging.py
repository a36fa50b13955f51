"""Logging configuration utilities for the Conduit proxy."""
import logging
import os
import sys
from typing import Optional

DEFAULT_LEVEL = "INFO"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s - %(message)s"


def setup_logging(level: Optional[str] = None) -> None:
    """
    Configure root logging for the proxy process.

    ``level`` overrides the LOG_LEVEL environment variable. Logs go to stderr
    so stdout stays free for the validated config dump. An unknown level name
    falls back to INFO: logging has to work before the config is validated.
    """
    name = (level or os.getenv("LOG_LEVEL", DEFAULT_LEVEL)).strip().upper()
    known = isinstance(logging.getLevelName(name), int)
    logging.basicConfig(
        level=name if known else DEFAULT_LEVEL,
        format=LOG_FORMAT,
        stream=sys.stderr,
    )
    if not known:
        logging.getLogger(__name__).warning("Unknown LOG_LEVEL %r, using %s", name, DEFAULT_LEVEL)
