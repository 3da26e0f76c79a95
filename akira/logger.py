# akira/logger.py
import logging
import sys

from akira.core import settings

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"


def setup_logger(name: str = "akira", level: str | None = None) -> logging.Logger:
    """
    Configure the service logger once and return it.

    Repeated calls reuse the existing handler so tests and uvicorn reloads
    do not duplicate output.
    """
    log = logging.getLogger(name)
    log.setLevel((level or settings.LOG_LEVEL).upper())

    if not log.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        log.addHandler(handler)
    log.propagate = False
    return log


logger = setup_logger()
