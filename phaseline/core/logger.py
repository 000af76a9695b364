"""
Logging setup.

Every module gets its logger through setup_logger(__name__) so that format and
level are configured in one place.
"""

import logging
import sys

from phaseline.core.config import get_settings

_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
_DATEFMT = "%Y-%m-%d %H:%M:%S"


def setup_logger(name: str) -> logging.Logger:
    """Return a logger with the application's handler and level attached."""
    settings = get_settings()
    level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)

    log = logging.getLogger(name)
    log.setLevel(level)
    if not log.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(_FORMAT, _DATEFMT))
        log.addHandler(handler)
        log.propagate = False
    return log


logger = setup_logger("phaseline")
