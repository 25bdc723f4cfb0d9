"""
Logger factory.

Every module gets its logger through setup_logger(__name__) so format and level stay uniform.
"""

import logging
import sys

from dayplanner.core.config import get_settings

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logger(name: str) -> logging.Logger:
    """
    Create (or fetch) a configured logger.

    Args:
        name: Logger name, usually the calling module's __name__

    Returns:
        logging.Logger with a single stream handler attached
    """
    instance = logging.getLogger(name)
    if not instance.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        instance.addHandler(handler)
        instance.propagate = False
    instance.setLevel(get_settings().LOG_LEVEL)
    return instance
