"""
Site Logger

One stdout handler on the ``nrlsite`` logger; every module logs through a
``logging.getLogger(__name__)`` child, so redirect decisions, matrix load
warnings and audit progress all end up here.

LOG_MODE picks the level and format:
- 'debug': every redirect decision and dropped sitemap entry, timestamped
- 'info': startup, matrix warnings, audit summary (default)
- 'production': errors only
"""
import logging
import sys
from .config import config

_LEVELS = {
    'debug': logging.DEBUG,
    'info': logging.INFO,
    'production': logging.ERROR,
}

_DEBUG_FORMAT = '[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s'
_DEFAULT_FORMAT = '[%(levelname)s] %(message)s'


def setup_logger(name: str = 'nrlsite', mode: str = None) -> logging.Logger:
    """
    Attach the stdout handler to ``name`` once and set its level.

    ``mode`` defaults to ``config.LOG_MODE``; unknown modes behave as 'info'.
    A second call returns the already configured logger untouched.
    """
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger

    mode = (mode or config.LOG_MODE or 'info').lower()
    logger.setLevel(_LEVELS.get(mode, logging.INFO))

    handler = logging.StreamHandler(sys.stdout)
    if mode == 'debug':
        handler.setFormatter(logging.Formatter(_DEBUG_FORMAT, datefmt='%H:%M:%S'))
    else:
        handler.setFormatter(logging.Formatter(_DEFAULT_FORMAT))
    logger.addHandler(handler)

    return logger


log = setup_logger()
