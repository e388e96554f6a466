"""
Poker Arena Sync - Logging Configuration
"""

import logging

from src.config.settings import Settings

_LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def configure_logging(settings: Settings) -> None:
    """Set the root log level and format from settings.

    ``debug`` wins over ``log_level``. Safe to call more than once; only
    the level changes on later calls.
    """
    level = logging.DEBUG if settings.debug else settings.log_level.upper()
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(format=_LOG_FORMAT)
    root.setLevel(level)
    # engineio/socketio are chatty at INFO
    for name in ("engineio.client", "socketio.client"):
        logging.getLogger(name).setLevel(logging.DEBUG if settings.debug else logging.WARNING)
