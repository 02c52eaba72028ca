"""Logging helpers."""

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_handler = logging.StreamHandler()
_handler.setFormatter(logging.Formatter(LOG_FORMAT))


def configure_logging(level: int | str = logging.INFO) -> None:
    """Attach a console handler to the ``onionsim`` logger.

    Library modules only create loggers; scripts call this once at startup.
    """
    logger = logging.getLogger("onionsim")
    logger.setLevel(level)
    if _handler not in logger.handlers:
        logger.addHandler(_handler)
