"""
Process-wide logging setup.
"""

from __future__ import annotations

import logging

from . import settings

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def configure_logging() -> None:
    level = getattr(logging, settings.log_level(), None)
    if not isinstance(level, int):
        level = logging.INFO
    root = logging.getLogger()
    # uvicorn may already have installed handlers; only tune the level then.
    if not root.handlers:
        logging.basicConfig(level=level, format=LOG_FORMAT)
    root.setLevel(level)
