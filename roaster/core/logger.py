"""Logging configuration and setup."""

import logging
import os
import sys
from typing import Optional

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

_configured = False


def setup_logging(level: Optional[str] = None) -> None:
    """Configure the root logger once with a single stream handler.

    The level comes from the argument, then the LOG_LEVEL environment
    variable, then INFO.
    """
    global _configured
    level_name = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
    root = logging.getLogger()
    root.setLevel(getattr(logging, level_name, logging.INFO))

    if _configured:
        return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)

    # uvicorn's access log duplicates the request lines we care about
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    _configured = True
