"""
src.core.logger
~~~~~~~~~~~~~~~
Application logging. Everything logs under the ``blog`` namespace so the
uvicorn/sqlalchemy loggers keep their own configuration.
"""

import logging
import sys

LOGGER_NAME = "blog"
_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"
_DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"


def setup_logging(level: str = "INFO") -> logging.Logger:
    """Configure the ``blog`` logger once; later calls only adjust the level."""
    root = logging.getLogger(LOGGER_NAME)
    root.setLevel(level.upper())
    root.propagate = False  # don't duplicate into the root logger

    if not root.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(_FORMAT, datefmt=_DATE_FORMAT))
        root.addHandler(handler)
    return root


def get_logger(name: str) -> logging.Logger:
    """Child logger, e.g. ``get_logger("posts")`` -> ``blog.posts``."""
    return logging.getLogger(f"{LOGGER_NAME}.{name}")
