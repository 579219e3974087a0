"""
Logging: named child loggers under the ``triggerbar`` root.

The library only installs a ``NullHandler``; scripts call ``setup_logging``
to get formatted console output.
"""

import logging
import sys

ROOT_LOGGER = "triggerbar"

logging.getLogger(ROOT_LOGGER).addHandler(logging.NullHandler())


def setup_logging(level: str = "INFO") -> logging.Logger:
    """Attach a console handler to the package root logger and return it."""
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    if any(isinstance(h, logging.StreamHandler) and not isinstance(h, logging.NullHandler)
           for h in logger.handlers):
        return logger

    fmt = logging.Formatter(
        "[%(asctime)s] %(levelname)-8s %(name)-28s │ %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    ch = logging.StreamHandler(sys.stdout)
    ch.setFormatter(fmt)
    logger.addHandler(ch)
    return logger


def get_logger(module: str) -> logging.Logger:
    """Return a child logger for *module*."""
    return logging.getLogger(ROOT_LOGGER).getChild(module)
