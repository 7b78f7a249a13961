"""
Logging setup.

Modules log through logging.getLogger(__name__), which puts
them all under the "bank_ledger" logger configured here.
"""

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def setup_logging(level: str = "INFO", logger_name: str = "bank_ledger") -> logging.Logger:
    """
    Attach a single stream handler to the package logger.

    Safe to call more than once; existing handlers are replaced
    rather than duplicated.
    """
    logger = logging.getLogger(logger_name)

    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    logger.propagate = False

    return logger
