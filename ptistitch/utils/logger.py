import logging
import os
import sys

LOGGER_NAME = "PtiStitch"


def setup_logger(level=None):
    """
    Configure the shared logger once and return it.
    The console level comes from ``level``, else $PTISTITCH_LOG_LEVEL, else INFO.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG)

    if level is None:
        level = os.environ.get("PTISTITCH_LOG_LEVEL", "INFO").upper()

    if not logger.handlers:
        # Console Handler
        ch = logging.StreamHandler(sys.stdout)
        ch.setFormatter(logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s'))
        logger.addHandler(ch)

    for handler in logger.handlers:
        handler.setLevel(level)

    return logger

logger = setup_logger()
