import logging
import sys

LOGGER_NAME = "PyMixTimeline"


def setup_logger(level=logging.DEBUG):
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    # Console Handler
    ch = logging.StreamHandler(sys.stdout)
    ch.setLevel(level)

    # Formatter
    formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
    ch.setFormatter(formatter)

    if not logger.handlers:
        logger.addHandler(ch)

    return logger

logger = setup_logger()
