import logging
import os
import sys

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

logger = logging.getLogger("movie_reviews")


def configure_logging(level=None) -> logging.Logger:
    """
    Send the root and ``movie_reviews`` loggers to stdout.

    ``level`` falls back to the ``LOG_LEVEL`` env var, then DEBUG. Calling it
    again only changes the level; handlers are attached once.
    """
    level = (level or os.getenv("LOG_LEVEL") or "DEBUG").upper()

    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)

    logger.setLevel(level)
    logger.propagate = False
    return logger
