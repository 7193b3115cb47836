"""Process-wide logging setup for the records client.

`gui.app.main` calls `setup_logging` with the configured `PI_LOG_LEVEL`;
library modules (the REST client) ask for a named logger through
`get_logger`, which falls back to the same format when they are used on
their own, e.g. from a script or a REPL:

    from personal_info.utils.logger import get_logger
    logger = get_logger(__name__)
"""
import logging
import os

DEFAULT_LEVEL = os.getenv("PI_LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logging(level: str = DEFAULT_LEVEL) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
    )


def get_logger(name: str) -> logging.Logger:
    if not logging.getLogger().handlers:
        setup_logging()
    return logging.getLogger(name)
