"""Logger factory for the application.

All loggers live under the ``ebook_shelf`` namespace; the root package
logger carries a single stream handler so children propagate to it.
"""

import logging
import threading

ROOT_LOGGER_NAME = "ebook_shelf"

_LOCK = threading.Lock()
_CONFIGURED = False


def configure_logging(level_name: str = "INFO") -> logging.Logger:
    """Attach the stream handler (once) and set the package log level."""
    global _CONFIGURED
    with _LOCK:
        logger = logging.getLogger(ROOT_LOGGER_NAME)
        logger.setLevel(getattr(logging, level_name.upper(), logging.INFO))
        if not _CONFIGURED:
            handler = logging.StreamHandler()
            handler.setFormatter(
                logging.Formatter("[ebook_shelf] %(asctime)s %(levelname)s %(name)s %(message)s")
            )
            logger.addHandler(handler)
            logger.propagate = False
            _CONFIGURED = True
        return logger


def get_logger(name: str) -> logging.Logger:
    """Return a logger below the package namespace."""
    if name == ROOT_LOGGER_NAME or name.startswith(ROOT_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
