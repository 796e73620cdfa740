import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from .config import APP_NAME, LOG_BACKUP_COUNT, LOG_MAX_BYTES


def setup_logging(log_file: Path, level: int = logging.DEBUG) -> logging.Logger:
    """
    Attach a rotating file handler to the application logger.

    The terminal belongs to the full-screen UI, so diagnostics only go to
    the log file. Calling this twice does not add a second handler.

    Args:
        log_file: Destination of the diagnostic log
        level: Minimum level recorded

    Returns:
        The configured ``notetui`` logger
    """
    logger = logging.getLogger(APP_NAME)
    logger.setLevel(level)
    logger.propagate = False

    if logger.handlers:
        return logger

    try:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handler: logging.Handler = RotatingFileHandler(
            log_file, maxBytes=LOG_MAX_BYTES, backupCount=LOG_BACKUP_COUNT, encoding="utf-8"
        )
    except OSError:
        # No writable log location.
        handler = logging.NullHandler()

    handler.setFormatter(logging.Formatter(
        "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
    ))
    logger.addHandler(handler)

    logger.info("Logging initialized. log_file=%s", log_file)
    return logger
