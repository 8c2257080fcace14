"""
Logging for the shop service.

Every module logs through a child of the ``shodhai`` logger so one call to
``setup_logging`` at startup routes scan, stock and order messages to stdout
and, unless disabled, to rotating files under ``log_dir``.
"""
import logging
import sys
from pathlib import Path
from logging.handlers import RotatingFileHandler

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

ROOT_LOGGER_NAME = "shodhai"
MAX_LOG_BYTES = 10 * 1024 * 1024
LOG_BACKUPS = 5


def _rotating_handler(path: Path, level: int, formatter: logging.Formatter) -> RotatingFileHandler:
    handler = RotatingFileHandler(path, maxBytes=MAX_LOG_BYTES, backupCount=LOG_BACKUPS, encoding="utf-8")
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def setup_logging(log_level: str = "INFO", log_dir: str = "logs", log_to_file: bool = True) -> logging.Logger:
    """
    Attach handlers to the ``shodhai`` logger.

    Safe to call more than once; a logger that already has handlers is
    returned untouched.

    Args:
        log_level: Level name for the shop logger
        log_dir: Where app.log and error.log are written
        log_to_file: When false only stdout is used (tests, containers)

    Returns:
        The ``shodhai`` logger
    """
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))

    if logger.handlers:
        return logger

    formatter = logging.Formatter(LOG_FORMAT, DATE_FORMAT)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.INFO)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if not log_to_file:
        return logger

    path = Path(log_dir)
    path.mkdir(parents=True, exist_ok=True)
    # app.log keeps everything, error.log only failures
    logger.addHandler(_rotating_handler(path / "app.log", logging.DEBUG, formatter))
    logger.addHandler(_rotating_handler(path / "error.log", logging.ERROR, formatter))

    return logger


def get_logger(name: str) -> logging.Logger:
    """Child logger for a shop component, e.g. ``get_logger("store")``."""
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
