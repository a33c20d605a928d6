"""
Logging configuration for the process monitor.

Every module logs through a `procmon.*` logger with its own stdout handler.
The CLI re-applies level and log file to all of them once its options are
known, so messages printed before that point keep the default INFO setup.
"""
import logging
import sys
from pathlib import Path
from typing import Optional

ROOT_LOGGER_NAME = "procmon"

CONSOLE_FORMAT = '[%(levelname)s] %(message)s'
FILE_FORMAT = '%(asctime)s [%(levelname)s] %(name)s - %(message)s'
FILE_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def _console_handler(level: int) -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt=CONSOLE_FORMAT))
    return handler


def _file_handler(log_file: Path) -> logging.Handler:
    # The file always gets DEBUG detail, whatever the console level
    log_file.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(log_file, mode='a', encoding='utf-8')
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(logging.Formatter(fmt=FILE_FORMAT, datefmt=FILE_DATE_FORMAT))
    return handler


def setup_logger(
    name: str = ROOT_LOGGER_NAME,
    level: int = logging.INFO,
    log_file: Optional[Path] = None
) -> logging.Logger:
    """
    Configure and return a procmon logger.

    Calling it again for the same name replaces the handlers, so it is safe
    to re-apply settings.

    Args:
        name: Logger name (typically __name__; "procmon" by default)
        level: Console logging level (default: INFO)
        log_file: Optional file that also receives DEBUG records

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    logger.handlers.clear()
    logger.addHandler(_console_handler(level))

    if log_file:
        logger.addHandler(_file_handler(log_file))
        logger.setLevel(logging.DEBUG)
    else:
        logger.setLevel(level)

    # Handlers live on each module logger; propagating would print twice
    logger.propagate = False
    return logger


def configure_logging(level: int = logging.INFO, log_file: Optional[Path] = None) -> None:
    """
    Re-apply level and optional log file to every procmon logger created so far.

    Module loggers are set up at import time with defaults; the CLI calls this
    once it knows about --verbose / --log-file.
    """
    names = [
        name for name in logging.root.manager.loggerDict
        if name == ROOT_LOGGER_NAME or name.startswith(ROOT_LOGGER_NAME + ".")
    ]
    for name in names:
        setup_logger(name, level=level, log_file=log_file)
