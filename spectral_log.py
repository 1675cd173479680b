"""
Logging setup for the fft-eval tools.

Usage:
    from spectral_log import setup_logging

    # once, at startup
    setup_logging(logging.DEBUG, log_file="fft_eval.log")

    # everywhere else
    logger = logging.getLogger(__name__)
"""

import os
import sys
import logging
from logging.handlers import RotatingFileHandler

CONSOLE_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
FILE_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - [%(funcName)s:%(lineno)d] %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

MAX_BYTES = 10 * 1024 * 1024  # 10 MB per log file
BACKUP_COUNT = 5


def create_console_handler(level=logging.INFO):
    # stdout carries rendered output, so diagnostics go to stderr
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(CONSOLE_FORMAT, DATE_FORMAT))
    return handler


def create_rotating_handler(path, level=logging.DEBUG, max_bytes=MAX_BYTES, backup_count=BACKUP_COUNT):
    """
    Create a rotating file handler, creating the parent directory if needed.

    Args:
        path: Log file path
        level: Logging level
        max_bytes: Maximum file size before rotation
        backup_count: Number of backup files to keep
    """
    directory = os.path.dirname(os.path.abspath(path))
    os.makedirs(directory, exist_ok=True)
    handler = RotatingFileHandler(path, maxBytes=max_bytes, backupCount=backup_count, encoding='utf-8')
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(FILE_FORMAT, DATE_FORMAT))
    return handler


def setup_logging(console_level=logging.INFO, log_file=None):
    """
    Configure application-wide logging.

    Args:
        console_level: Level for the stderr handler
        log_file: Optional path of a rotating DEBUG-level log file
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    root_logger.handlers.clear()
    root_logger.addHandler(create_console_handler(console_level))
    if log_file:
        root_logger.addHandler(create_rotating_handler(log_file))

    # matplotlib is chatty at DEBUG
    logging.getLogger('matplotlib').setLevel(logging.WARNING)
    logging.getLogger('PIL').setLevel(logging.WARNING)

    logging.getLogger(__name__).debug("Logging initialized (console=%s, file=%s)",
                                      logging.getLevelName(console_level), log_file)
