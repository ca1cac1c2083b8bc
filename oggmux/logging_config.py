"""
Logging configuration and setup.
Handles file and console logging with rotation.

Environment Variables:
- DEBUG_LEVEL: Controls logging verbosity
  - 'info': Console and file both show INFO, WARNING, ERROR only
  - 'debug': Console shows INFO+, file shows DEBUG+ (per-page messages)
- LOG_DIR: Directory for rotating log files
"""
import logging
import os
from datetime import datetime
from logging.handlers import RotatingFileHandler
from typing import Optional

from config.settings import LOG_DIR
from config.constants import LOG_MAX_BYTES, LOG_BACKUP_COUNT


def setup_logging(log_dir: Optional[str] = None, debug_level: Optional[str] = None) -> str:
    """
    Configure logging to both file and console based on DEBUG_LEVEL.
    Creates rotating log files in the log directory.

    Args:
        log_dir: Directory for log files (defaults to LOG_DIR)
        debug_level: 'info' or 'debug' (defaults to DEBUG_LEVEL)

    Returns:
        str: Path of the main log file
    """
    # Import here so tests can patch the setting
    from config.settings import DEBUG_LEVEL

    log_dir = log_dir or LOG_DIR
    debug_level = (debug_level or DEBUG_LEVEL).lower()

    os.makedirs(log_dir, exist_ok=True)

    log_filename = os.path.join(log_dir, f"oggmux_{datetime.now().strftime('%Y-%m-%d')}.log")

    if debug_level == 'debug':
        root_level = logging.DEBUG
        file_level = logging.DEBUG
        console_level = logging.INFO
    else:  # 'info' or any other value
        root_level = logging.INFO
        file_level = logging.INFO
        console_level = logging.INFO

    file_handler = RotatingFileHandler(
        log_filename,
        maxBytes=LOG_MAX_BYTES,
        backupCount=LOG_BACKUP_COUNT,
        encoding='utf-8'
    )
    file_handler.setLevel(file_level)
    file_handler.setFormatter(logging.Formatter(
        '%(asctime)s [%(levelname)s] %(name)s: %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    ))

    console_handler = logging.StreamHandler()
    console_handler.setLevel(console_level)
    console_handler.setFormatter(logging.Formatter(
        '%(asctime)s [%(levelname)s] %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    ))

    root_logger = logging.getLogger()
    root_logger.setLevel(root_level)
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()
    root_logger.addHandler(file_handler)
    root_logger.addHandler(console_handler)

    # FFmpeg messages routed through PyAV
    logging.getLogger('libav').setLevel(logging.WARNING)

    logger = logging.getLogger(__name__)
    logger.info(f"Logging initialized - DEBUG_LEVEL: {debug_level.upper()}")
    logger.info(f"Main log file: {log_filename}")
    logger.info(f"Console: INFO+ | File: {logging.getLevelName(file_level)}+")

    return log_filename


def log_effective_config():
    """Log the current logging configuration for debugging."""
    logger = logging.getLogger(__name__)
    root_logger = logging.getLogger()
    handlers = root_logger.handlers

    logger.info("Logging configuration:")
    logger.info("  Root logger level: %s", logging.getLevelName(root_logger.level))

    for i, handler in enumerate(handlers):
        logger.info(
            "  Handler %d: %s | level=%s",
            i,
            handler.__class__.__name__,
            logging.getLevelName(handler.level)
        )
