"""Logging configuration for dg2srt."""

import logging
import os
from logging.handlers import RotatingFileHandler
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

from .utils import ensure_dir_exists # Use relative import

DEFAULT_LOG_FORMAT = '%(asctime)s - %(levelname)s - [%(name)s:%(lineno)d] - %(message)s'
DEFAULT_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

def setup_logging(
    log_level: int = logging.INFO,
    log_dir: Optional[str] = "logs",
    log_file: str = "dg2srt.log",
    console: bool = False,
    log_format: str = DEFAULT_LOG_FORMAT,
    date_format: str = DEFAULT_DATE_FORMAT,
    max_bytes: int = 10 * 1024 * 1024, # 10 MB
    backup_count: int = 5
) -> None:
    """
    Configures logging for the application.

    Logs go to a rotating file and, when console is set, to stderr via Rich.
    Progress lines meant for the user are printed by ConsoleReporter and do
    not depend on this setup.

    Args:
        log_level: The minimum logging level (e.g., logging.INFO, logging.DEBUG).
        log_dir: The directory to store log files; None disables file logging.
        log_file: The name of the log file.
        console: Whether to also emit diagnostics on stderr.
        log_format: The format string for file log messages.
        date_format: The format string for timestamps in logs.
        max_bytes: Maximum size of a log file before rotation.
        backup_count: Number of backup log files to keep.
    """
    logger = logging.getLogger() # Get root logger
    if logger.hasHandlers():
        # Re-configuration replaces whatever was installed before
        for handler in logger.handlers[:]:
            logger.removeHandler(handler)
            handler.close()

    logger.setLevel(log_level)

    if console:
        rich_handler = RichHandler(
            console=Console(stderr=True),
            show_path=False,
            log_time_format="[%X]"
        )
        rich_handler.setLevel(log_level)
        logger.addHandler(rich_handler)

    if not log_dir:
        if not console:
            # Keep records from reaching logging's last-resort stderr handler
            logger.addHandler(logging.NullHandler())
        return

    try:
        ensure_dir_exists(log_dir)
        log_path = os.path.join(log_dir, log_file)
        file_handler = RotatingFileHandler(
            log_path,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding='utf-8'
        )
        file_handler.setFormatter(logging.Formatter(log_format, datefmt=date_format))
        logger.addHandler(file_handler)
        logger.info(f"Logging initialized. Log file: {log_path}")
    except Exception as e:
        # Fall back to console-only logging if the file handler fails
        if not console:
            logger.addHandler(logging.NullHandler())
        logger.error(f"Failed to set up file logging handler at {log_dir}/{log_file}: {e}")
