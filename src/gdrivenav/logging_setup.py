"""Process-wide logging configuration for gdrivenav."""

from __future__ import annotations

import logging
import os

FILE_FORMAT: str = "%(asctime)s [%(levelname)s] %(name)s - %(message)s"
CONSOLE_FORMAT: str = "%(levelname)s %(name)s - %(message)s"
DATE_FORMAT: str = "%Y-%m-%d %H:%M:%S"


def setup_logging(log_file: str, level: str = "INFO", *, console: bool = False) -> None:
    """
    Configure the root logger.

    Existing handlers are removed so repeated calls (tests, re-runs) don't
    duplicate output. Log lines are appended to log_file; if it cannot be
    opened, a console handler reports the problem instead.
    """
    log_level = getattr(logging, level.upper(), None)
    if not isinstance(log_level, int):
        log_level = logging.INFO

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        handler.close()

    if console:
        _add_console_handler(root_logger, log_level)

    log_dir = os.path.dirname(os.path.abspath(log_file))
    try:
        os.makedirs(log_dir, exist_ok=True)
        file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
    except OSError as e:
        if not console:
            _add_console_handler(root_logger, log_level)
        root_logger.error("Failed to open log file %s: %s. File logging disabled.", log_file, e)
        return

    file_handler.setLevel(log_level)
    file_handler.setFormatter(logging.Formatter(fmt=FILE_FORMAT, datefmt=DATE_FORMAT))
    root_logger.addHandler(file_handler)

    # requests/urllib3 are chatty at DEBUG.
    logging.getLogger("urllib3").setLevel(max(log_level, logging.INFO))


def _add_console_handler(root_logger: logging.Logger, log_level: int) -> None:
    console_handler = logging.StreamHandler()
    console_handler.setLevel(log_level)
    console_handler.setFormatter(logging.Formatter(fmt=CONSOLE_FORMAT))
    root_logger.addHandler(console_handler)
