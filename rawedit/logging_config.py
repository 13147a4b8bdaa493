"""
Logging Configuration
Sets up the package logger. The terminal is in raw mode while the editor
runs, so log records go to a file, never to stdout or stderr.
"""
import logging
import sys
from pathlib import Path
from typing import Optional, Union

import platformdirs

LOG_FILENAME = "rawedit.log"


def default_log_path() -> Path:
    return Path(platformdirs.user_log_dir("rawedit")) / LOG_FILENAME


def setup_logging(level: Union[int, str] = logging.WARNING,
                  log_file: Optional[str] = None) -> logging.Logger:
    """
    Configures the logger for the 'rawedit' namespace.

    Args:
        level: Logging level, as a number or a name such as "DEBUG".
        log_file: Path to write logs to. Defaults to the user log directory.
    """
    logger = logging.getLogger("rawedit")
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING
    logger.setLevel(level)
    logger.propagate = False

    # Avoid duplicate handlers when called more than once
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    path = Path(log_file) if log_file else default_log_path()
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(path, mode='a', encoding='utf-8')
    except OSError as e:
        print(f"[!] Could not open log file {path}: {e}", file=sys.stderr)
        logger.addHandler(logging.NullHandler())
        return logger

    # Format: Time - Module - Level - Message
    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )
    file_handler.setLevel(level)
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)

    logger.debug("Logging initialized.")
    return logger
