"""
Utility functions for media-flattener.
"""

import logging
import sys
from pathlib import Path
from typing import Optional, Union

logger = logging.getLogger(__name__)


def setup_logging(
    level: Union[str, int] = logging.INFO,
    log_file: Optional[Union[str, Path]] = None,
    format_string: Optional[str] = None,
) -> None:
    """Set up logging configuration for the application.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional path to log file (logs to console only if None)
        format_string: Custom format string for log messages

    Example:
        >>> setup_logging('DEBUG', 'flatten.log')
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper())

    if format_string is None:
        format_string = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Remove existing handlers to avoid duplicates
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    formatter = logging.Formatter(format_string)

    # stderr keeps log lines apart from the progress bar output
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_path)
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    # Set level for third-party libraries to reduce noise
    logging.getLogger('PIL').setLevel(logging.WARNING)


def ensure_directory(path: Path) -> bool:
    """
    Create a directory (and parents) if it does not exist.

    Returns:
        True if the directory was created, False if it already existed

    Raises:
        NotADirectoryError: If the path exists and is not a directory
    """
    if path.exists():
        if not path.is_dir():
            raise NotADirectoryError(f"Not a directory: {path}")
        return False

    path.mkdir(parents=True, exist_ok=True)
    logger.info("Created output folder %s", path)
    return True
