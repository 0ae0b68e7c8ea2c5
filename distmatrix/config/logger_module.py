"""
Logging utilities for the Distance Matrix client.

Every module of the client logs through the "distmatrix" package logger,
either via the helpers below or via logging.getLogger(__name__) for modules
under the package. The library attaches no handlers on its own; records
propagate to whatever the application configures. Scripts without their
own logging setup can opt in with configure_logging().
"""

import logging
from pathlib import Path
from typing import Optional


PACKAGE_LOGGER = "distmatrix"

# Flag to track if configure_logging has run to ensure idempotency
_logging_configured = False


def get_logger() -> logging.Logger:
    """Return the package logger."""
    return logging.getLogger(PACKAGE_LOGGER)


def configure_logging(log_level: str = "INFO", log_file: Optional[str] = None) -> None:
    """
    Attach a console handler, and optionally a file handler, to the package logger.

    Only the "distmatrix" logger is touched; the root logger and other
    libraries' loggers are left alone. Calling it again is a no-op.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Path to a log file receiving DEBUG and above (no file if None)
    """
    global _logging_configured

    if _logging_configured:
        return

    logger = get_logger()
    logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.INFO)
    console_handler.setFormatter(logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    ))
    logger.addHandler(console_handler)

    if log_file is not None:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_file, mode='a', encoding='utf-8')
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        ))
        logger.addHandler(file_handler)

    _logging_configured = True

    logger.info(f"Logging configured with level {log_level}, file: {log_file}")


def log_debug(message: str) -> None:
    """Log a debug message (per-call detail such as URLs and group sizes)."""
    get_logger().debug(message)


def log_info(message: str) -> None:
    """
    Log an info message.

    Args:
        message: Message to log
    """
    get_logger().info(message)


def log_warning(message: str) -> None:
    get_logger().warning(message)


def log_error(message: str) -> None:
    """
    Log an error message.

    Args:
        message: Message to log
    """
    get_logger().error(message)
