"""
Centralized logging configuration.

Logs go to the console (stderr) and to a daily log file.
Standard output is reserved for the assistant's replies, so the
console handler writes to stderr and defaults to WARNING.
"""
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional, Union


# Module-level flag to prevent duplicate handler registration
_logging_configured = False


def setup_logging(
    log_level: str = "WARNING",
    log_dir: Optional[Union[str, Path]] = None
) -> logging.Logger:
    """
    Configure application-wide logging.

    This function should be called once at startup.
    It configures console logging and, when the log directory is
    writable, a daily log file with the same format.

    Args:
        log_level: Console logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_dir: Directory for log files. Defaults to 'logs/' in the working directory.

    Returns:
        Configured root logger instance
    """
    global _logging_configured

    if _logging_configured:
        return logging.getLogger()

    # Format: timestamp | level | module:line | message
    formatter = logging.Formatter(
        fmt="%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    console_handler.setLevel(getattr(logging, log_level.upper(), logging.WARNING))

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    root_logger.addHandler(console_handler)

    log_dir = Path(log_dir) if log_dir is not None else Path.cwd() / "logs"
    log_file = log_dir / f"todochat_{datetime.now().strftime('%Y%m%d')}.log"
    try:
        log_dir.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
    except OSError as e:
        root_logger.warning(f"File logging disabled, cannot write to {log_dir}: {e}")
        log_file = None
    else:
        # File handler - daily log files, captures everything
        file_handler.setFormatter(formatter)
        file_handler.setLevel(logging.DEBUG)
        root_logger.addHandler(file_handler)

    # These libraries log excessively at DEBUG level
    for noisy in ("httpx", "httpcore", "urllib3", "grpc", "sqlalchemy.engine"):
        logging.getLogger(noisy).setLevel(logging.WARNING)

    _logging_configured = True

    root_logger.debug(f"Logging configured: level={log_level}, file={log_file}")

    return root_logger


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger for a specific module.

    Args:
        name: Logger name, typically __name__ of the calling module

    Returns:
        Logger instance for the specified name
    """
    return logging.getLogger(name)
