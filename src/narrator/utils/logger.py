"""
Centralized logging configuration for narrator

Levels, from most to least severe:
- ERROR: errors affecting the operation of the game
- WARNING: recoverable errors or unexpected things (bad story files, ...)
- INFO: processes taking place (start, stop, save, load) to follow the game workflow
- VERBOSE: detailed info, not important
- DEBUG: debug messages

Usage:
    from narrator.utils.logger import get_logger, setup_logging

    setup_logging(level="INFO")
    logger = get_logger("narrator.game")
    logger.info("Game starting")
    logger.verbose("user selects: 2")
"""

import logging
import sys
from pathlib import Path
from typing import Any, MutableMapping, Optional

from narrator.core.types import LogLevel

VERBOSE = 15
logging.addLevelName(VERBOSE, "VERBOSE")

# Color codes for terminal output
COLORS = {
    'DEBUG': '\033[35m',      # Magenta
    'VERBOSE': '\033[36m',    # Cyan
    'INFO': '\033[32m',       # Green
    'WARNING': '\033[33m',    # Yellow
    'ERROR': '\033[31m',      # Red
    'CRITICAL': '\033[31m',   # Red
    'RESET': '\033[0m'
}


class ColoredFormatter(logging.Formatter):
    """Formatter that adds colors to level and logger names"""

    def format(self, record):
        levelname = record.levelname
        if levelname in COLORS:
            record.levelname = f"{COLORS[levelname]}{levelname}{COLORS['RESET']}"
        record.name = f"\033[94m{record.name}\033[0m"
        return super().format(record)


class LogPort(logging.LoggerAdapter):
    """Logging port handed to the game and to running stories.

    Exposes ``error/warn/info/verbose/debug`` on top of a namespaced logger.
    """

    def __init__(self, logger: logging.Logger, extra: Optional[MutableMapping[str, Any]] = None):
        super().__init__(logger, extra or {})

    @property
    def name(self) -> str:
        return self.logger.name

    def warn(self, msg, *args, **kwargs):
        self.warning(msg, *args, **kwargs)

    def verbose(self, msg, *args, **kwargs):
        self.log(VERBOSE, msg, *args, **kwargs)

    def child(self, suffix: str) -> "LogPort":
        """Return a port for the ``<name>.<suffix>`` namespace."""
        return LogPort(self.logger.getChild(suffix), dict(self.extra or {}))


def setup_logging(
    level: LogLevel = "INFO",
    log_file: Optional[str] = None,
    enable_colors: bool = True,
    include_timestamp: bool = True
) -> None:
    """
    Setup logging configuration for the application

    Args:
        level: Logging level (DEBUG, VERBOSE, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional path to log file. If provided, logs will be written to file
        enable_colors: Whether to enable colored output for console
        include_timestamp: Whether to include timestamp in log messages
    """
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO

    if include_timestamp:
        fmt = "%(asctime)s [%(levelname)s | %(name)s] %(message)s"
        datefmt = "%Y-%m-%d %H:%M:%S"
    else:
        fmt = "[%(levelname)s | %(name)s] %(message)s"
        datefmt = None

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(numeric_level)

    if enable_colors and sys.stdout.isatty():
        console_formatter = ColoredFormatter(fmt, datefmt=datefmt)
    else:
        console_formatter = logging.Formatter(fmt, datefmt=datefmt)

    console_handler.setFormatter(console_formatter)

    root_logger = logging.getLogger("narrator")
    root_logger.setLevel(numeric_level)
    root_logger.handlers = []
    root_logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(logging.Formatter(fmt, datefmt=datefmt))
        root_logger.addHandler(file_handler)


def get_logger(name: str) -> LogPort:
    """
    Get a logging port for a namespace

    Args:
        name: Logger namespace, e.g. "narrator.game"

    Returns:
        LogPort wrapping the namespaced logger
    """
    return LogPort(logging.getLogger(name))
