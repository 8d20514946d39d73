"""Utility helpers."""

from .logger import VERBOSE, LogPort, get_logger, setup_logging

__all__ = ["VERBOSE", "LogPort", "get_logger", "setup_logging"]
