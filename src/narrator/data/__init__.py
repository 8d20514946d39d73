"""Data layer utilities for locating and reading game files."""

from .errors import DataError, DataLoadError
from .paths import get_repo_root, get_savegames_path, get_stories_path

__all__ = [
    "DataError",
    "DataLoadError",
    "get_repo_root",
    "get_savegames_path",
    "get_stories_path",
]
