"""Service-layer exceptions."""
from __future__ import annotations

from typing import Iterable

from narrator.domain.errors import DuplicateStoryError, StoryLoadError, UnknownStoryError


class GameConfigError(Exception):
    """Raised when the game is constructed with invalid options."""

    def __init__(self, errors: Iterable[str]) -> None:
        self.errors = list(errors)
        super().__init__("\n".join(self.errors))


class SaveLoadError(Exception):
    """Raised when save or load operations fail."""


class QuerySyntaxError(ValueError):
    """Raised when a query path does not start with a known namespace."""


__all__ = [
    "DuplicateStoryError",
    "GameConfigError",
    "QuerySyntaxError",
    "SaveLoadError",
    "StoryLoadError",
    "UnknownStoryError",
]
