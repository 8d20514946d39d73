"""Domain-level exceptions for story definitions and lookups."""
from __future__ import annotations

from typing import Iterable


class StoryLoadError(Exception):
    """Raised when a story file or definition cannot be registered."""

    def __init__(self, errors: Iterable[str] | str) -> None:
        self.errors = [errors] if isinstance(errors, str) else list(errors)
        super().__init__("\n".join(self.errors))


class DuplicateStoryError(StoryLoadError):
    """Raised when a story id or source is already registered."""


class UnknownStoryError(KeyError):
    """Raised when a story id is not registered."""

    def __init__(self, story_id: str) -> None:
        self.story_id = story_id
        super().__init__(story_id)

    def __str__(self) -> str:
        return f"Unknown story '{self.story_id}'"
