"""Service layer exports."""

from .errors import (
    DuplicateStoryError,
    GameConfigError,
    QuerySyntaxError,
    SaveLoadError,
    StoryLoadError,
    UnknownStoryError,
)
from .game import Game, GameHandle
from .save_service import SaveData, SaveGameStore, SaveService
from .story_queue import StoryQueue
from .story_registry import StoryRegistry

__all__ = [
    "DuplicateStoryError",
    "Game",
    "GameConfigError",
    "GameHandle",
    "QuerySyntaxError",
    "SaveData",
    "SaveGameStore",
    "SaveLoadError",
    "SaveService",
    "StoryLoadError",
    "StoryQueue",
    "StoryRegistry",
    "UnknownStoryError",
]
