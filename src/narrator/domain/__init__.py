"""Domain models: stories, their lifecycle and the UI capability."""

from .errors import DuplicateStoryError, StoryLoadError, UnknownStoryError
from .story import GameControls, Story, StoryContext, StoryDef, StoryLifecycle
from .ui import GameUi, SelectConfig, SelectOption

__all__ = [
    "DuplicateStoryError",
    "GameControls",
    "GameUi",
    "SelectConfig",
    "SelectOption",
    "Story",
    "StoryContext",
    "StoryDef",
    "StoryLifecycle",
    "StoryLoadError",
    "UnknownStoryError",
]
