"""Narrative orchestration engine for terminal story games."""

from narrator.core.rng import RNG, RNGStatus, WeightedEntry
from narrator.domain import SelectConfig, SelectOption, Story, StoryContext, StoryDef
from narrator.services import Game

__all__ = [
    "Game",
    "RNG",
    "RNGStatus",
    "SelectConfig",
    "SelectOption",
    "Story",
    "StoryContext",
    "StoryDef",
    "WeightedEntry",
]

__version__ = "0.1.0"
