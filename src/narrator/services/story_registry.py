"""Registry of loaded stories indexed by id and by source."""
from __future__ import annotations

from typing import Dict, Iterator, List

from narrator.domain.errors import DuplicateStoryError, UnknownStoryError
from narrator.domain.story import Story, StoryDef


class StoryRegistry:
    """Keeps every registered story; stories are never removed."""

    def __init__(self) -> None:
        self._by_id: Dict[str, Story] = {}
        self._by_source: Dict[str, Story] = {}
        self._ordered: List[Story] = []

    def register(self, definition: StoryDef, source: str) -> Story:
        """Create and index a Story, rejecting duplicate ids and sources."""
        if definition.id in self._by_id:
            existing = self._by_id[definition.id]
            raise DuplicateStoryError(
                f"Duplicated story id '{definition.id}' in {source} (already loaded from {existing.source})"
            )
        if source in self._by_source:
            raise DuplicateStoryError(f"Story source '{source}' is already registered")
        story = Story(definition, source)
        self._by_id[story.id] = story
        self._by_source[source] = story
        self._ordered.append(story)
        return story

    def get(self, story_id: str) -> Story:
        """Return a story by id."""
        try:
            return self._by_id[story_id]
        except KeyError as exc:
            raise UnknownStoryError(story_id) from exc

    def find_by_source(self, source: str) -> Story | None:
        return self._by_source.get(source)

    def all(self) -> List[Story]:
        """Return all stories in registration order."""
        return list(self._ordered)

    def ids(self) -> List[str]:
        return [story.id for story in self._ordered]

    def __contains__(self, story_id: object) -> bool:
        return story_id in self._by_id

    def __iter__(self) -> Iterator[Story]:
        return iter(self.all())

    def __len__(self) -> int:
        return len(self._ordered)
