"""Explicit FIFO of stories that pre-empts random selection."""
from __future__ import annotations

from collections import deque
from typing import Deque, Iterator

from narrator.domain.story import Story


class StoryQueue:
    """Narrative overrides consumed one per selection cycle."""

    def __init__(self) -> None:
        self._entries: Deque[Story] = deque()

    def set(self, story: Story) -> None:
        """Drop anything planned and make ``story`` the only upcoming entry."""
        self._entries.clear()
        self._entries.append(story)

    def push(self, story: Story) -> None:
        """Append ``story`` after the already planned entries."""
        self._entries.append(story)

    def pop(self) -> Story | None:
        if not self._entries:
            return None
        return self._entries.popleft()

    def peek(self) -> Story | None:
        return self._entries[0] if self._entries else None

    def clear(self) -> None:
        self._entries.clear()

    def ids(self) -> list[str]:
        return [story.id for story in self._entries]

    def __iter__(self) -> Iterator[Story]:
        return iter(list(self._entries))

    def __len__(self) -> int:
        return len(self._entries)

    def __bool__(self) -> bool:
        return bool(self._entries)
