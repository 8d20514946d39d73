"""Story definitions, run contexts and the per-story lifecycle."""
from __future__ import annotations

import inspect
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, List, Mapping, Protocol

from statemachine import State, StateMachine

from narrator.core.types import JsonDict
from narrator.domain.errors import StoryLoadError
from narrator.domain.ui import GameUi
from narrator.utils.logger import LogPort


class GameControls(Protocol):
    """Mutation surface a running story may use on the game."""

    def set_next_story(self, story_id: str) -> None:
        ...

    def queue_next_story(self, story_id: str) -> None:
        ...


@dataclass(slots=True)
class StoryContext:
    """Bundle handed to ``on_load``, ``select_condition`` and ``run``."""

    global_state: JsonDict
    local_state: JsonDict
    ui: GameUi | None
    game: GameControls
    logger: LogPort


SelectCondition = Callable[[StoryContext], bool]
RunCallback = Callable[[StoryContext], Awaitable[None] | None]
LoadCallback = Callable[[StoryContext], None]


@dataclass(frozen=True, slots=True)
class StoryDef:
    """Author-provided story definition."""

    id: str
    select_condition: SelectCondition
    run: RunCallback
    on_load: LoadCallback | None = None


_REQUIRED_CALLABLES = ("select_condition", "run")


def validate_story(raw: Mapping[str, Any]) -> List[str]:
    """Return the problems found in a mapping-based story definition."""
    errors: List[str] = []
    story_id = raw.get("id")
    if not isinstance(story_id, str) or not story_id:
        errors.append("Story id not provided")
    for key in _REQUIRED_CALLABLES:
        if key not in raw:
            errors.append(f"{key} not provided")
        elif not callable(raw[key]):
            errors.append(f"{key} must be callable")
    on_load = raw.get("on_load")
    if on_load is not None and not callable(on_load):
        errors.append("on_load must be callable if provided")
    return errors


def story_def_from_mapping(raw: Mapping[str, Any]) -> StoryDef:
    """Build a StoryDef from a plain mapping, raising StoryLoadError when invalid."""
    if not isinstance(raw, Mapping):
        raise StoryLoadError("Story definition must be a StoryDef or a mapping.")
    errors = validate_story(raw)
    if errors:
        raise StoryLoadError(errors)
    return StoryDef(
        id=raw["id"],
        select_condition=raw["select_condition"],
        run=raw["run"],
        on_load=raw.get("on_load"),
    )


def coerce_story_def(raw: object) -> StoryDef:
    """Accept either a StoryDef or a mapping describing one."""
    if isinstance(raw, StoryDef):
        errors = validate_story(
            {
                "id": raw.id,
                "select_condition": raw.select_condition,
                "run": raw.run,
                "on_load": raw.on_load,
            }
        )
        if errors:
            raise StoryLoadError(errors)
        return raw
    return story_def_from_mapping(raw)  # type: ignore[arg-type]


class StoryLifecycle(StateMachine):
    """Registered -> Ready -> Running -> Ready.

    Stories are never retired; one that should stop appearing simply returns
    False from its select condition.
    """

    registered = State("Registered", initial=True)
    ready = State("Ready")
    running = State("Running")

    activate = registered.to(ready)
    begin_run = ready.to(running)
    end_run = running.to(ready)

    def __init__(self, story_id: str) -> None:
        self.story_id = story_id
        super().__init__()

    @property
    def state_id(self) -> str:
        return self.current_state.id


class Story:
    """A registered story: immutable definition plus its source and lifecycle."""

    def __init__(self, definition: StoryDef, source: str) -> None:
        self.definition = definition
        self.source = source
        self.lifecycle = StoryLifecycle(definition.id)

    def __repr__(self) -> str:
        return f"Story(id={self.id!r}, source={self.source!r}, state={self.state!r})"

    @property
    def id(self) -> str:
        return self.definition.id

    @property
    def state(self) -> str:
        return self.lifecycle.state_id

    @property
    def is_ready(self) -> bool:
        return self.state == "ready"

    @property
    def is_running(self) -> bool:
        return self.state == "running"

    def load(self, ctx: StoryContext) -> None:
        """Run the ``on_load`` hook once; the story becomes Ready even if it raises."""
        try:
            if self.definition.on_load is not None:
                self.definition.on_load(ctx)
        finally:
            self.lifecycle.activate()

    def is_selectable(self, ctx: StoryContext) -> bool:
        return bool(self.definition.select_condition(ctx))

    async def run(self, ctx: StoryContext) -> None:
        """Hand control to the story until its beat is finished."""
        self.lifecycle.begin_run()
        try:
            result = self.definition.run(ctx)
            if inspect.isawaitable(result):
                await result
        finally:
            self.lifecycle.end_run()


__all__ = [
    "GameControls",
    "Story",
    "StoryContext",
    "StoryDef",
    "StoryLifecycle",
    "coerce_story_def",
    "story_def_from_mapping",
    "validate_story",
]
