"""Game orchestrator: loads stories and drives the select-then-run cycle."""
from __future__ import annotations

from pathlib import Path
from typing import Dict, Iterable, List, Sequence

from narrator.core.rng import RNG
from narrator.core.types import JsonDict
from narrator.data import paths
from narrator.domain.errors import DuplicateStoryError, StoryLoadError
from narrator.domain.story import Story, StoryContext, StoryDef, coerce_story_def
from narrator.domain.ui import GameUi, UiFactory
from narrator.services.errors import GameConfigError, SaveLoadError
from narrator.services.query import CURRENT_STORY, list_keys, lookup, parse_query
from narrator.services.save_service import SaveGameStore, SaveService
from narrator.services.story_loader import STORY_EXT, iter_story_files, load_story_definition, source_for
from narrator.services.story_queue import StoryQueue
from narrator.services.story_registry import StoryRegistry
from narrator.utils.logger import LogPort, get_logger


class GameHandle:
    """Narrow view of the game given to running stories."""

    __slots__ = ("_game",)

    def __init__(self, game: "Game") -> None:
        self._game = game

    def set_next_story(self, story_id: str) -> None:
        self._game.set_next_story(story_id)

    def queue_next_story(self, story_id: str) -> None:
        self._game.queue_next_story(story_id)


class Game:
    """Owns the stories, the shared records and the RNG, and runs the loop.

    Only one story runs at a time: ``start`` awaits each ``run`` to completion
    before selecting again, so the global and local records have a single
    writer at any instant.
    """

    STORY_EXT = STORY_EXT

    def __init__(
        self,
        ui: UiFactory | None = None,
        *,
        stories_folders: Sequence[Path | str] | None = None,
        savegames_folder: Path | str | None = None,
        debug: bool = False,
        seed: int | None = None,
        discard: int = 0,
        app_root: Path | str | None = None,
        logger: LogPort | None = None,
        rng: RNG | None = None,
    ) -> None:
        errors = self.validate_options(stories_folders=stories_folders, savegames_folder=savegames_folder)
        if errors:
            raise GameConfigError(errors)

        self._stories_folders: List[Path] = (
            [Path(folder) for folder in stories_folders] if stories_folders else [paths.get_stories_path()]
        )
        self._savegames = SaveGameStore(paths.get_savegames_path(savegames_folder))
        self._app_root = Path(app_root) if app_root is not None else paths.get_repo_root()
        self._ui_factory = ui
        self._debug = debug
        self._logger = logger or get_logger("narrator")
        self._game_log = self._logger.child("game")
        self._story_log = self._logger.child("story")
        self.rng = rng or RNG(seed, discard=discard)

        self._ui: GameUi | None = None
        self._registry = StoryRegistry()
        self._queue = StoryQueue()
        self._save_service = SaveService()
        self._handle = GameHandle(self)
        self._global: JsonDict = {}
        self._local: Dict[str, JsonDict] = {}
        self._current_story: Story | None = None

    @staticmethod
    def validate_options(
        *,
        stories_folders: Sequence[Path | str] | None = None,
        savegames_folder: Path | str | None = None,
    ) -> List[str] | None:
        """Return every configuration problem, or None when the options are usable."""
        errors: List[str] = []
        for folder in stories_folders or []:
            if not Path(folder).is_dir():
                errors.append(f"Stories folder ({folder}) doesn't exist")
        if savegames_folder is not None and not Path(savegames_folder).is_dir():
            errors.append(f"Savegames folder ({savegames_folder}) doesn't exist")
        return errors or None

    # -- accessors -------------------------------------------------------

    @property
    def ui(self) -> GameUi | None:
        return self._ui

    @property
    def debug(self) -> bool:
        return self._debug

    @property
    def stories(self) -> List[Story]:
        return self._registry.all()

    @property
    def registry(self) -> StoryRegistry:
        return self._registry

    @property
    def queue(self) -> StoryQueue:
        return self._queue

    @property
    def current_story(self) -> Story | None:
        return self._current_story

    @property
    def global_state(self) -> JsonDict:
        return self._global

    @property
    def savegames_folder(self) -> Path:
        return self._savegames.base_dir

    def local_state(self, story: Story) -> JsonDict:
        """Return the local record of ``story``, creating it if missing."""
        return self._local.setdefault(story.source, {})

    def get_story(self, story_id: str) -> Story:
        return self._registry.get(story_id)

    # -- lifecycle -------------------------------------------------------

    def init(self) -> None:
        """Build the UI and load the stories from the configured folders."""
        if self._ui_factory is not None:
            self._ui = self._ui_factory(rng=self.rng, debug=self._debug)
        self.load_stories(self._stories_folders)

    async def start(self) -> None:
        """Run selection cycles until no story is eligible and the queue is empty."""
        self._game_log.info("Game starting")
        if self._ui is not None:
            await self._ui.start()

        story = self.next_story()
        while story is not None:
            await self.run_story(story)
            story = self.next_story()

        self._game_log.info("Game ending")
        if self._ui is not None:
            await self._ui.end()

    def quit(self) -> None:
        raise SystemExit(0)

    # -- loading ---------------------------------------------------------

    def load_stories(self, folders: Iterable[Path | str]) -> List[Story]:
        """Load every story file under ``folders``; broken files are logged and skipped."""
        loaded: List[Story] = []
        for path in iter_story_files(folders):
            source = source_for(path, self._app_root)
            try:
                definition = load_story_definition(path, source)
            except StoryLoadError as exc:
                self._story_log.warn(str(exc))
                continue
            story = self.register_story(definition, source)
            if story is not None:
                loaded.append(story)
        return loaded

    def register_story(self, definition: StoryDef | object, source: str | None = None) -> Story | None:
        """Register one definition, create its local record and run ``on_load``.

        Returns None (after logging) when the definition is invalid or its id
        is already taken.
        """
        try:
            story_def = coerce_story_def(definition)
            story = self._registry.register(story_def, source or story_def.id)
        except DuplicateStoryError as exc:
            self._story_log.error(str(exc))
            return None
        except StoryLoadError as exc:
            self._story_log.warn(str(exc))
            return None

        self._local[story.source] = {}
        try:
            story.load(self._context_for(story))
        except Exception as exc:
            self._story_log.error(f"Error in on_load of {story.id}: {exc}")
        self._story_log.info(f"Story loaded: {story.id}")
        return story

    # -- selection -------------------------------------------------------

    def select_story(self) -> Story | None:
        """Pick uniformly among the stories whose select condition holds."""
        selectable = [story for story in self._registry if story.is_selectable(self._context_for(story))]
        if not selectable:
            return None
        return self.rng.pick(selectable)

    def next_story(self) -> Story | None:
        """Return the queue front if any, else a randomly selected story."""
        queued = self._queue.pop()
        if queued is not None:
            return queued
        return self.select_story()

    async def run_story(self, story: Story) -> None:
        """Give ``story`` control until its run returns."""
        self._story_log.info(f"Running story: {story.id}")
        self._current_story = story
        try:
            await story.run(self._context_for(story))
        finally:
            self._current_story = None

    async def run_cycle(self) -> Story | None:
        """Run a single selection cycle and return the story that ran."""
        story = self.next_story()
        if story is not None:
            await self.run_story(story)
        return story

    def set_next_story(self, story_id: str) -> None:
        """Make ``story_id`` the only queued story."""
        self._queue.set(self._registry.get(story_id))

    def queue_next_story(self, story_id: str) -> None:
        """Append ``story_id`` to the queued stories."""
        self._queue.push(self._registry.get(story_id))

    def _context_for(self, story: Story) -> StoryContext:
        return StoryContext(
            global_state=self._global,
            local_state=self.local_state(story),
            ui=self._ui,
            game=self._handle,
            logger=self._story_log.child(story.id),
        )

    # -- persistence -----------------------------------------------------

    def save_game(self, file: str) -> Path:
        """Save the current records into ``file`` inside the savegames folder."""
        try:
            payload = self._save_service.serialize(
                current_story_source=self._current_story.source if self._current_story else None,
                local=self._local,
                global_state=self._global,
                rng=self.rng,
            )
            path = self._savegames.write(file, payload, indent=2 if self._debug else None)
        except SaveLoadError as exc:
            self._game_log.error(f"Error while saving the game into {file} ({exc})")
            raise
        self._game_log.info(f"Game saved into {file}")
        return path

    def load_game(self, file: str) -> None:
        """Replace the global and local records with the contents of ``file``.

        ``on_load`` hooks are not run again, the queue and the RNG are left as
        they are, and the loaded records are not checked against what the
        current stories expect.
        """
        try:
            data = self._save_service.deserialize(self._savegames.read(file))
        except SaveLoadError as exc:
            self._game_log.error(f"Error while loading the game from {file} ({exc})")
            raise

        self._global = data.global_state
        self._local = data.local
        if data.current_story_source:
            story = self._registry.find_by_source(data.current_story_source)
            if story is None:
                self._game_log.warn(f"Saved story {data.current_story_source} is not loaded")
            self._current_story = story
        self._game_log.info(f"Game loaded from {file}")

    def get_save_game_list(self) -> List[str]:
        return self._savegames.list_files()

    # -- queries ---------------------------------------------------------

    def get_value(self, path: str) -> str | None:
        """Resolve a dotted query path; None means the value is not defined."""
        query = parse_query(path)
        if query.namespace == CURRENT_STORY:
            return self._current_story.id if self._current_story else None
        if query.namespace == "global":
            return lookup(self._global, query.keys)
        record = self._local.get(self._current_story.source) if self._current_story else None
        return lookup(record, query.keys)

    def get_value_list(self, namespace: str) -> List[str]:
        """Return the keys available under ``global`` or ``local``."""
        if namespace == "global":
            return list_keys(self._global)
        if namespace == "local" and self._current_story is not None:
            return list_keys(self._local.get(self._current_story.source))
        return []
