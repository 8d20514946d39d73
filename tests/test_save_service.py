from __future__ import annotations

import json
import logging

import pytest

from narrator.core.rng import RNG
from narrator.presentation.cli.console import DebugConsole
from narrator.services.errors import SaveLoadError
from narrator.services.save_service import SaveGameStore, SaveService
from tests.helpers.story_fakes import make_game, make_story


def _game_with_progress(tmp_path, *, debug: bool = False):
    game = make_game(tmp_path, debug=debug)
    game.register_story(make_story("a"), "stories/a.story.py")
    game.register_story(make_story("b"), "stories/b.story.py")
    game.global_state["gold"] = 12
    game.local_state(game.get_story("a"))["visits"] = 3
    return game


def test_serialize_shape() -> None:
    payload = SaveService().serialize(
        current_story_source="stories/a.story.py",
        local={"stories/a.story.py": {"n": 1}},
        global_state={"g": True},
        rng=RNG(5, discard=2),
    )

    assert payload["currentStory"] == "stories/a.story.py"
    assert payload["local"] == {"stories/a.story.py": {"n": 1}}
    assert payload["global"] == {"g": True}
    assert payload["metadata"]["rng"] == {"seed": 5, "usedCount": 2}
    assert payload["metadata"]["storyCount"] == 1
    assert "savedAt" in payload["metadata"]


@pytest.mark.parametrize(
    "payload",
    [
        [],
        {"global": {}},
        {"global": [], "local": {}},
        {"global": {}, "local": {"a": 3}},
        {"global": {}, "local": {}, "currentStory": 4},
    ],
)
def test_deserialize_rejects_malformed_payloads(payload) -> None:
    with pytest.raises(SaveLoadError):
        SaveService().deserialize(payload)


def test_store_rejects_paths(tmp_path) -> None:
    store = SaveGameStore(tmp_path)

    for name in ("", "../escape.json", "nested/file.json"):
        with pytest.raises(SaveLoadError):
            store.path_for(name)


def test_save_and_load_round_trip(tmp_path) -> None:
    game = _game_with_progress(tmp_path)
    path = game.save_game("slot1.json")

    game.global_state["gold"] = 0
    game.local_state(game.get_story("a"))["visits"] = 99
    game.load_game("slot1.json")

    assert path == tmp_path / "save" / "slot1.json"
    assert game.global_state == {"gold": 12}
    assert game.local_state(game.get_story("a")) == {"visits": 3}
    assert game.local_state(game.get_story("b")) == {}


@pytest.mark.asyncio
async def test_save_during_run_keeps_current_story_source(tmp_path) -> None:
    game = make_game(tmp_path)

    def run(ctx) -> None:
        ctx.local_state["saved"] = True
        game.save_game("mid.json")

    game.register_story(
        make_story("saver", condition=lambda ctx: not ctx.local_state.get("saved"), run=run),
        "stories/saver.story.py",
    )
    await game.start()
    saved = json.loads((tmp_path / "save" / "mid.json").read_text(encoding="utf-8"))

    game.load_game("mid.json")

    assert saved["currentStory"] == "stories/saver.story.py"
    assert game.current_story.source == "stories/saver.story.py"
    assert game.local_state(game.current_story) == {"saved": True}


def test_store_creates_missing_directory(tmp_path) -> None:
    store = SaveGameStore(tmp_path / "fresh" / "saves")
    assert store.list_files() == []

    store.write("slot.json", {"global": {}, "local": {}})

    assert (tmp_path / "fresh" / "saves" / "slot.json").is_file()
    assert store.exists("slot.json")
    assert store.list_files() == ["slot.json"]


def test_debug_saves_are_indented(tmp_path) -> None:
    (tmp_path / "compact").mkdir()
    _game_with_progress(tmp_path, debug=True).save_game("pretty.json")
    _game_with_progress(tmp_path / "compact").save_game("compact.json")

    pretty = (tmp_path / "save" / "pretty.json").read_text(encoding="utf-8")
    compact = (tmp_path / "compact" / "save" / "compact.json").read_text(encoding="utf-8")

    assert "\n  " in pretty
    assert "\n" not in compact.strip()
    assert json.loads(pretty)["global"] == json.loads(compact)["global"]


def test_malformed_file_leaves_state_untouched(tmp_path) -> None:
    game = _game_with_progress(tmp_path)
    (tmp_path / "save" / "broken.json").write_text("{not json", encoding="utf-8")
    (tmp_path / "save" / "partial.json").write_text(json.dumps({"global": {}}), encoding="utf-8")

    for name in ("broken.json", "partial.json"):
        with pytest.raises(SaveLoadError):
            game.load_game(name)

    assert game.global_state == {"gold": 12}
    assert game.local_state(game.get_story("a")) == {"visits": 3}


def test_missing_file_raises(tmp_path) -> None:
    with pytest.raises(SaveLoadError):
        make_game(tmp_path).load_game("nope.json")


def test_load_does_not_rerun_on_load(tmp_path) -> None:
    calls = []
    game = make_game(tmp_path)
    game.register_story(make_story("a", on_load=lambda ctx: calls.append("a")))
    game.save_game("slot.json")

    game.load_game("slot.json")

    assert calls == ["a"]


def test_load_replaces_local_records_wholesale(tmp_path) -> None:
    game = make_game(tmp_path)
    game.save_game("empty.json")
    story = game.register_story(make_story("late", on_load=lambda ctx: ctx.local_state.update(ready=True)))

    game.load_game("empty.json")

    assert game.local_state(story) == {}


def test_current_story_is_resolved_by_source(tmp_path) -> None:
    game = _game_with_progress(tmp_path)
    payload = {"currentStory": "stories/b.story.py", "global": {}, "local": {}}
    (tmp_path / "save" / "mid.json").write_text(json.dumps(payload), encoding="utf-8")
    (tmp_path / "save" / "gone.json").write_text(
        json.dumps({**payload, "currentStory": "stories/removed.story.py"}), encoding="utf-8"
    )

    game.load_game("mid.json")
    assert game.current_story.id == "b"

    game.load_game("gone.json")
    assert game.current_story is None


def test_save_game_list(tmp_path) -> None:
    game = _game_with_progress(tmp_path)
    game.save_game("b.json")
    game.save_game("a.json")

    assert game.get_save_game_list() == ["a.json", "b.json"]


def test_non_utf8_save_is_rejected_and_logged(tmp_path, caplog) -> None:
    game = _game_with_progress(tmp_path)
    (tmp_path / "save" / "garbled.sav").write_bytes(b'{"global": "\xff\xfe"}')

    with caplog.at_level(logging.ERROR, logger="narrator"):
        with pytest.raises(SaveLoadError) as excinfo:
            game.load_game("garbled.sav")

    assert "UTF-8" in str(excinfo.value)
    assert any(
        "Error while loading the game from garbled.sav" in record.getMessage() for record in caplog.records
    )
    assert game.global_state == {"gold": 12}
    assert game.local_state(game.get_story("a")) == {"visits": 3}


def test_console_load_of_non_utf8_save_reports_error(tmp_path) -> None:
    messages = []
    game = _game_with_progress(tmp_path)
    (tmp_path / "save" / "garbled.sav").write_bytes(b"\xff\xfe")

    DebugConsole(game, messages.append).process("/load garbled.sav")

    assert len(messages) == 1
    assert messages[0].startswith("Error: ")
    assert game.global_state == {"gold": 12}
