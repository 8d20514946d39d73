from __future__ import annotations

import pytest

from narrator.core.rng import RNG
from narrator.data.paths import get_repo_root, get_stories_path
from narrator.domain.ui import SelectConfig, SelectOption
from narrator.presentation.auto_ui import AutoPlayUi
from narrator.services.game import Game

OPTIONS = [SelectOption(f"Option {n}", n) for n in range(1, 6)]


@pytest.mark.asyncio
async def test_auto_ui_picks_enabled_options_only() -> None:
    ui = AutoPlayUi(rng=RNG(3))
    options = [SelectOption("a", "a", enabled=False), SelectOption("b", "b")]

    picks = {await ui.user_select(options) for _ in range(20)}

    assert picks == {"b"}
    assert len(ui.selections) == 20


@pytest.mark.asyncio
async def test_auto_ui_random_sort_consumes_shared_rng() -> None:
    rng = RNG(11)
    ui = AutoPlayUi(rng=rng)

    await ui.user_select(OPTIONS, SelectConfig(random_sort=True))

    # four swaps for the shuffle plus one pick
    assert rng.get_status().used_count == 5


@pytest.mark.asyncio
async def test_auto_ui_time_limit_resolves_to_preselected() -> None:
    rng = RNG(11)
    ui = AutoPlayUi(rng=rng)

    value = await ui.user_select(OPTIONS, SelectConfig(prompt="Quick!", preselected=4, time_limit_ms=3000))

    assert value == 4
    assert ui.selections == [("Quick!", 4)]
    assert rng.get_status().used_count == 0


@pytest.mark.asyncio
async def test_auto_ui_rejects_empty_options() -> None:
    with pytest.raises(ValueError):
        await AutoPlayUi(rng=RNG(1)).user_select([])


async def _play_bundled(tmp_path, seed: int):
    saves = tmp_path / "save"
    saves.mkdir(exist_ok=True)
    game = Game(
        AutoPlayUi,
        stories_folders=[get_stories_path()],
        savegames_folder=saves,
        seed=seed,
        app_root=get_repo_root(),
    )
    game.init()
    await game.ui.start()
    played = []
    for _ in range(500):
        story = await game.run_cycle()
        if story is None:
            break
        played.append(story.id)
    return game, played


@pytest.mark.asyncio
async def test_bundled_stories_play_to_the_end(tmp_path) -> None:
    game, played = await _play_bundled(tmp_path, seed=2024)

    assert game.next_story() is None
    assert played.count("story-a") == 3
    assert game.global_state["showcase"] is None
    assert game.local_state(game.get_story("story-a"))["last_selection"] in (1, 2, 3)
    for index, story_id in enumerate(played):
        if story_id == "showcase/sequential-1":
            assert played[index + 1 : index + 3] == ["showcase/sequential-2", "showcase/sequential-3"]


@pytest.mark.asyncio
async def test_bundled_playthrough_replays_with_same_seed(tmp_path) -> None:
    (tmp_path / "one").mkdir()
    (tmp_path / "two").mkdir()

    first, played_first = await _play_bundled(tmp_path / "one", seed=99)
    second, played_second = await _play_bundled(tmp_path / "two", seed=99)

    assert played_first == played_second
    assert first.ui.selections == second.ui.selections
    assert first.rng.get_status() == second.rng.get_status()
