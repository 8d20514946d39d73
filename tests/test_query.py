from __future__ import annotations

import pytest

from narrator.services.errors import QuerySyntaxError
from narrator.services.query import Query, list_keys, lookup, parse_query
from tests.helpers.story_fakes import make_game, make_story


def test_parse_query() -> None:
    assert parse_query("currentStory") == Query(namespace="currentStory")
    assert parse_query(" global.gold ") == Query(namespace="global", keys=("gold",))
    assert parse_query("local.bag.0.name") == Query(namespace="local", keys=("bag", "0", "name"))


@pytest.mark.parametrize("path", ["", "other.key", "global", "global.", "local.a..b", "currentStory.x"])
def test_parse_query_rejects_bad_paths(path: str) -> None:
    with pytest.raises(QuerySyntaxError):
        parse_query(path)


def test_lookup_walks_mappings_and_lists() -> None:
    record = {"gold": 3, "bag": [{"name": "rope"}], "flag": False, "nothing": None}

    assert lookup(record, ("gold",)) == "3"
    assert lookup(record, ("bag", "0", "name")) == '"rope"'
    assert lookup(record, ("flag",)) == "false"
    assert lookup(record, ("nothing",)) == "null"
    assert lookup(record, ("bag", "4")) is None
    assert lookup(record, ("gold", "x")) is None
    assert lookup(None, ("gold",)) is None


def test_list_keys() -> None:
    assert list_keys({"b": 1, "a": 2}) == ["a", "b"]
    assert list_keys(None) == []


@pytest.mark.asyncio
async def test_game_queries_follow_the_running_story(tmp_path) -> None:
    game = make_game(tmp_path)
    answers = {}

    def run(ctx) -> None:
        ctx.local_state["mood"] = "happy"
        ctx.global_state["day"] = 2
        answers["current"] = game.get_value("currentStory")
        answers["local"] = game.get_value("local.mood")
        answers["global"] = game.get_value("global.day")
        answers["keys"] = game.get_value_list("local")

    game.register_story(make_story("A", condition=lambda ctx: "mood" not in ctx.local_state, run=run))
    await game.start()

    assert answers == {"current": "A", "local": '"happy"', "global": "2", "keys": ["mood"]}
    assert game.get_value("currentStory") is None
    assert game.get_value("local.mood") is None
    assert game.get_value("global.day") == "2"
    assert game.get_value("global.missing") is None
    assert game.get_value_list("global") == ["day"]
    assert game.get_value_list("local") == []
