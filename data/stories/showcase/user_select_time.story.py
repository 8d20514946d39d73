"""Timed selection: Option 2 is picked if the player waits three seconds."""
from narrator import SelectConfig, SelectOption

STORY_ID = "showcase/user-select-time"
INDEX_ID = "showcase/index"


def on_load(ctx):
    ctx.global_state.setdefault("showcase_list", []).append(STORY_ID)


def select_condition(ctx):
    return ctx.global_state.get("showcase") == STORY_ID


async def run(ctx):
    await ctx.ui.user_select(
        [SelectOption(f"Option {n}", f"Option {n}") for n in (1, 2, 3)],
        SelectConfig(prompt="userSelect 3 seconds limit:", preselected="Option 2", time_limit_ms=3000),
    )
    ctx.global_state["showcase"] = INDEX_ID


story = {
    "id": STORY_ID,
    "on_load": on_load,
    "select_condition": select_condition,
    "run": run,
}
