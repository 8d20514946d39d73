"""Fifteen options shuffled through the shared RNG."""
from narrator import SelectConfig, SelectOption

STORY_ID = "showcase/user-select-random"
INDEX_ID = "showcase/index"


def on_load(ctx):
    ctx.global_state.setdefault("showcase_list", []).append(STORY_ID)


def select_condition(ctx):
    return ctx.global_state.get("showcase") == STORY_ID


async def run(ctx):
    options = [SelectOption(f"Option {n}", f"Option {n}") for n in range(1, 16)]
    choice = await ctx.ui.user_select(options, SelectConfig(random_sort=True))
    ctx.logger.info(f"Picked {choice}")
    ctx.global_state["showcase"] = INDEX_ID


story = {
    "id": STORY_ID,
    "on_load": on_load,
    "select_condition": select_condition,
    "run": run,
}
