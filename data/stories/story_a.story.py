"""A story that offers three options and retires itself after three runs."""
from narrator import SelectConfig, SelectOption, StoryDef

RUN_MAX_TIMES = 3


def on_load(ctx):
    ctx.local_state["run"] = 0


def select_condition(ctx):
    return ctx.local_state.get("run", 0) < RUN_MAX_TIMES


async def run(ctx):
    ctx.local_state["run"] = ctx.local_state.get("run", 0) + 1
    ctx.local_state["last_selection"] = await ctx.ui.user_select(
        [
            SelectOption("Option 1", 1),
            SelectOption("Option 2", 2),
            SelectOption("Option 3", 3),
        ],
        SelectConfig(prompt="User select for Story A:"),
    )


story = StoryDef(id="story-a", select_condition=select_condition, run=run, on_load=on_load)
