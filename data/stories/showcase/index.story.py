"""Menu that lets the player jump to any showcase story."""
from narrator import SelectConfig, SelectOption

INDEX_ID = "showcase/index"


def on_load(ctx):
    ctx.global_state["showcase"] = INDEX_ID
    ctx.global_state.setdefault("showcase_list", [])


def select_condition(ctx):
    return ctx.global_state.get("showcase") == INDEX_ID


async def run(ctx):
    options = [SelectOption(story_id, story_id) for story_id in sorted(ctx.global_state["showcase_list"])]
    options.append(SelectOption("Leave the showcase", None))
    ctx.global_state["showcase"] = await ctx.ui.user_select(options, SelectConfig(prompt="Showcase:"))


story = {
    "id": INDEX_ID,
    "on_load": on_load,
    "select_condition": select_condition,
    "run": run,
}
