"""Sequential beat 2: stories 2 and 3 are queued by story 1."""
STORY_ID = "showcase/sequential-2"
INDEX_ID = "showcase/index"


def on_load(ctx):
    ctx.global_state.setdefault("showcase_list", []).append(STORY_ID)


def select_condition(ctx):
    return ctx.global_state.get("showcase") == STORY_ID


async def run(ctx):
    await ctx.ui.text("This is TEXT 2.")
    ctx.global_state["showcase"] = INDEX_ID


story = {
    "id": STORY_ID,
    "on_load": on_load,
    "select_condition": select_condition,
    "run": run,
}
