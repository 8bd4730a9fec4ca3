from graph.context import RunContext
from graph.state import RunState


async def open_correction_node(state: RunState, ctx: RunContext = None) -> dict:
    """ログイン済みの打刻修正ページを開いたままにする（デバッグ用）"""
    await ctx.browser.navigate(ctx.urls["modify"])
    return {}
