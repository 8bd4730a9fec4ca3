# graph/nodes/post_login_node.py
import logging

from graph.context import RunContext
from graph.state import RunState

logger = logging.getLogger(__name__)


async def post_login_node(state: RunState, ctx: RunContext = None) -> dict:
    """OAuth連携URLを経由してセッションCookieを確立するノード"""
    # 社員ページを直接開くと再ログインを求められる
    await ctx.browser.navigate(ctx.urls["oauth_bridge"])

    logger.debug("レート制限を避けるため待機しています...")
    await ctx.clock.wait("rate_limit_guard")
    return {}
