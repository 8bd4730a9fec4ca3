import logging

from graph.context import RunContext
from graph.state import RunState

logger = logging.getLogger(__name__)


async def push_it_node(state: RunState, ctx: RunContext = None) -> dict:
    """打刻ボタンを押し、設定があればSlackに通知するノード"""
    browser, selectors = ctx.browser, ctx.selectors
    options = state["options"]

    await browser.navigate(ctx.urls["employee"])

    note_field = await browser.find_element(selectors["note_field"])
    await browser.send_keys(note_field, options["message"])

    push_button = await browser.find_element(selectors["push_button"])
    await browser.click(push_button)
    logger.info("打刻しました（メモ: %s）", options["message"])

    if ctx.notifier is None:
        return {"notified": False}

    # 打刻がJobcanに反映されるまで待つ
    logger.debug("Slackへの投稿前に待機しています...")
    await ctx.clock.wait("notify_delay")

    message = options.get("slack_message") or options["message"]
    ctx.notifier.send(options["slack_channel"], message)
    logger.info("Slack %s に投稿しました", options["slack_channel"])
    return {"notified": True}
