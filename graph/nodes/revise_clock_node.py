import logging

from graph.context import RunContext
from graph.state import RunState
from services.errors import RemoteValidationError

logger = logging.getLogger(__name__)


async def revise_clock_node(state: RunState, ctx: RunContext = None) -> dict:
    """打刻修正ページで時刻を追加するノード"""
    browser, selectors = ctx.browser, ctx.selectors
    options = state["options"]

    await browser.navigate(ctx.urls["modify"])

    target = state["revise_date"]
    if target is not None:
        await browser.navigate(
            ctx.urls["modify_day"].format(year=target.year, month=target.month, day=target.day)
        )

    time_field = await browser.find_element(selectors["revise_time_field"])
    await browser.send_keys(time_field, options["time"])

    note_field = await browser.find_element(selectors["revise_note_field"])
    await browser.send_keys(note_field, options["message"])

    insert_button = await browser.find_element(selectors["revise_insert_button"])
    await browser.click(insert_button)

    # 日付・時刻のエラー表示を確認
    error_box = await browser.query_one(selectors["time_error"])
    if error_box is not None:
        alert = await browser.query_one(selectors["error_alert"], error_box)
        if alert is not None:
            return {"format_error": True}

    logger.info("打刻修正を登録しました（%s）", options["time"])
    return {"format_error": False}


async def format_error_node(state: RunState, ctx: RunContext = None) -> dict:
    """Jobcanが時刻の形式エラーを表示した場合のノード（常に失敗で終わる）"""
    logger.error("'time' 引数の形式が正しくありません。hhmm で指定してください")

    if state["visible"] and not state["sleep_seconds"]:
        hold = ctx.clock.duration("format_error_hold")
        logger.error("%d 秒待機します。画面のエラー表示を確認してください", hold)
        await ctx.clock.wait("format_error_hold")

    raise RemoteValidationError("'time' 引数の形式が正しくありません。hhmm で指定してください")
