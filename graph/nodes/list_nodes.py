import logging
from typing import Optional

from graph.context import RunContext
from graph.state import RunState
from services.attendance_aggregator import (
    AttendanceAggregator,
    AttendanceRow,
    RemoteReportedTotals,
)
from services.errors import ElementNotFoundError

logger = logging.getLogger(__name__)


async def list_open_node(state: RunState, ctx: RunContext = None) -> dict:
    """出勤簿ページを開き、レート制限ページへのリダイレクトを検出するノード"""
    await ctx.browser.navigate(ctx.urls["attendance"])
    await ctx.clock.wait("list_settle")

    logger.debug("レート制限のエラーページに飛ばされていないか確認します...")
    current = await ctx.browser.current_url()
    return {"rate_limited": ctx.urls["rate_limit_marker"] in current}


async def rate_limit_recover_node(state: RunState, ctx: RunContext = None) -> dict:
    """レート制限ページから一度だけ前のページに戻る"""
    logger.warning("レート制限ページが表示されたため前のページに戻ります")
    await ctx.browser.back()
    await ctx.clock.wait("rate_limit_recover")
    return {}


async def _read_row(ctx: RunContext, tr) -> Optional[AttendanceRow]:
    browser, layout = ctx.browser, ctx.layout
    cells = await browser.find_elements("td", tr)
    if len(cells) < layout["columns_count"]:
        return None

    columns = layout["columns"]
    return AttendanceRow(
        date=await browser.text(cells[columns["date"]]),
        start=await browser.text(cells[columns["start"]]),
        end=await browser.text(cells[columns["end"]]),
        break_time=await browser.text(cells[columns["break"]]),
    )


async def _read_remote_totals(ctx: RunContext, tables: list) -> Optional[RemoteReportedTotals]:
    """Jobcan側の集計表（実労働時間・月規定労働時間）を読む。なければ None"""
    browser, layout = ctx.browser, ctx.layout
    index = layout["totals_table_index"]
    if len(tables) <= index:
        return None

    body = await browser.query_one("tbody", tables[index])
    if body is None:
        return None

    rows = await browser.find_elements("tr", body)
    so_far_row, expected_row = layout["worked_so_far_row"], layout["worked_expected_row"]
    if len(rows) <= max(so_far_row, expected_row):
        return None

    so_far_cell = await browser.query_one("td", rows[so_far_row])
    expected_cell = await browser.query_one("td", rows[expected_row])
    if so_far_cell is None or expected_cell is None:
        return None

    return RemoteReportedTotals(
        expected=await browser.text(expected_cell),
        worked_so_far=await browser.text(so_far_cell),
    )


async def list_collect_node(state: RunState, ctx: RunContext = None) -> dict:
    """出勤簿の表を読み取り、労働時間を集計するノード"""
    browser, layout = ctx.browser, ctx.layout
    csv_mode = state["options"].get("csv", False)

    month = state["list_month"]
    if month is not None:
        await browser.navigate(
            ctx.urls["attendance_month"].format(year=month.year, month=month.month)
        )

    page_title = None
    if not csv_mode:
        title = await browser.query_one(ctx.selectors["card_title"])
        if title is not None:
            page_title = await browser.text(title)
            logger.info("---------------------------")
            logger.info("%s のデータ", page_title)
            logger.info("---------------------------")

    tables = await browser.find_elements("table")
    index = layout["punched_table_index"]
    if len(tables) <= index:
        raise ElementNotFoundError(f"table[{index}]")

    body = await browser.find_element("tbody", tables[index])
    aggregator = AttendanceAggregator(csv_mode=csv_mode, output=ctx.output)
    for tr in await browser.find_elements("tr", body):
        row = await _read_row(ctx, tr)
        if row is not None:
            aggregator.add_row(row)

    return {
        "page_title": page_title,
        "totals": aggregator.totals,
        "remote_totals": await _read_remote_totals(ctx, tables),
    }
