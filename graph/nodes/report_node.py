# graph/nodes/report_node.py
import logging

from graph.context import RunContext
from graph.state import RunState
from services.attendance_aggregator import render_summary

logger = logging.getLogger(__name__)


async def report_node(state: RunState, ctx: RunContext = None) -> dict:
    """集計結果を出力するノード（CSVモードでは行出力のみ）"""
    totals = state["totals"]
    if totals is None or state["options"].get("csv", False):
        return {}

    for line in render_summary(totals, state["remote_totals"]):
        logger.info(line)
    return {}


async def done_node(state: RunState, ctx: RunContext = None) -> dict:
    """指定があれば終了前にブラウザを開いたまま待機する"""
    seconds = state["sleep_seconds"]
    if seconds and seconds > 0:
        logger.debug("%d 秒待機します...", seconds)
        await ctx.clock.sleep(seconds)
    return {}
