# graph/graph.py
from langgraph.graph import StateGraph, END
from graph.state import RunState

SUBCOMMAND_NODES = {
    "push_it": "push_it",
    "revise_clock": "revise_clock",
    "login": "open_correction",
    "list": "list_open",
}


def route_after_post_login(state: RunState) -> str:
    return SUBCOMMAND_NODES[state["subcommand"]]


def route_after_revise_clock(state: RunState) -> str:
    if state["format_error"]:
        return "format_error_hold"
    return "reporting"


def route_after_list_open(state: RunState) -> str:
    if state["rate_limited"]:
        return "rate_limit_recover"
    return "list_collect"


def build_graph(ctx=None):
    """サブコマンドごとのブラウザ操作をLangGraphのグラフとして構築して返す

    ノード関数は RunContext を受け取るため、functools.partialでラップして
    LangGraphが期待する (state) -> dict シグネチャに合わせる。
    ログイン → OAuth連携 → サブコマンド → 出力 → 終了 の順に進み、
    レート制限からの復帰と打刻修正のエラー表示は独立したノードとして扱う。
    """
    from functools import partial
    from graph.nodes.login_node import login_node
    from graph.nodes.post_login_node import post_login_node
    from graph.nodes.push_it_node import push_it_node
    from graph.nodes.revise_clock_node import revise_clock_node, format_error_node
    from graph.nodes.open_correction_node import open_correction_node
    from graph.nodes.list_nodes import (
        list_open_node,
        rate_limit_recover_node,
        list_collect_node,
    )
    from graph.nodes.report_node import report_node, done_node

    nodes = {
        "logging_in": login_node,
        "post_login": post_login_node,
        "push_it": push_it_node,
        "revise_clock": revise_clock_node,
        "format_error_hold": format_error_node,
        "open_correction": open_correction_node,
        "list_open": list_open_node,
        "rate_limit_recover": rate_limit_recover_node,
        "list_collect": list_collect_node,
        "reporting": report_node,
        "done": done_node,
    }

    workflow = StateGraph(RunState)
    for name, node in nodes.items():
        workflow.add_node(name, partial(node, ctx=ctx))

    workflow.set_entry_point("logging_in")
    workflow.add_edge("logging_in", "post_login")

    workflow.add_conditional_edges(
        "post_login",
        route_after_post_login,
        {node: node for node in SUBCOMMAND_NODES.values()},
    )
    workflow.add_conditional_edges(
        "revise_clock",
        route_after_revise_clock,
        {"format_error_hold": "format_error_hold", "reporting": "reporting"},
    )
    workflow.add_conditional_edges(
        "list_open",
        route_after_list_open,
        {"rate_limit_recover": "rate_limit_recover", "list_collect": "list_collect"},
    )

    workflow.add_edge("push_it", "reporting")
    workflow.add_edge("open_correction", "reporting")
    workflow.add_edge("rate_limit_recover", "list_collect")
    workflow.add_edge("list_collect", "reporting")
    workflow.add_edge("format_error_hold", END)
    workflow.add_edge("reporting", "done")
    workflow.add_edge("done", END)

    return workflow.compile()
