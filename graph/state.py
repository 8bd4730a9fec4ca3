from datetime import date
from typing import Optional, TypedDict

from services.attendance_aggregator import MonthlyTotals, RemoteReportedTotals


class RunState(TypedDict):
    subcommand: str                               # "push_it" / "revise_clock" / "login" / "list"
    options: dict                                 # サブコマンドの引数
    visible: bool                                 # ブラウザ表示モード
    sleep_seconds: Optional[int]                  # 終了前の待機秒数
    revise_date: Optional[date]                   # 修正対象日（revise_clock）
    list_month: Optional[date]                    # 対象月の1日（list）
    rate_limited: bool                            # レート制限ページに飛ばされたか
    format_error: bool                            # 打刻修正でエラー表示が出たか
    notified: bool                                # Slack通知済み
    page_title: Optional[str]                     # 出勤簿の見出し
    totals: Optional[MonthlyTotals]               # 打刻からの集計
    remote_totals: Optional[RemoteReportedTotals]  # Jobcan側の集計


def initial_state(
    subcommand: str,
    options: dict,
    visible: bool = False,
    sleep_seconds: Optional[int] = None,
    revise_date: Optional[date] = None,
    list_month: Optional[date] = None,
) -> RunState:
    return {
        "subcommand": subcommand,
        "options": options,
        "visible": visible,
        "sleep_seconds": sleep_seconds,
        "revise_date": revise_date,
        "list_month": list_month,
        "rate_limited": False,
        "format_error": False,
        "notified": False,
        "page_title": None,
        "totals": None,
        "remote_totals": None,
    }
