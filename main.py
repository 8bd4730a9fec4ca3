"""Jobcan 打刻エージェント - エントリーポイント"""
import argparse
import asyncio
import logging
import os
import sys
from typing import Optional

from services.attendance_browser import AttendanceBrowser
from services.clock import Clock
from services.config_loader import (
    ENVVAR_CONFIG_PATH,
    load_config,
    load_credentials,
    require_credentials,
)
from services.errors import AgentError
from services.preflight import validate_options
from services.slack_client import SlackNotifier
from graph.context import RunContext
from graph.graph import build_graph
from graph.state import initial_state

logger = logging.getLogger("jobcan_agent")

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

# argparse のサブコマンド名 → グラフ上のサブコマンド
SUBCOMMANDS = {
    "push-it": "push_it",
    "clock-in": "push_it",
    "clock-out": "push_it",
    "revise-clock": "revise_clock",
    "login": "login",
    "list": "list",
}


def setup_logging() -> None:
    level = os.getenv("LOG_LEVEL", "")
    if not level:
        print("WARNING! LOG_LEVEL 環境変数が未設定のため 'INFO' を使用します", file=sys.stderr)
        level = "INFO"

    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
    logging.getLogger("slack_sdk").setLevel(logging.WARNING)
    logging.getLogger("asyncio").setLevel(logging.WARNING)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="jobcan-agent", description="Jobcan の打刻・打刻修正・出勤簿の確認を自動化します"
    )
    parser.add_argument(
        "-v", "--visible", action="store_true",
        help="ブラウザを表示して実行する（既定: 非表示）",
    )
    parser.add_argument(
        "-s", "--sleep", type=int, default=None, dest="sleep_seconds",
        help="終了前にブラウザを開いたまま待機する秒数（デバッグ用）",
    )
    parser.add_argument(
        "--config", default=os.getenv(ENVVAR_CONFIG_PATH),
        help="設定ファイル（YAML）のパス",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    push_it = subparsers.add_parser(
        "push-it", aliases=["clock-in", "clock-out"], help="PUSHボタンを押して打刻する"
    )
    push_it.add_argument("-m", "--message", default="work start", help="打刻メモ")
    push_it.add_argument(
        "--slack-message", default="",
        help="Slackに投稿するメッセージ（未指定なら打刻メモ）",
    )
    push_it.add_argument(
        "--slack-channel", default=None,
        help="投稿先のSlackチャンネル（既定: 設定ファイルの slack.default_channel）",
    )

    revise = subparsers.add_parser("revise-clock", help="打刻修正で時刻を追加する")
    revise.add_argument("-d", "--date", default=None, help="対象日 YYYY-MM-DD（既定: 今日）")
    revise.add_argument("-t", "--time", default="0700", help="時刻 hhmm（例: 0700 = 7時）")
    revise.add_argument("-m", "--message", default="work start", help="打刻メモ")

    subparsers.add_parser(
        "login", help="ログインだけ行う（--visible と --sleep が必要）"
    )

    list_cmd = subparsers.add_parser("list", help="今月（または指定月）の勤務時間を表示する")
    list_cmd.add_argument("-d", "--date", default=None, help="対象月 YYYYMM")
    list_cmd.add_argument("-c", "--csv", action="store_true", help="CSVで出力する")

    return parser


def _options(args: argparse.Namespace) -> dict:
    excluded = {"visible", "sleep_seconds", "config", "command"}
    return {key: value for key, value in vars(args).items() if key not in excluded}


def create_services(config: dict, credentials, visible: bool) -> RunContext:
    """設定に基づいてサービスインスタンスを生成"""
    notifier = None
    if credentials.can_notify():
        notifier = SlackNotifier(
            token=credentials.slack_user_token, sender_name=credentials.slack_user_name
        )
    else:
        logger.debug("Slackの認証情報が未設定のため通知は行いません")

    return RunContext(
        browser=AttendanceBrowser(config=config, visible=visible),
        clock=Clock(config["waits"]),
        settings=config,
        credentials=credentials,
        notifier=notifier,
    )


async def run(ctx: RunContext, state: dict) -> dict:
    """ブラウザを起動してグラフを1回実行する"""
    graph = build_graph(ctx)
    await ctx.browser.open()
    try:
        return await graph.ainvoke(state)
    finally:
        await ctx.browser.close()


def main(argv: Optional[list] = None) -> int:
    """メイン起動処理"""
    setup_logging()
    args = build_parser().parse_args(argv)

    try:
        credentials = require_credentials(load_credentials())
        config = load_config(args.config)

        subcommand = SUBCOMMANDS[args.command]
        options = _options(args)
        if subcommand == "push_it" and not options["slack_channel"]:
            options["slack_channel"] = config["slack"]["default_channel"]

        # ブラウザ起動前の引数チェック
        parsed = validate_options(subcommand, options, args.visible, args.sleep_seconds)

        state = initial_state(
            subcommand,
            options,
            visible=args.visible,
            sleep_seconds=args.sleep_seconds,
            **parsed,
        )
        ctx = create_services(config, credentials, args.visible)
        asyncio.run(run(ctx, state))
    except AgentError as e:
        logger.error("%s", e)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
