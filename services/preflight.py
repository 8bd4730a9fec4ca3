import re
from datetime import date, datetime
from typing import Optional

from services.errors import InputValidationError

REVISE_TIME_LENGTH = 4
_INTEGER = re.compile(r"-?[0-9]+")
# Jobcanの表記では "2600" が翌2:00
REVISE_TIME_MAX = 2600


def parse_revise_date(text: str) -> date:
    """YYYY-MM-DD 形式の日付を解析する"""
    try:
        return datetime.strptime(text, "%Y-%m-%d").date()
    except ValueError as e:
        raise InputValidationError(
            f"日付を解析できません: '{text}'（形式は YYYY-MM-DD）"
        ) from e


def validate_revise_time(text: str) -> str:
    """hhmm 形式の時刻を検証する（0000〜2600）"""
    if len(text) != REVISE_TIME_LENGTH:
        raise InputValidationError(
            "時刻の形式が不正です。hhmm で指定してください（例: 0700 = 7時, 2300 = 23時）"
        )
    if not _INTEGER.fullmatch(text):
        raise InputValidationError(f"時刻を数値として解析できません: '{text}'")

    value = int(text)

    if not 0 <= value <= REVISE_TIME_MAX:
        raise InputValidationError(
            "時刻の値が範囲外です。0000（0時）〜2600（翌2時）で指定してください"
        )
    return text


def parse_list_month(text: str) -> date:
    """YYYYMM を月初日として解析する"""
    try:
        return datetime.strptime(f"{text}01", "%Y%m%d").date()
    except ValueError as e:
        raise InputValidationError(f"月を解析できません: '{text}'（形式は YYYYMM）") from e


def validate_login_mode(visible: bool, sleep_seconds: Optional[int]) -> None:
    if not visible or not sleep_seconds or sleep_seconds <= 0:
        raise InputValidationError(
            "login コマンドはデバッグ用です。--visible と 0 より大きい --sleep を指定してください"
        )


def validate_options(subcommand: str, options: dict, visible: bool, sleep_seconds: Optional[int]) -> dict:
    """ブラウザ起動前に引数を検証し、解析済みの値を返す"""
    parsed = {}
    if subcommand == "revise_clock":
        if options.get("date"):
            parsed["revise_date"] = parse_revise_date(options["date"])
        validate_revise_time(options["time"])
    elif subcommand == "login":
        validate_login_mode(visible, sleep_seconds)
    elif subcommand == "list":
        if options.get("date"):
            parsed["list_month"] = parse_list_month(options["date"])
    return parsed
