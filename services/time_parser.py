import re
from typing import Optional

_DIGITS = re.compile(r"[0-9]+")
_HOUR_WIDTH = 2


def parse_time_to_minutes(text: str) -> Optional[int]:
    """"06:45" のような時刻を 0:00 からの経過分に変換する（06:45 -> 405）

    Jobcanは深夜帯を "26:00" のように24時超えで表すため、時の上限はチェックしない。
    時は先頭2桁固定なので "0:0" のような1桁表記は解析できない。
    """
    if not text or ":" not in text or len(text) < _HOUR_WIDTH:
        return None

    front, back = text[:_HOUR_WIDTH], text[_HOUR_WIDTH + 1:]
    if not _DIGITS.fullmatch(front) or not _DIGITS.fullmatch(back):
        return None

    return int(front) * 60 + int(back)


def format_minutes(minutes: int) -> str:
    """分をゼロ埋めの HH:MM 表記にする"""
    sign = "-" if minutes < 0 else ""
    hours, rest = divmod(abs(minutes), 60)
    return f"{sign}{hours:02d}:{rest:02d}"
