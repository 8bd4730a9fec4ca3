import logging
from dataclasses import dataclass
from typing import Callable, Iterable, Optional

from services.time_parser import format_minutes, parse_time_to_minutes

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AttendanceRow:
    date: str
    start: str = ""
    end: str = ""
    break_time: str = ""


@dataclass(frozen=True)
class DailyTotal:
    worked_minutes: int
    break_minutes: int

    @property
    def net_minutes(self) -> int:
        return self.worked_minutes - self.break_minutes


@dataclass(frozen=True)
class RemoteReportedTotals:
    """Jobcan画面の集計欄の値（表示用のみ、自前集計とは突き合わせない）"""
    expected: str
    worked_so_far: str


@dataclass
class MonthlyTotals:
    worked_minutes: int = 0
    break_minutes: int = 0
    counted_days: int = 0

    @property
    def net_minutes(self) -> int:
        return self.worked_minutes - self.break_minutes

    def add(self, daily: DailyTotal) -> None:
        self.worked_minutes += daily.worked_minutes
        self.break_minutes += daily.break_minutes
        self.counted_days += 1


def compute_daily_total(row: AttendanceRow) -> Optional[DailyTotal]:
    """1日分の労働時間を計算する。出勤・退勤が解析できない日は None"""
    start = parse_time_to_minutes(row.start)
    end = parse_time_to_minutes(row.end)
    if start is None or end is None or end < start:
        return None

    break_minutes = parse_time_to_minutes(row.break_time) or 0
    return DailyTotal(worked_minutes=end - start, break_minutes=break_minutes)


def format_csv_line(row: AttendanceRow, daily: DailyTotal) -> str:
    # 日付;出勤;退勤;休憩;休憩を除いた労働時間
    return ";".join(
        [row.date, row.start, row.end, row.break_time, format_minutes(daily.net_minutes)]
    )


class AttendanceAggregator:
    """出勤簿の行を順に受け取り、月の合計を積み上げる"""

    def __init__(self, csv_mode: bool = False, output: Callable[[str], None] = print):
        self._csv_mode = csv_mode
        self._output = output
        self.totals = MonthlyTotals()

    def add_row(self, row: AttendanceRow) -> Optional[DailyTotal]:
        if not self._csv_mode:
            logger.info(
                "%s: %s - %s (break: %s)", row.date, row.start, row.end, row.break_time
            )

        # 出勤なし = 休日
        if not row.start:
            return None

        daily = compute_daily_total(row)
        if daily is None:
            if not self._csv_mode:
                logger.debug("<--- 出勤または退勤が解析できないため無視します")
            return None

        self.totals.add(daily)

        if self._csv_mode:
            self._output(format_csv_line(row, daily))
        return daily

    def add_rows(self, rows: Iterable[AttendanceRow]) -> MonthlyTotals:
        for row in rows:
            self.add_row(row)
        return self.totals


def render_summary(
    totals: MonthlyTotals,
    remote: Optional[RemoteReportedTotals] = None,
) -> list[str]:
    """人間向けの集計行を返す"""
    lines = []
    if totals.worked_minutes > 0:
        lines.append(
            f"合計労働時間: {totals.worked_minutes} 分 / {format_minutes(totals.worked_minutes)}"
            f" (休憩: {format_minutes(totals.break_minutes)})"
        )
        lines.append(
            f"合計労働時間（休憩除く）: {totals.net_minutes} 分 / {format_minutes(totals.net_minutes)}"
        )
    else:
        lines.append("集計対象の勤務日がありません")

    if remote is not None:
        lines.append("------------ Jobcan 集計 ---------------")
        lines.append(f"実労働時間  : {remote.worked_so_far}")
        lines.append(f"月規定労働時間: {remote.expected}")
        lines.append(f"打刻から算出: {format_minutes(totals.net_minutes)}")
        lines.append("----------------------------------------")
    return lines
