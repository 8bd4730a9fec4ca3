from datetime import date

import pytest

from fakes import (
    URLS,
    FakeBrowser,
    FakeClock,
    FakeElement,
    attendance_page,
    make_ctx,
    standard_pages,
)
from graph.nodes.list_nodes import list_collect_node, list_open_node, rate_limit_recover_node
from graph.state import initial_state
from services.attendance_aggregator import RemoteReportedTotals
from services.errors import ElementNotFoundError

RATE_LIMIT_URL = "https://ssl.jobcan.jp/error/partial-rate-limit"

ROWS = [
    ("01/06(月)", "", "09:00", "18:00", "01:00"),
    ("01/07(火)", "", "10:00", "17:00", "00:30"),
    ("01/11(土)", "休日", "", "", ""),
    ("01/14(火)", "", "09:30", "勤務中", ""),
]


async def _open_attendance(browser):
    await browser.navigate(URLS["attendance"])


@pytest.mark.asyncio
async def test_list_open_normal():
    browser = FakeBrowser(pages=standard_pages(**{URLS["attendance"]: attendance_page(ROWS)}))
    clock = FakeClock()
    ctx = make_ctx(browser, clock=clock)

    result = await list_open_node(initial_state("list", {"csv": False}), ctx=ctx)

    assert result == {"rate_limited": False}
    assert clock.waited == ["list_settle"]


@pytest.mark.asyncio
async def test_list_open_detects_rate_limit():
    """レート制限ページへのリダイレクトを検出すること"""
    browser = FakeBrowser(
        pages=standard_pages(**{URLS["attendance"]: attendance_page(ROWS)}),
        redirects={URLS["attendance"]: RATE_LIMIT_URL},
    )
    ctx = make_ctx(browser)

    result = await list_open_node(initial_state("list", {"csv": False}), ctx=ctx)

    assert result == {"rate_limited": True}


@pytest.mark.asyncio
async def test_rate_limit_recover_goes_back_once():
    browser = FakeBrowser(
        pages=standard_pages(**{URLS["attendance"]: attendance_page(ROWS)}),
        redirects={URLS["attendance"]: RATE_LIMIT_URL},
    )
    clock = FakeClock()
    ctx = make_ctx(browser, clock=clock)
    await _open_attendance(browser)

    await rate_limit_recover_node(initial_state("list", {"csv": False}), ctx=ctx)

    assert browser.actions.count(("back",)) == 1
    assert await browser.current_url() == URLS["attendance"]
    assert clock.waited == ["rate_limit_recover"]


@pytest.mark.asyncio
async def test_list_collect_csv_output():
    """CSVモードでは勤務日の行だけを出力すること"""
    lines = []
    browser = FakeBrowser(pages=standard_pages(**{URLS["attendance"]: attendance_page(ROWS)}))
    ctx = make_ctx(browser, output=lines.append)
    await _open_attendance(browser)

    result = await list_collect_node(initial_state("list", {"csv": True}), ctx=ctx)

    assert lines == [
        "01/06(月);09:00;18:00;01:00;08:00",
        "01/07(火);10:00;17:00;00:30;06:30",
    ]
    totals = result["totals"]
    assert totals.worked_minutes == 960
    assert totals.break_minutes == 90
    assert totals.net_minutes == 870
    assert result["page_title"] is None
    assert result["remote_totals"] == RemoteReportedTotals(
        expected="168:00", worked_so_far="160:00"
    )


@pytest.mark.asyncio
async def test_list_collect_human_mode_reads_title(caplog):
    lines = []
    browser = FakeBrowser(pages=standard_pages(**{URLS["attendance"]: attendance_page(ROWS)}))
    ctx = make_ctx(browser, output=lines.append)
    await _open_attendance(browser)

    with caplog.at_level("INFO"):
        result = await list_collect_node(initial_state("list", {"csv": False}), ctx=ctx)

    assert result["page_title"] == "2020年01月"
    assert lines == []
    assert "01/14(火): 09:30 - 勤務中 (break: )" in caplog.text


@pytest.mark.asyncio
async def test_list_collect_month_deep_link():
    """月指定時は月別表示のURLを開くこと"""
    month_url = URLS["attendance_month"].format(year=2020, month=2)
    browser = FakeBrowser(pages=standard_pages(**{month_url: attendance_page(ROWS[:1])}))
    ctx = make_ctx(browser, output=lambda line: None)

    state = initial_state("list", {"csv": True, "date": "202002"}, list_month=date(2020, 2, 1))
    result = await list_collect_node(state, ctx=ctx)

    assert browser.navigations() == [
        "https://ssl.jobcan.jp/employee/attendance"
        "?list_type=normal&search_type=month&year=2020&month=2"
    ]
    assert result["totals"].net_minutes == 480


@pytest.mark.asyncio
async def test_list_collect_skips_short_rows():
    lines = []
    rows = [("01/06(月)", "", "09:00", "18:00")]
    browser = FakeBrowser(pages=standard_pages(**{URLS["attendance"]: attendance_page(rows)}))
    ctx = make_ctx(browser, output=lines.append)
    await _open_attendance(browser)

    result = await list_collect_node(initial_state("list", {"csv": True}), ctx=ctx)

    assert lines == []
    assert result["totals"].worked_minutes == 0


@pytest.mark.asyncio
async def test_list_collect_without_remote_totals():
    """Jobcan側の集計表がなくても失敗しないこと"""
    browser = FakeBrowser(
        pages=standard_pages(**{URLS["attendance"]: attendance_page(ROWS, remote=None)})
    )
    ctx = make_ctx(browser, output=lambda line: None)
    await _open_attendance(browser)

    result = await list_collect_node(initial_state("list", {"csv": True}), ctx=ctx)

    assert result["remote_totals"] is None


@pytest.mark.asyncio
async def test_list_collect_missing_table():
    """出勤簿の表がなければ中断すること"""
    page = FakeElement(children={"table": [FakeElement() for _ in range(3)]})
    browser = FakeBrowser(pages=standard_pages(**{URLS["attendance"]: page}))
    ctx = make_ctx(browser, output=lambda line: None)
    await _open_attendance(browser)

    with pytest.raises(ElementNotFoundError, match="table"):
        await list_collect_node(initial_state("list", {"csv": True}), ctx=ctx)
