import pytest
from unittest.mock import MagicMock

from fakes import URLS, FakeBrowser, FakeClock, make_ctx, standard_pages
from graph.nodes.push_it_node import push_it_node
from graph.state import initial_state
from services.errors import NotificationError


def _options(**overrides):
    options = {"message": "work start", "slack_message": "", "slack_channel": "#standup"}
    options.update(overrides)
    return options


@pytest.mark.asyncio
async def test_push_it_without_notifier():
    """通知設定がなければ打刻だけ行うこと"""
    browser = FakeBrowser(pages=standard_pages())
    clock = FakeClock()
    ctx = make_ctx(browser, clock=clock)

    result = await push_it_node(initial_state("push_it", _options()), ctx=ctx)

    assert result == {"notified": False}
    assert browser.actions == [
        ("navigate", URLS["employee"]),
        ("type", "note", "work start"),
        ("click", "push"),
    ]
    assert clock.waited == []


@pytest.mark.asyncio
async def test_push_it_notifies_after_delay():
    """打刻後に待機してからSlackへ投稿すること"""
    browser = FakeBrowser(pages=standard_pages())
    clock = FakeClock()
    notifier = MagicMock()
    ctx = make_ctx(browser, clock=clock, notifier=notifier)

    result = await push_it_node(
        initial_state("push_it", _options(slack_message="おはようございます")), ctx=ctx
    )

    assert result == {"notified": True}
    assert clock.waited == ["notify_delay"]
    assert clock.slept == [30.0]
    notifier.send.assert_called_once_with("#standup", "おはようございます")


@pytest.mark.asyncio
async def test_push_it_notifies_note_when_no_slack_message():
    browser = FakeBrowser(pages=standard_pages())
    notifier = MagicMock()
    ctx = make_ctx(browser, notifier=notifier)

    await push_it_node(initial_state("push_it", _options(message="work end")), ctx=ctx)

    notifier.send.assert_called_once_with("#standup", "work end")


@pytest.mark.asyncio
async def test_push_it_notification_failure_is_fatal():
    """Slack通知の失敗は打刻済みでもエラーになること"""
    browser = FakeBrowser(pages=standard_pages())
    notifier = MagicMock()
    notifier.send.side_effect = NotificationError("Slackがエラーを返しました")
    ctx = make_ctx(browser, notifier=notifier)

    with pytest.raises(NotificationError):
        await push_it_node(initial_state("push_it", _options()), ctx=ctx)

    assert ("click", "push") in browser.actions
