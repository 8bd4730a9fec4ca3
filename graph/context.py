from dataclasses import dataclass
from typing import Callable, Optional

from services.browser_interface import BrowserSession
from services.clock import Clock
from services.config_loader import Credentials
from services.slack_client import SlackNotifier


@dataclass
class RunContext:
    """ノードが共有する外部サービス"""
    browser: BrowserSession
    clock: Clock
    settings: dict
    credentials: Credentials
    notifier: Optional[SlackNotifier] = None
    output: Callable[[str], None] = print

    @property
    def urls(self) -> dict:
        return self.settings["urls"]

    @property
    def selectors(self) -> dict:
        return self.settings["selectors"]

    @property
    def layout(self) -> dict:
        return self.settings["layout"]
