import logging
from typing import Optional

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import async_playwright

from services.browser_interface import BrowserSession, Element
from services.errors import RemoteInteractionError

logger = logging.getLogger(__name__)


class AttendanceBrowser(BrowserSession):
    """PlaywrightでJobcanを操作するブラウザセッション"""

    def __init__(self, config: dict, visible: bool = False):
        self._config = config["browser"]
        self._visible = visible
        self._playwright = None
        self._browser = None
        self._context = None
        self._page = None

    async def open(self) -> None:
        logger.debug("ブラウザを起動しています (visible=%s)", self._visible)
        launch_options = {"headless": not self._visible}
        if self._config.get("channel"):
            launch_options["channel"] = self._config["channel"]

        try:
            self._playwright = await async_playwright().start()
            self._browser = await self._playwright.chromium.launch(**launch_options)
            self._context = await self._browser.new_context()
            self._context.set_default_navigation_timeout(
                self._config["navigation_timeout_ms"]
            )
            self._page = await self._context.new_page()
        except PlaywrightError as e:
            raise RemoteInteractionError(f"ブラウザを起動できませんでした: {e}") from e

        logger.debug("Chromium %s", self._browser.version)

    async def close(self) -> None:
        """ブラウザを閉じる"""
        if self._browser:
            await self._browser.close()
            self._browser = None
        if self._playwright:
            await self._playwright.stop()
            self._playwright = None
        self._context = None
        self._page = None

    @property
    def page(self):
        if self._page is None:
            raise RemoteInteractionError("ブラウザが起動していません")
        return self._page

    async def navigate(self, url: str) -> None:
        logger.debug("遷移: %s", url)
        try:
            await self.page.goto(url)
        except PlaywrightError as e:
            raise RemoteInteractionError(f"ページを開けませんでした: {url}: {e}") from e

    async def back(self) -> None:
        try:
            await self.page.go_back()
        except PlaywrightError as e:
            raise RemoteInteractionError(f"前のページに戻れませんでした: {e}") from e

    async def current_url(self) -> str:
        return self.page.url

    async def query_one(self, selector: str, parent: Optional[Element] = None) -> Optional[Element]:
        root = parent if parent is not None else self.page
        try:
            return await root.query_selector(selector)
        except PlaywrightError as e:
            raise RemoteInteractionError(f"要素を検索できませんでした: {selector}: {e}") from e

    async def query_all(self, selector: str, parent: Optional[Element] = None) -> list:
        root = parent if parent is not None else self.page
        try:
            return await root.query_selector_all(selector)
        except PlaywrightError as e:
            raise RemoteInteractionError(f"要素を検索できませんでした: {selector}: {e}") from e

    async def text(self, element: Element) -> str:
        try:
            return (await element.inner_text()).strip()
        except PlaywrightError as e:
            raise RemoteInteractionError(f"テキストを取得できませんでした: {e}") from e

    async def send_keys(self, element: Element, text: str) -> None:
        try:
            await element.type(text)
        except PlaywrightError as e:
            raise RemoteInteractionError(f"入力できませんでした: {e}") from e

    async def click(self, element: Element) -> None:
        try:
            await element.click()
        except PlaywrightError as e:
            raise RemoteInteractionError(f"クリックできませんでした: {e}") from e
