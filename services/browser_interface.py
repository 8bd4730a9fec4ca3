from abc import ABC, abstractmethod
from typing import Any, Optional

from services.errors import ElementNotFoundError

# ブラウザ実装ごとの要素ハンドル
Element = Any


class BrowserSession(ABC):
    """ブラウザ操作の抽象インターフェース"""

    @abstractmethod
    async def open(self) -> None:
        """ブラウザ起動"""
        ...

    @abstractmethod
    async def close(self) -> None:
        """リソース解放"""
        ...

    @abstractmethod
    async def navigate(self, url: str) -> None:
        ...

    @abstractmethod
    async def back(self) -> None:
        ...

    @abstractmethod
    async def current_url(self) -> str:
        ...

    @abstractmethod
    async def query_one(self, selector: str, parent: Optional[Element] = None) -> Optional[Element]:
        """CSSセレクタに一致する最初の要素（なければ None）"""
        ...

    @abstractmethod
    async def query_all(self, selector: str, parent: Optional[Element] = None) -> list:
        ...

    @abstractmethod
    async def text(self, element: Element) -> str:
        ...

    @abstractmethod
    async def send_keys(self, element: Element, text: str) -> None:
        ...

    @abstractmethod
    async def click(self, element: Element) -> None:
        ...

    async def find_element(self, selector: str, parent: Optional[Element] = None) -> Element:
        """要素を取得する。見つからなければ ElementNotFoundError"""
        element = await self.query_one(selector, parent)
        if element is None:
            raise ElementNotFoundError(selector)
        return element

    async def find_elements(self, selector: str, parent: Optional[Element] = None) -> list:
        return await self.query_all(selector, parent)
