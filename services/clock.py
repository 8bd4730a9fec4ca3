import asyncio
import logging

logger = logging.getLogger(__name__)


class Clock:
    """名前付き待機時間を解決してスリープする（テストでは差し替える）"""

    def __init__(self, waits: dict):
        self._waits = waits

    def duration(self, purpose: str) -> float:
        return float(self._waits[purpose])

    async def wait(self, purpose: str) -> None:
        seconds = self.duration(purpose)
        logger.debug("待機: %s (%.1f 秒)", purpose, seconds)
        await self.sleep(seconds)

    async def sleep(self, seconds: float) -> None:
        await asyncio.sleep(seconds)
