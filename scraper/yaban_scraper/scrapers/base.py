"""
Yaban Temel Scraper Sinifi

Tum scraper'lar bu siniftan turetilir.
Tarayici oturumu yonetimi ve loglama burada tanimlanir.
"""

import asyncio
from abc import ABC, abstractmethod
from typing import Any

from loguru import logger

from .. import settings
from ..items import PlaceRecord
from .browser import BrowserSession
from .exceptions import BrowserNotInitializedError, ResultsTimeoutError, ScraperError

__all__ = [
    "BaseScraper",
    "BrowserNotInitializedError",
    "ResultsTimeoutError",
    "ScraperError",
]


class BaseScraper(ABC):
    """
    Tum scraper'lar icin temel sinif.

    Her scraper tek bir tarayici oturumuna (BrowserSession) sahiptir.
    Oturum initialize() ile acilir, close() ile kapatilir; close()
    hata durumunda da cagrilmalidir (async with kullanimi bunu garanti eder).

    Alt siniflar su metodu implement etmelidir:
    - search_places(): Bir arama sorgusu icin mekan listesi toplar
    """

    def __init__(self, session: BrowserSession | None = None):
        self.session = session or BrowserSession()
        self.logger = logger.bind(scraper=self.__class__.__name__)

    async def initialize(
        self, headless: bool = True, slow_mo: int = settings.DEFAULT_SLOW_MO_MS
    ) -> None:
        """Tarayiciyi baslatir. Baslatma hatasi cagirana iletilir."""
        await self.session.initialize(headless=headless, slow_mo=slow_mo)

    async def close(self) -> None:
        await self.session.close()

    async def __aenter__(self) -> "BaseScraper":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    @abstractmethod
    async def search_places(
        self, query: str, max_results: int = settings.DEFAULT_MAX_RESULTS
    ) -> list[PlaceRecord]:
        """Arama sorgusu icin mekanlari toplar"""
        ...

    @staticmethod
    async def _delay(seconds: float) -> None:
        if seconds > 0:
            await asyncio.sleep(seconds)

    def _log_stats(self, places: list[PlaceRecord]) -> None:
        """Scraping istatistiklerini loglar"""
        puanli = sum(1 for p in places if p.rating is not None)
        kategorili = sum(1 for p in places if p.category is not None)
        self.logger.info(
            f"Istatistik: {len(places)} mekan toplandi "
            f"({puanli} puanli, {kategorili} kategorili)"
        )
