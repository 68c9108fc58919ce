"""
Google Maps Scraper

Google Maps arama sonuclarindan mekan bilgilerini toplar.
Playwright ile headless browser kullanir.

Akis:
    1. Arama URL'ine git (domcontentloaded, networkidle degil:
       Google Maps arka planda surekli XHR yapar)
    2. Sonuc panelinin (role="feed") gorunmesini bekle
    3. Paneli scroll ederek sonuclari yukle
    4. Render edilmis HTML'den mekan kayitlarini cikar
"""

from typing import Any
from urllib.parse import quote

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeoutError
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from .. import settings
from ..items import PlaceRecord
from ..place_extractor import extract_places
from .base import BaseScraper, ResultsTimeoutError
from .browser import BrowserSession
from .feed_loader import FeedScroller

# encodeURIComponent tarafindan kodlanmayan ozel karakterler
URI_SAFE_CHARS = "!*'()"


def build_search_url(query: str) -> str:
    """
    Sorguyu Google Maps arama URL'ine cevirir.

    Karakter kumesi JavaScript encodeURIComponent ile aynidir.
    """
    return f"{settings.GOOGLE_MAPS_SEARCH_URL}{quote(query, safe=URI_SAFE_CHARS)}"


class GoogleMapsScraper(BaseScraper):
    """Google Maps mekan scraper'i"""

    def __init__(
        self,
        session: BrowserSession | None = None,
        page_settle_delay: float = settings.PAGE_SETTLE_DELAY,
        poll_attempts: int = settings.RESULTS_POLL_ATTEMPTS,
        poll_interval: float = settings.RESULTS_POLL_INTERVAL,
        results_settle_delay: float = settings.RESULTS_SETTLE_DELAY,
        scroll_delay: float = settings.SCROLL_DELAY,
        scroll_time_budget: float | None = settings.SCROLL_TIME_BUDGET,
        extraction_settle_delay: float = settings.EXTRACTION_SETTLE_DELAY,
        **kwargs: Any,
    ):
        super().__init__(session=session, **kwargs)
        self.page_settle_delay = page_settle_delay
        self.poll_attempts = poll_attempts
        self.poll_interval = poll_interval
        self.results_settle_delay = results_settle_delay
        self.scroll_delay = scroll_delay
        self.scroll_time_budget = scroll_time_budget
        self.extraction_settle_delay = extraction_settle_delay

    async def search_places(
        self, query: str, max_results: int = settings.DEFAULT_MAX_RESULTS
    ) -> list[PlaceRecord]:
        """
        Google Maps'te arama yapar ve sonuc listesindeki mekanlari toplar.

        Args:
            query: Serbest metin arama sorgusu
            max_results: Scroll ile yuklenmeye calisilacak sonuc sayisi

        Raises:
            BrowserNotInitializedError: initialize() cagrilmadiysa
            ResultsTimeoutError: Sonuc paneli hic gorunmediyse
        """
        page = self.session.page

        search_url = build_search_url(query)
        self.logger.info(f"Araniyor: {query}")
        self.logger.debug(f"URL: {search_url}")

        await self._navigate(search_url)
        await self._delay(self.page_settle_delay)

        await self.wait_for_results()

        scroller = FeedScroller(
            page,
            scroll_delay=self.scroll_delay,
            time_budget=self.scroll_time_budget,
        )
        await scroller.scroll_until(max_results)

        places = await self.extract_places()

        self.logger.info(f"{len(places)} mekan bulundu")
        self._log_stats(places)
        return places

    @retry(
        stop=stop_after_attempt(settings.NAVIGATION_RETRIES),
        wait=wait_exponential(multiplier=1, min=2, max=30),
        retry=retry_if_exception_type(PlaywrightTimeoutError),
        reraise=True,
    )
    async def _navigate(self, url: str) -> None:
        """Sayfaya gider (zaman asiminda tekrar denemeli)"""
        await self.session.page.goto(
            url,
            wait_until="domcontentloaded",
            timeout=self.session.timeout_ms,
        )

    async def wait_for_results(self) -> None:
        """
        Sonuc panelinin DOM'da gorunmesini bekler.

        wait_for_selector yerine polling kullanilir: yonlendirme sirasinda
        frame kopmasi (detached frame) hatalari sayfa hazir olana kadar
        tekrar tekrar olusabilir.

        Raises:
            ResultsTimeoutError: poll_attempts denemede panel bulunamadiysa
        """
        page = self.session.page

        for deneme in range(1, self.poll_attempts + 1):
            try:
                feed = await page.query_selector(settings.FEED_SELECTOR)
                if feed:
                    self.logger.info("Sonuclar yuklendi")
                    # Panel, icindeki kartlardan once olusabiliyor
                    await self._delay(self.results_settle_delay)
                    return
            except PlaywrightError as e:
                self.logger.debug(f"Panel kontrolu basarisiz (deneme {deneme}): {e}")

            await self._delay(self.poll_interval)

        raise ResultsTimeoutError(
            f"Sonuc paneli {self.poll_attempts} denemede bulunamadi"
        )

    async def extract_places(self) -> list[PlaceRecord]:
        """Sayfanin guncel HTML'inden mekan kayitlarini cikarir."""
        self.logger.info("Mekan verileri cikariliyor...")

        # Frame'lerin oturmasi icin kisa bekleme
        await self._delay(self.extraction_settle_delay)

        html = await self.session.page.content()
        return extract_places(html)
