"""
Sonuc Paneli Scroll Yukleyicisi

Google Maps sonuc paneli sonsuz scroll kullanir: panel asagi kaydirildikca
yeni mekan kartlari yuklenir. FeedScroller paneli, istenen sonuc sayisina
ulasilana veya yukleme durana kadar kaydirir.

Durma kosullari:
    - Yuklenen kart sayisi >= max_results (hedefe ulasildi)
    - Art arda max_stalled kez kart sayisi artmadi (daha fazla sonuc yok)
    - Toplam sure time_budget'i asti (sayfa yakinsamiyor)
"""

import asyncio
import time
from typing import Any, Callable

from loguru import logger
from playwright.async_api import Error as PlaywrightError

from .. import settings

# Iki alternatif secici: Google Maps link yapisi sayfadan sayfaya degisebiliyor
COUNT_ITEMS_SCRIPT = """(selector) => {
    let items = document.querySelectorAll(`${selector} > div > div > a`);
    if (items.length === 0) {
        items = document.querySelectorAll(`${selector} a[href*="/maps/place/"]`);
    }
    return items.length;
}"""

SCROLL_FEED_SCRIPT = """(selector) => {
    const feed = document.querySelector(selector);
    if (feed) {
        feed.scrollTop = feed.scrollHeight;
    }
}"""


class FeedScroller:
    """
    Sonuc panelini kaydirarak sonuclari yukler.

    Args:
        page: Playwright sayfasi (evaluate() destekleyen herhangi bir nesne)
        feed_selector: Sonuc paneli secicisi
        scroll_delay: Her scroll sonrasi bekleme (saniye)
        max_stalled: Art arda kac artissiz denemede durulacagi
        time_budget: Dongu icin toplam sure siniri (saniye), None ise sinirsiz
        clock: Zaman kaynagi (testlerde degistirilebilir)
    """

    def __init__(
        self,
        page: Any,
        feed_selector: str = settings.FEED_SELECTOR,
        scroll_delay: float = settings.SCROLL_DELAY,
        max_stalled: int = settings.MAX_STALLED_SCROLLS,
        time_budget: float | None = settings.SCROLL_TIME_BUDGET,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.page = page
        self.feed_selector = feed_selector
        self.scroll_delay = scroll_delay
        self.max_stalled = max_stalled
        self.time_budget = time_budget
        self.clock = clock

        self.scroll_count = 0
        self.logger = logger.bind(component="FeedScroller")

    async def count_items(self, previous_count: int) -> int:
        """Panelde render edilmis kart sayisi. Frame koparsa onceki sayiyi dondurur."""
        try:
            return int(await self.page.evaluate(COUNT_ITEMS_SCRIPT, self.feed_selector))
        except PlaywrightError as e:
            self.logger.warning(f"Sayim sirasinda frame koptu, tekrar denenecek: {e}")
            return previous_count

    async def scroll_feed(self) -> None:
        try:
            await self.page.evaluate(SCROLL_FEED_SCRIPT, self.feed_selector)
        except PlaywrightError as e:
            self.logger.warning(f"Scroll sirasinda frame koptu, devam ediliyor: {e}")
        self.scroll_count += 1

    async def scroll_until(self, max_results: int) -> int:
        """
        Hedef sayiya ulasilana veya yukleme durana kadar scroll eder.

        Returns:
            Son gorulen kart sayisi
        """
        self.logger.info(f"{max_results} sonuca kadar scroll ediliyor...")

        baslangic = self.clock()
        onceki_sayi = 0
        mevcut_sayi = 0
        degismez_sayac = 0

        while True:
            mevcut_sayi = await self.count_items(onceki_sayi)
            self.logger.debug(f"Mevcut sonuc: {mevcut_sayi}")

            if mevcut_sayi >= max_results:
                self.logger.info(f"Hedefe ulasildi: {max_results} sonuc")
                break

            if mevcut_sayi == onceki_sayi:
                degismez_sayac += 1
                self.logger.debug(
                    f"Yeni sonuc yok ({degismez_sayac}/{self.max_stalled})"
                )
            else:
                degismez_sayac = 0
                onceki_sayi = mevcut_sayi

            if degismez_sayac >= self.max_stalled:
                self.logger.info(
                    f"Yeni sonuc yuklenmiyor, scroll durduruldu ({mevcut_sayi} sonuc)"
                )
                break

            if self.time_budget is not None and self.clock() - baslangic >= self.time_budget:
                self.logger.warning(
                    f"Scroll sure siniri asildi ({self.time_budget:.0f}s), "
                    f"{mevcut_sayi} sonucla devam ediliyor"
                )
                break

            await self.scroll_feed()
            if self.scroll_delay > 0:
                await asyncio.sleep(self.scroll_delay)

        self.logger.info(
            f"Scroll tamamlandi: {self.scroll_count} scroll, {mevcut_sayi} sonuc"
        )
        return mevcut_sayi
