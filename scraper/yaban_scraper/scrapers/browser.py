"""
Tarayici Oturum Yoneticisi

Playwright ile tek bir Chromium sureci ve tek bir sayfa (sekme) yonetir.
Stealth ayarlari (navigator.webdriver gizleme, otomasyon bayraklari)
burada uygulanir.
"""

from typing import Any

from loguru import logger
from playwright.async_api import Browser, Page, Playwright, async_playwright

from .. import settings
from .exceptions import BrowserNotInitializedError

# navigator.webdriver ozelligini false gostererek bot algilamasini zorlastirir
STEALTH_INIT_SCRIPT = """
    Object.defineProperty(navigator, 'webdriver', {
        get: () => false,
    });
"""


class BrowserSession:
    """
    Tek tarayici + tek sayfa oturumu.

    Kullanim:
        async with BrowserSession(headless=True) as session:
            await session.page.goto(url)
    """

    def __init__(
        self,
        headless: bool = True,
        slow_mo: int = settings.DEFAULT_SLOW_MO_MS,
        viewport: dict[str, int] | None = None,
        user_agent: str = settings.USER_AGENT,
        timeout_ms: int = settings.NAVIGATION_TIMEOUT_MS,
    ) -> None:
        self.headless = headless
        self.slow_mo = slow_mo
        self.viewport = viewport or dict(settings.VIEWPORT)
        self.user_agent = user_agent
        self.timeout_ms = timeout_ms

        self._playwright: Playwright | None = None
        self._browser: Browser | None = None
        self._page: Page | None = None
        self.logger = logger.bind(component="BrowserSession")

    @property
    def is_open(self) -> bool:
        return self._browser is not None

    @property
    def page(self) -> Page:
        if self._page is None:
            raise BrowserNotInitializedError(
                "Tarayici baslatilmadi. Once initialize() cagrilmali."
            )
        return self._page

    async def initialize(
        self, headless: bool | None = None, slow_mo: int | None = None
    ) -> None:
        """
        Chromium'u baslatir ve sayfayi hazirlar.

        Args:
            headless: Pencere olmadan calis (None ise constructor degeri)
            slow_mo: Her Playwright islemi arasina eklenen gecikme (ms)
        """
        if headless is not None:
            self.headless = headless
        if slow_mo is not None:
            self.slow_mo = slow_mo

        self.logger.info(
            f"Tarayici baslatiliyor (headless={self.headless}, slow_mo={self.slow_mo}ms)"
        )
        self._playwright = await async_playwright().start()
        try:
            self._browser = await self._playwright.chromium.launch(
                headless=self.headless,
                slow_mo=self.slow_mo,
                args=settings.BROWSER_ARGS,
                ignore_default_args=["--enable-automation"],
            )
            context = await self._browser.new_context(
                viewport=self.viewport,
                user_agent=self.user_agent,
            )
            await context.add_init_script(STEALTH_INIT_SCRIPT)

            self._page = await context.new_page()
            self._page.set_default_navigation_timeout(self.timeout_ms)
            self._page.set_default_timeout(self.timeout_ms)
        except Exception:
            # Yarim kalan sureci birakma, hatayi cagirana ilet
            await self.close()
            raise

        self.logger.info("Tarayici hazir")

    async def close(self) -> None:
        """Tarayiciyi ve Playwright surecini kapatir. Acik oturum yoksa bir sey yapmaz."""
        browser, playwright = self._browser, self._playwright
        self._browser = None
        self._page = None
        self._playwright = None

        try:
            if browser is not None:
                await browser.close()
                self.logger.debug("Tarayici kapatildi")
        finally:
            if playwright is not None:
                await playwright.stop()

    async def __aenter__(self) -> "BrowserSession":
        await self.initialize()
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()
