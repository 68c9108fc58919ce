"""
Tarayici Oturumu Testleri

Playwright gercekten baslatilmaz; async_playwright mock'lanir.
"""

import asyncio
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from yaban_scraper import settings
from yaban_scraper.scrapers import BrowserNotInitializedError, BrowserSession
from yaban_scraper.scrapers.browser import STEALTH_INIT_SCRIPT


def _sahte_playwright():
    """async_playwright().start() zincirini taklit eden mock'lar."""
    page = MagicMock()
    context = MagicMock()
    context.add_init_script = AsyncMock()
    context.new_page = AsyncMock(return_value=page)

    browser = MagicMock()
    browser.new_context = AsyncMock(return_value=context)
    browser.close = AsyncMock()

    pw = MagicMock()
    pw.chromium.launch = AsyncMock(return_value=browser)
    pw.stop = AsyncMock()

    starter = MagicMock()
    starter.return_value.start = AsyncMock(return_value=pw)
    return starter, pw, browser, context, page


class TestBrowserSession:
    """BrowserSession yasam dongusu"""

    def test_baslatilmadan_sayfa_erisimi_hata(self):
        session = BrowserSession()
        assert session.is_open is False
        with pytest.raises(BrowserNotInitializedError):
            session.page

    def test_acik_oturum_yokken_close_sorunsuz(self):
        session = BrowserSession()
        asyncio.run(session.close())
        asyncio.run(session.close())
        assert session.is_open is False

    def test_initialize_stealth_ayarlari(self):
        starter, pw, browser, context, page = _sahte_playwright()
        session = BrowserSession(timeout_ms=45000)

        with patch("yaban_scraper.scrapers.browser.async_playwright", starter):
            asyncio.run(session.initialize(headless=False, slow_mo=10))

        pw.chromium.launch.assert_awaited_once_with(
            headless=False,
            slow_mo=10,
            args=settings.BROWSER_ARGS,
            ignore_default_args=["--enable-automation"],
        )
        browser.new_context.assert_awaited_once_with(
            viewport={"width": 1366, "height": 768},
            user_agent=settings.USER_AGENT,
        )
        context.add_init_script.assert_awaited_once_with(STEALTH_INIT_SCRIPT)
        page.set_default_navigation_timeout.assert_called_once_with(45000)
        assert session.is_open is True
        assert session.page is page

    def test_close_idempotent(self):
        starter, pw, browser, _, _ = _sahte_playwright()
        session = BrowserSession()

        async def ac_kapa():
            await session.initialize()
            await session.close()
            await session.close()

        with patch("yaban_scraper.scrapers.browser.async_playwright", starter):
            asyncio.run(ac_kapa())

        browser.close.assert_awaited_once()
        pw.stop.assert_awaited_once()
        assert session.is_open is False

    def test_baslatma_hatasinda_kaynaklar_serbest_birakilir(self):
        starter, pw, browser, _, _ = _sahte_playwright()
        browser.new_context = AsyncMock(side_effect=RuntimeError("context olusturulamadi"))
        session = BrowserSession()

        with patch("yaban_scraper.scrapers.browser.async_playwright", starter):
            with pytest.raises(RuntimeError):
                asyncio.run(session.initialize())

        browser.close.assert_awaited_once()
        pw.stop.assert_awaited_once()
        assert session.is_open is False

    def test_tarayici_kapatma_hatasinda_playwright_durdurulur(self):
        starter, pw, browser, _, _ = _sahte_playwright()
        browser.close = AsyncMock(side_effect=RuntimeError("Target closed"))
        session = BrowserSession()

        async def ac_kapa():
            await session.initialize()
            await session.close()

        with patch("yaban_scraper.scrapers.browser.async_playwright", starter):
            with pytest.raises(RuntimeError):
                asyncio.run(ac_kapa())

        pw.stop.assert_awaited_once()
        assert session.is_open is False
