"""
Pytest Fixture'lari

Tum testlerde kullanilacak ortak fixture'lar burada tanimlanir.
Google Maps sonuc paneli icin sentetik HTML ve sahte Playwright
sayfasi (FakePage) saglanir.
"""

from typing import Any

import pytest
from loguru import logger
from playwright.async_api import Error as PlaywrightError

from yaban_scraper.items import PlaceRecord
from yaban_scraper.scrapers import BaseScraper
from yaban_scraper.scrapers.feed_loader import COUNT_ITEMS_SCRIPT, SCROLL_FEED_SCRIPT


@pytest.fixture(autouse=True)
def sessiz_loglar():
    """Test ciktisini loguru kayitlariyla doldurmamak icin varsayilan handler'i kaldirir."""
    logger.remove()
    yield


def place_href(name: str, token: str | None) -> str:
    """Google Maps mekan linki. token None ise !1s parcasi eklenmez."""
    slug = name.replace(" ", "+")
    data = f"!4m7!3m6!1s{token}!8m2!3d35.69!4d139.70" if token else "!4m7!3m6!8m2!3d35.69"
    return f"https://www.google.com/maps/place/{slug}/data={data}?authuser=0&hl=en"


def place_card(
    name: str | None,
    token: str | None,
    rating_label: str | None = "4.5 stars ",
    reviews_label: str | None = "1,234 reviews",
    category_line: str | None = "Halal restaurant · ¥¥",
    price_label: str | None = None,
    href: str | None = None,
    article_role: bool = True,
) -> str:
    """
    Tek bir sonuc karti HTML'i.

    article_role=False ise kart role="article" tasimaz; link kartin
    3 seviye altinda kalir (alternatif yapi).
    """
    href = href or place_href(name or "isimsiz", token)
    aria = f' aria-label="{name}"' if name is not None else ""

    rating = (
        f'<span role="img" aria-label="{rating_label}"><span>4.5</span></span>'
        if rating_label else ""
    )
    reviews = f'<span aria-label="{reviews_label}">(1,234)</span>' if reviews_label else ""
    price = f'<span aria-label="{price_label}">¥¥</span>' if price_label else ""
    category = f"<div><span>{category_line}</span>{price}</div>" if category_line else ""

    card_attr = ' role="article"' if article_role else ' class="Nv2PK"'
    return f"""
    <div{card_attr}>
      <div>
        <div><a href="{href}"{aria}></a></div>
      </div>
      <div>
        <div class="fontHeadlineSmall">{name or ""}</div>
        <div>{rating}{reviews}</div>
        {category}
      </div>
    </div>
    """


def feed_page(*cards: str, with_feed: bool = True) -> str:
    """Kartlari Google Maps sayfa iskeletine yerlestirir."""
    role = ' role="feed"' if with_feed else ""
    body = "".join(f"<div>{card}</div>" for card in cards)
    return f"""
    <html><body>
      <div role="main">
        <div{role} aria-label="Results for halal restaurants in Tokyo">{body}</div>
      </div>
    </body></html>
    """


class FakePage:
    """
    Sahte Playwright sayfasi.

    Args:
        counts: Her scroll sonrasi gorulecek kart sayisini donduren fonksiyon
                (parametre: o ana kadarki scroll sayisi)
        count_errors: Sayim cagrisinda hata firlatilacak cagri siralari (0 tabanli)
        scroll_errors: Scroll cagrisinda hata firlatilacak cagri siralari
    """

    def __init__(
        self,
        counts: Any = None,
        count_errors: set[int] | None = None,
        scroll_errors: set[int] | None = None,
        html: str = "",
    ) -> None:
        self.counts = counts or (lambda scrolls: 0)
        self.count_errors = count_errors or set()
        self.scroll_errors = scroll_errors or set()
        self.html = html
        self.count_calls = 0
        self.scroll_calls = 0

    async def evaluate(self, script: str, arg: Any = None) -> Any:
        if script == COUNT_ITEMS_SCRIPT:
            sira = self.count_calls
            self.count_calls += 1
            if sira in self.count_errors:
                raise PlaywrightError("Execution context was destroyed")
            return self.counts(self.scroll_calls)
        if script == SCROLL_FEED_SCRIPT:
            sira = self.scroll_calls
            self.scroll_calls += 1
            if sira in self.scroll_errors:
                raise PlaywrightError("Frame was detached")
            return None
        raise AssertionError(f"Beklenmeyen script: {script[:40]}")

    async def content(self) -> str:
        return self.html


@pytest.fixture
def fake_page_factory():
    return FakePage


@pytest.fixture
def card_factory():
    return place_card


@pytest.fixture
def page_factory():
    return feed_page


class FakeScraper(BaseScraper):
    """
    Tarayici acmayan sahte scraper.

    Args:
        places: search_places() donus degeri
        error: search_places() icinde firlatilacak hata
        on_search: Arama sirasinda cagrilacak fonksiyon (kapanis sinyali vb.)
    """

    def __init__(
        self,
        places: list[PlaceRecord] | None = None,
        error: Exception | None = None,
        on_search: Any = None,
    ) -> None:
        super().__init__()
        self.places = places or []
        self.error = error
        self.on_search = on_search
        self.initialized_with: tuple[bool, int] | None = None
        self.queries: list[tuple[str, int]] = []
        self.close_calls = 0

    async def initialize(self, headless: bool = True, slow_mo: int = 0) -> None:
        self.initialized_with = (headless, slow_mo)

    async def search_places(self, query: str, max_results: int = 20) -> list[PlaceRecord]:
        self.queries.append((query, max_results))
        if self.on_search is not None:
            self.on_search()
        if self.error is not None:
            raise self.error
        return list(self.places)

    async def close(self) -> None:
        self.close_calls += 1


def make_places(count: int, prefix: str = "Mekan") -> list[PlaceRecord]:
    return [
        PlaceRecord(
            place_id=f"0x{i}:0x{i}",
            name=f"{prefix} {i}",
            url=f"https://www.google.com/maps/place/{prefix}+{i}/data=!1s0x{i}:0x{i}",
            scraped_at="2026-01-05T09:30:00.000Z",
            rating=4.0,
        )
        for i in range(count)
    ]


@pytest.fixture
def fake_scraper_class():
    return FakeScraper


@pytest.fixture
def places_factory():
    return make_places
