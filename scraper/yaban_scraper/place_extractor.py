"""
Google Maps Sonuc Listesi Veri Cikarici

Yuklenmis sonuc panelinin (role="feed") HTML'inden mekan kayitlarini cikarir.

Secim stratejisi:
    - CSS class adlari yerine ARIA/erisilebilirlik ozellikleri kullanilir
      (aria-label, role). Google Maps class adlarini sik degistirir,
      erisilebilirlik ozellikleri ise tasarim degisikliklerinde sabit kalir.
    - Her alan icin sirali strateji listesi denenir, ilk eslesen kazanir.
    - Opsiyonel alanlar parse edilemezse None kalir, hata firlatilmaz.
"""

import re
from typing import Callable

from loguru import logger
from scrapy import Selector

from . import settings
from .items import PlaceRecord
from .storage import utc_now_iso

PLACE_LINK_XPATH = './/a[contains(@href, "/maps/place/")]'
FEED_XPATH = '//*[@role="feed"]'

PLACE_ID_PATTERN = re.compile(r"!1s([^!]+)")
RATING_PATTERN = re.compile(r"([\d.]+)\s+stars")
REVIEWS_PATTERN = re.compile(r"([\d,]+)\s+reviews")
CATEGORY_SEPARATOR = "·"
CATEGORY_LINE_XPATH = (
    f'.//div[contains(string(.), "{CATEGORY_SEPARATOR}")]'
    f'[not(.//div[contains(string(.), "{CATEGORY_SEPARATOR}")])]'
)
PRICE_PREFIX = "Price:"

extractor_logger = logger.bind(component="PlaceExtractor")


# ---- Alan parser'lari ----

def parse_place_id(href: str) -> str:
    """URL icindeki !1s<token> parcasindan mekan kimligini cikarir. Bulunamazsa bos dize."""
    eslesme = PLACE_ID_PATTERN.search(href or "")
    return eslesme.group(1) if eslesme else ""


def parse_rating(label: str | None) -> float | None:
    """
    "4.5 stars" -> 4.5, "4 stars" -> 4.0

    Eslesmeyen veya sayiya cevrilemeyen etiketler icin None.
    """
    eslesme = RATING_PATTERN.search(label or "")
    if not eslesme:
        return None
    try:
        return float(eslesme.group(1))
    except ValueError:
        return None


def parse_review_count(label: str | None) -> int | None:
    """"1,234 reviews" -> 1234"""
    eslesme = REVIEWS_PATTERN.search(label or "")
    if not eslesme:
        return None
    rakamlar = eslesme.group(1).replace(",", "")
    return int(rakamlar) if rakamlar.isdigit() else None


def parse_category(text: str | None) -> str | None:
    """"Halal restaurant · $$ · Shinjuku" -> "Halal restaurant" """
    if not text or CATEGORY_SEPARATOR not in text:
        return None
    kategori = text.split(CATEGORY_SEPARATOR)[0].strip()
    return kategori or None


def parse_price_level(label: str | None) -> str | None:
    """"Price: Moderate" -> "Moderate" """
    if not label or not label.startswith(PRICE_PREFIX):
        return None
    fiyat = label[len(PRICE_PREFIX):].strip()
    return fiyat or None


def absolute_url(href: str) -> str:
    return href if href.startswith("http") else f"{settings.GOOGLE_MAPS_BASE_URL}{href}"


# ---- Kart (ust konteyner) stratejileri ----

def _card_by_article_role(link: Selector) -> Selector | None:
    kartlar = link.xpath('ancestor::div[@role="article"][1]')
    return kartlar[0] if kartlar else None


def _card_by_ancestor_depth(link: Selector) -> Selector | None:
    # Alternatif yapi: linkin 3 ust elementi
    kartlar = link.xpath("../../..")
    return kartlar[0] if kartlar else None


CARD_STRATEGIES: list[Callable[[Selector], Selector | None]] = [
    _card_by_article_role,
    _card_by_ancestor_depth,
]


# ---- Puan stratejileri ----

def _rating_from_star_image(card: Selector) -> float | None:
    etiket = card.xpath(
        './/span[@role="img"][contains(@aria-label, "stars")]/@aria-label'
    ).get()
    return parse_rating(etiket)


def _rating_from_labeled_spans(card: Selector) -> float | None:
    for etiket in card.xpath(".//span[@aria-label]/@aria-label").getall():
        puan = parse_rating(etiket)
        if puan is not None:
            return puan
    return None


RATING_STRATEGIES: list[Callable[[Selector], float | None]] = [
    _rating_from_star_image,
    _rating_from_labeled_spans,
]


# ---- Diger alan stratejileri ----

def _reviews_from_labeled_span(card: Selector) -> int | None:
    etiket = card.xpath('.//span[contains(@aria-label, "reviews")]/@aria-label').get()
    return parse_review_count(etiket)


def _category_from_dot_separated_text(card: Selector) -> str | None:
    # Sadece "·" iceren en icteki div'ler; dis sarmalayicilar ismi de icerir
    for div in card.xpath(CATEGORY_LINE_XPATH):
        kategori = parse_category(div.xpath("string(.)").get())
        if kategori:
            return kategori
    return None


def _price_from_labeled_span(card: Selector) -> str | None:
    etiket = card.xpath(
        f'.//span[starts-with(@aria-label, "{PRICE_PREFIX}")]/@aria-label'
    ).get()
    return parse_price_level(etiket)


REVIEW_STRATEGIES: list[Callable[[Selector], int | None]] = [_reviews_from_labeled_span]
CATEGORY_STRATEGIES: list[Callable[[Selector], str | None]] = [_category_from_dot_separated_text]
PRICE_STRATEGIES: list[Callable[[Selector], str | None]] = [_price_from_labeled_span]


def first_match(strategies: list[Callable], node: Selector):
    """Stratejileri sirayla dener, None olmayan ilk sonucu dondurur."""
    for strateji in strategies:
        sonuc = strateji(node)
        if sonuc is not None:
            return sonuc
    return None


# ---- Ana cikarma fonksiyonlari ----

def extract_place(link: Selector, scraped_at: str) -> PlaceRecord | None:
    """
    Tek bir mekan linkinden kayit olusturur.

    Returns:
        PlaceRecord veya None (isim ya da kimlik bulunamadiysa)
    """
    href = link.attrib.get("href", "")
    place_id = parse_place_id(href)
    name = (link.attrib.get("aria-label") or "").strip()

    if not name or not place_id:
        return None

    rating = total_reviews = category = price_level = None
    card = first_match(CARD_STRATEGIES, link)
    if card is not None:
        rating = first_match(RATING_STRATEGIES, card)
        total_reviews = first_match(REVIEW_STRATEGIES, card)
        category = first_match(CATEGORY_STRATEGIES, card)
        price_level = first_match(PRICE_STRATEGIES, card)

    return PlaceRecord(
        place_id=place_id,
        name=name,
        url=absolute_url(href),
        scraped_at=scraped_at,
        rating=rating,
        total_reviews=total_reviews,
        category=category,
        price_level=price_level,
    )


def extract_places(html: str, scraped_at: str | None = None) -> list[PlaceRecord]:
    """
    Sonuc panelindeki tum mekan linklerinden kayitlari cikarir.

    Args:
        html: Render edilmis sayfa HTML'i (page.content())
        scraped_at: Kayitlara yazilacak zaman damgasi (varsayilan: simdi)

    Returns:
        Sayfa sirasinda PlaceRecord listesi. Panel yoksa bos liste.
    """
    scraped_at = scraped_at or utc_now_iso()
    feed = Selector(text=html).xpath(FEED_XPATH)
    if not feed:
        extractor_logger.warning("Sonuc paneli (feed) HTML icinde bulunamadi")
        return []

    kayitlar: list[PlaceRecord] = []
    linkler = feed[0].xpath(PLACE_LINK_XPATH)
    for link in linkler:
        try:
            kayit = extract_place(link, scraped_at)
        except Exception as e:
            extractor_logger.debug(f"Kart isleme hatasi: {type(e).__name__}: {e}")
            continue
        if kayit is not None:
            kayitlar.append(kayit)

    extractor_logger.debug(f"{len(linkler)} link incelendi, {len(kayitlar)} kayit cikarildi")
    return kayitlar
