"""Scraper hata siniflari"""


class ScraperError(Exception):
    """Scraper hatalarinin temel sinifi"""


class BrowserNotInitializedError(ScraperError):
    """Tarayici baslatilmadan sayfa islemi yapilmak istendi"""


class ResultsTimeoutError(ScraperError):
    """Sonuc paneli deneme limiti icinde gorunmedi"""
