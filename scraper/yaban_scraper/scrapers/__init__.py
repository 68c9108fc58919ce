"""Yaban Scraper'lari - Tarayici tabanli veri toplama"""

from .base import BaseScraper, BrowserNotInitializedError, ResultsTimeoutError, ScraperError
from .browser import BrowserSession
from .feed_loader import FeedScroller
from .google_maps import GoogleMapsScraper

__all__ = [
    "BaseScraper",
    "BrowserNotInitializedError",
    "BrowserSession",
    "FeedScroller",
    "GoogleMapsScraper",
    "ResultsTimeoutError",
    "ScraperError",
]
