"""Yaban - Google Maps helal restoran scraper'i"""

__version__ = "0.1.0"
