"""
Yaban Scraper Yapilandirma Dosyasi

Tum scraper ayarlari burada merkezi olarak yonetilir.
Ortam degiskenleri .env dosyasindan yuklenir.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

# .env dosyasini yukle
load_dotenv()

# Temel dizinler
DATA_DIR = Path(os.getenv("YABAN_DATA_DIR", "data"))
RAW_DATA_DIR = DATA_DIR / "raw"

# Google Maps
GOOGLE_MAPS_BASE_URL = "https://www.google.com"
GOOGLE_MAPS_SEARCH_URL = f"{GOOGLE_MAPS_BASE_URL}/maps/search/"

# Tarayici ayarlari
VIEWPORT = {"width": 1366, "height": 768}
USER_AGENT = os.getenv(
    "SCRAPER_USER_AGENT",
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
)
BROWSER_ARGS = [
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-dev-shm-usage",
    "--disable-blink-features=AutomationControlled",
    "--disable-features=IsolateOrigins,site-per-process",
]
NAVIGATION_TIMEOUT_MS = int(os.getenv("SCRAPER_NAVIGATION_TIMEOUT_MS", "60000"))
DEFAULT_SLOW_MO_MS = int(os.getenv("SCRAPER_SLOW_MO_MS", "50"))

# Sonuc paneli hazirlik kontrolu
FEED_SELECTOR = '[role="feed"]'
PAGE_SETTLE_DELAY = 4.0  # Saniye
RESULTS_POLL_ATTEMPTS = 30
RESULTS_POLL_INTERVAL = 1.0  # Saniye
RESULTS_SETTLE_DELAY = 3.0  # Saniye
NAVIGATION_RETRIES = int(os.getenv("SCRAPER_NAVIGATION_RETRIES", "3"))

# Scroll ayarlari
SCROLL_DELAY = float(os.getenv("SCRAPER_SCROLL_DELAY", "2.0"))  # Saniye
MAX_STALLED_SCROLLS = 3
SCROLL_TIME_BUDGET = float(os.getenv("SCRAPER_SCROLL_TIME_BUDGET", "180"))  # Saniye

# Veri cikarma
EXTRACTION_SETTLE_DELAY = 1.0  # Saniye

# Arama varsayilanlari
DEFAULT_QUERY = "halal restaurants in Tokyo"
DEFAULT_MAX_RESULTS = int(os.getenv("GOOGLE_MAPS_MAX_RESULTS", "20"))

# Toplu tarama (ilce bazli)
DISTRICT_QUERY_TEMPLATE = "halal restaurants {district} tokyo japan"
DISTRICT_DELAY_RANGE = (3.0, 5.0)  # Saniye

# Tokyo'nun 23 ozel ilcesi
TOKYO_DISTRICTS = [
    "Chiyoda",
    "Chuo",
    "Minato",
    "Shinjuku",
    "Bunkyo",
    "Taito",
    "Sumida",
    "Koto",
    "Shinagawa",
    "Meguro",
    "Ota",
    "Setagaya",
    "Shibuya",
    "Nakano",
    "Suginami",
    "Toshima",
    "Kita",
    "Arakawa",
    "Itabashi",
    "Nerima",
    "Adachi",
    "Katsushika",
    "Edogawa",
]

# Loglama
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FILE = os.getenv("LOG_FILE", str(Path("logs") / "scraper.log"))
