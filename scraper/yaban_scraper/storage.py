"""
JSON dosya kayit yardimcilari

Ham veriler data/raw/ altina pretty-printed JSON olarak yazilir.
Dosya adlari sorgu metninden ve zaman damgasindan deterministik uretilir.
"""

import json
import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from loguru import logger

from . import settings


def utc_now_iso(now: datetime | None = None) -> str:
    """UTC zaman damgasi, milisaniye hassasiyetinde: 2026-01-05T09:30:00.123Z"""
    now = now or datetime.now(timezone.utc)
    return now.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.") + (
        f"{now.microsecond // 1000:03d}Z"
    )


def slugify_query(query: str) -> str:
    """Sorgu metnini dosya adina uygun hale getirir ("Halal Restaurants" -> "halal-restaurants")."""
    return re.sub(r"\s+", "-", query.lower())


def filesystem_timestamp(iso_timestamp: str) -> str:
    """ISO-8601 icindeki ':' ve '.' karakterlerini '-' ile degistirir."""
    return re.sub(r"[:.]", "-", iso_timestamp)


def generate_filename(query: str, now: datetime | None = None) -> str:
    return f"{slugify_query(query)}_{filesystem_timestamp(utc_now_iso(now))}.json"


def timestamped_dir_name(now: datetime | None = None) -> str:
    """Toplu tarama dizin adi (yerel saat): YYYY-MM-DD-HH-MM"""
    return (now or datetime.now()).strftime("%Y-%m-%d-%H-%M")


def district_filename(district: str) -> str:
    return f"places-{district.lower()}-tokyo.json"


def write_json(path: Path | str, payload: Any) -> Path:
    """
    Veriyi UTF-8 JSON olarak yazar.

    Ust dizinler yoksa olusturulur, mevcut dosya sorgusuz ezilir.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(payload, f, indent=2, ensure_ascii=False)
    return path


def save_raw_data(
    filename: str, payload: Any, raw_dir: Path | str = settings.RAW_DATA_DIR
) -> Path:
    filepath = write_json(Path(raw_dir) / filename, payload)
    logger.info(f"Veri kaydedildi: {filepath}")
    return filepath
