"""
Yaban Komut Satiri Giris Noktalari

Kullanim:
    yaban-scrape ["halal restaurants in Tokyo"] [20] [false]
    yaban-fetch-all [20] [false]

Son arguman "false" verilirse tarayici gorunur modda acilir.
"""

import argparse
import asyncio
import sys
from pathlib import Path

from loguru import logger

from . import settings
from .batch import DistrictBatchRunner, install_signal_handlers
from .items import RunResult
from .logging_config import configure_logging
from .pipelines import JsonWriterPipeline
from .scrapers import GoogleMapsScraper
from .storage import generate_filename, utc_now_iso


def parse_headless(value: str) -> bool:
    """Sadece "false" degeri headless modu kapatir."""
    return value != "false"


def build_scrape_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="yaban-scrape",
        description="Google Maps aramasindan mekan verisi toplar",
    )
    parser.add_argument("query", nargs="?", default=settings.DEFAULT_QUERY)
    parser.add_argument("max_results", nargs="?", type=int, default=settings.DEFAULT_MAX_RESULTS)
    parser.add_argument("headless", nargs="?", type=parse_headless, default=True)
    return parser


def build_fetch_all_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="yaban-fetch-all",
        description="Tokyo'nun tum ilceleri icin helal restoran taramasi",
    )
    parser.add_argument("max_results", nargs="?", type=int, default=settings.DEFAULT_MAX_RESULTS)
    parser.add_argument("headless", nargs="?", type=parse_headless, default=True)
    return parser


async def run_single(
    query: str,
    max_results: int,
    headless: bool,
    scraper: GoogleMapsScraper | None = None,
    writer: JsonWriterPipeline | None = None,
    raw_dir: Path = settings.RAW_DATA_DIR,
) -> RunResult:
    """Tek sorgu icin tarama yapar ve data/raw/ altina yazar."""
    scraper = scraper or GoogleMapsScraper()
    writer = writer or JsonWriterPipeline()

    logger.info("=" * 60)
    logger.info("Yaban - Google Maps Scraper")
    logger.info("=" * 60)
    logger.info(f"Sorgu      : {query}")
    logger.info(f"Maks sonuc : {max_results}")
    logger.info(f"Headless   : {headless}")
    logger.info("=" * 60)

    async with scraper:
        await scraper.initialize(headless=headless, slow_mo=settings.DEFAULT_SLOW_MO_MS)
        places = await scraper.search_places(query, max_results)

    run = RunResult(query=query, scraped_at=utc_now_iso(), places=places)
    filename = generate_filename(query)
    run = writer.write_run(raw_dir / filename, run)

    logger.info("=" * 60)
    logger.info("Tarama tamamlandi")
    logger.info(f"Toplam mekan : {run.total_results}")
    logger.info(f"Kayit dosyasi: {raw_dir / filename}")
    logger.info("=" * 60)

    for sira, place in enumerate(run.places[:3], start=1):
        logger.info(
            f"{sira}. {place.name} | puan: {place.rating or 'N/A'} "
            f"({place.total_reviews or 0} yorum) | "
            f"kategori: {place.category or 'N/A'} | fiyat: {place.price_level or 'N/A'}"
        )

    return run


async def run_batch(max_results: int, headless: bool) -> DistrictBatchRunner:
    runner = DistrictBatchRunner(max_results=max_results, headless=headless)
    install_signal_handlers(runner.context)
    await runner.run()
    if runner.context.shutdown_task is not None:
        await runner.context.shutdown_task
    return runner


def scrape_main(argv: list[str] | None = None) -> None:
    """yaban-scrape giris noktasi"""
    args = build_scrape_parser().parse_args(argv)
    configure_logging()

    try:
        asyncio.run(run_single(args.query, args.max_results, args.headless))
    except KeyboardInterrupt:
        logger.warning("Kullanici tarafindan durduruldu")
        sys.exit(0)
    except Exception as e:
        logger.exception(f"Tarama sirasinda hata: {e}")
        sys.exit(1)


def fetch_all_main(argv: list[str] | None = None) -> None:
    """yaban-fetch-all giris noktasi"""
    args = build_fetch_all_parser().parse_args(argv)
    configure_logging()

    try:
        runner = asyncio.run(run_batch(args.max_results, args.headless))
    except KeyboardInterrupt:
        logger.warning("Kullanici tarafindan durduruldu")
        sys.exit(0)
    except Exception as e:
        logger.exception(f"Toplu tarama sirasinda kritik hata: {e}")
        sys.exit(1)

    if runner.context.shutting_down:
        logger.info("Duzgun sekilde cikiliyor")


if __name__ == "__main__":
    scrape_main()
