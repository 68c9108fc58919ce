"""
Ilce Bazli Toplu Tarama

Tokyo'nun ilceleri icin sirayla Google Maps aramasi yapar.
Her ilce icin:
    - Yeni tarayici oturumu acilir (ilceler arasi izolasyon)
    - Arama -> scroll -> veri cikarma yapilir
    - Sonuc places-<ilce>-tokyo.json dosyasina yazilir
    - Tarayici her durumda kapatilir

Bir ilcedeki hata diger ilceleri durdurmaz; hata ozet dosyasina
(summary.json) yazilir. Ilceler arasi rastgele bekleme (3-5 sn)
bot algilama riskini azaltir.
"""

import asyncio
import random
import signal
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable

from loguru import logger

from . import settings
from .items import BatchSummary, DistrictStatus, RunResult
from .pipelines import JsonWriterPipeline
from .scrapers import BaseScraper, GoogleMapsScraper
from .storage import district_filename, timestamped_dir_name, utc_now_iso

ScraperFactory = Callable[[], BaseScraper]

batch_logger = logger.bind(component="DistrictBatch")


@dataclass
class OrchestrationContext:
    """
    Toplu taramanin degisken durumu.

    Sinyal handler'i acik olan oturuma sadece current_scraper uzerinden
    erisir; shutting_down bayragi ilceler arasinda kontrol edilir,
    stop_event ilceler arasi beklemeyi erken bitirir.
    """

    current_scraper: BaseScraper | None = None
    shutting_down: bool = False
    statuses: list[DistrictStatus] = field(default_factory=list)
    shutdown_task: "asyncio.Task[None] | None" = None
    stop_event: asyncio.Event = field(default_factory=asyncio.Event)

    def begin_run(self) -> list[DistrictStatus]:
        """Yeni calisma icin durum listesini ve bekleme olayini sifirlar."""
        self.statuses = []
        self.stop_event = asyncio.Event()
        if self.shutting_down:
            self.stop_event.set()
        return self.statuses

    def request_shutdown(self) -> bool:
        """Kapanis bayragini kaldirir. Ilk cagrida True, sonrakilerde False doner."""
        if self.shutting_down:
            return False
        self.shutting_down = True
        self.stop_event.set()
        return True

    async def close_current(self) -> None:
        """Acik tarayiciyi kapatmayi dener (best-effort)."""
        scraper = self.current_scraper
        if scraper is None:
            return
        try:
            await scraper.close()
            batch_logger.info("Tarayici kapatildi")
        except Exception as e:
            batch_logger.error(f"Tarayici kapatma hatasi: {e}")


def handle_shutdown_signal(context: OrchestrationContext, signame: str) -> None:
    """SIGINT/SIGTERM: yeni ilce baslatma, acik tarayiciyi kapat."""
    if not context.request_shutdown():
        return

    batch_logger.warning(f"Kapanis sinyali alindi ({signame}), tarayici kapatiliyor...")
    context.shutdown_task = asyncio.get_running_loop().create_task(context.close_current())


def install_signal_handlers(context: OrchestrationContext) -> None:
    """Calisan event loop'a kapanis sinyali handler'larini ekler."""
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, handle_shutdown_signal, context, sig.name)
        except NotImplementedError:
            # Windows: KeyboardInterrupt ile kapanis CLI katmaninda yakalanir
            batch_logger.debug(f"{sig.name} icin sinyal handler'i desteklenmiyor")


class DistrictBatchRunner:
    """
    Ilce listesini sirayla tarar.

    Args:
        districts: Taranacak ilce adlari (sirali)
        max_results: Ilce basina hedef sonuc sayisi
        headless: Tarayici penceresiz mi calissin
        output_root: Zaman damgali cikti dizininin olusturulacagi kok dizin
        scraper_factory: Her ilce icin yeni scraper ureten fonksiyon
        delay_range: Ilceler arasi bekleme araligi (saniye)
        slow_mo: Playwright islemleri arasi gecikme (ms)
    """

    def __init__(
        self,
        districts: list[str] | None = None,
        max_results: int = settings.DEFAULT_MAX_RESULTS,
        headless: bool = True,
        output_root: Path | str = settings.RAW_DATA_DIR,
        scraper_factory: ScraperFactory = GoogleMapsScraper,
        delay_range: tuple[float, float] = settings.DISTRICT_DELAY_RANGE,
        slow_mo: int = settings.DEFAULT_SLOW_MO_MS,
        query_template: str = settings.DISTRICT_QUERY_TEMPLATE,
        writer: JsonWriterPipeline | None = None,
        context: OrchestrationContext | None = None,
    ) -> None:
        self.districts = list(districts if districts is not None else settings.TOKYO_DISTRICTS)
        self.max_results = max_results
        self.headless = headless
        self.output_root = Path(output_root)
        self.scraper_factory = scraper_factory
        self.delay_range = delay_range
        self.slow_mo = slow_mo
        self.query_template = query_template
        self.writer = writer or JsonWriterPipeline()
        self.context = context or OrchestrationContext()

        self.output_dir: Path | None = None

    async def run(self) -> BatchSummary:
        """
        Tum ilceleri tarar ve ozeti dondurur.

        Kapanis sinyali geldiyse kalan ilceler atlanir ve summary.json yazilmaz.
        """
        dir_name = timestamped_dir_name()
        self.output_dir = self.output_root / dir_name
        self.output_dir.mkdir(parents=True, exist_ok=True)

        summary = BatchSummary(
            scraped_at=utc_now_iso(),
            output_directory=dir_name,
            total_districts=len(self.districts),
            districts=self.context.begin_run(),
        )

        batch_logger.info("=" * 70)
        batch_logger.info("Yaban - Tokyo geneli helal restoran taramasi")
        batch_logger.info("=" * 70)
        batch_logger.info(f"Taranacak ilce sayisi : {len(self.districts)}")
        batch_logger.info(f"Ilce basina maks sonuc: {self.max_results}")
        batch_logger.info(f"Headless              : {self.headless}")
        batch_logger.info(f"Cikti dizini          : {self.output_dir}")
        batch_logger.info("=" * 70)

        toplam = len(self.districts)
        for sira, district in enumerate(self.districts, start=1):
            if self.context.shutting_down:
                break

            status = await self.scrape_district(district, f"[{sira}/{toplam}]")
            self.context.statuses.append(status)

            if sira < toplam and not self.context.shutting_down:
                await self._wait_between_districts()

        if self.context.shutting_down:
            batch_logger.warning(
                f"Tarama yarida kesildi: {len(summary.districts)}/{toplam} ilce islendi"
            )
            return summary

        self.writer.write_summary(self.output_dir / "summary.json", summary)
        self._log_summary(summary)
        return summary

    async def scrape_district(self, district: str, progress: str = "") -> DistrictStatus:
        """
        Tek bir ilceyi yeni bir tarayici oturumuyla tarar.

        Hatalar burada yakalanir ve error durumu olarak dondurulur.
        """
        query = self.query_template.format(district=district)
        batch_logger.info(f"{progress} Taraniyor: {district} (sorgu: {query!r})")

        scraper = self.scraper_factory()
        self.context.current_scraper = scraper

        try:
            await scraper.initialize(headless=self.headless, slow_mo=self.slow_mo)
            places = await scraper.search_places(query, self.max_results)

            run = RunResult(
                query=query,
                scraped_at=utc_now_iso(),
                places=places,
                district=district,
            )
            run = self.writer.write_run(self.output_dir / district_filename(district), run)

            batch_logger.info(f"{progress} {district}: {run.total_results} mekan bulundu")
            return DistrictStatus.success(district, query, run.total_results)

        except Exception as e:
            batch_logger.error(f"{progress} {district} taranirken hata: {type(e).__name__}: {e}")
            return DistrictStatus.failure(district, query, str(e))

        finally:
            # Tarayici her ilceden sonra kapatilir
            try:
                await scraper.close()
            except Exception as e:
                batch_logger.error(f"Tarayici kapatma hatasi: {e}")
            self.context.current_scraper = None

    async def _wait_between_districts(self) -> None:
        bekleme = random.uniform(*self.delay_range)
        if bekleme <= 0:
            return
        batch_logger.info(f"Sonraki ilce icin {bekleme:.1f}s bekleniyor...")
        # Kapanis sinyali beklemeyi erken bitirir
        try:
            await asyncio.wait_for(self.context.stop_event.wait(), timeout=bekleme)
            batch_logger.info("Kapanis istendi, bekleme kesildi")
        except asyncio.TimeoutError:
            pass

    def _log_summary(self, summary: BatchSummary) -> None:
        """Toplu tarama sonunda ozet istatistikleri ve ilk 5 ilceyi loglar."""
        batch_logger.info("=" * 70)
        batch_logger.info("Toplu tarama tamamlandi")
        batch_logger.info("=" * 70)
        batch_logger.info(f"  Taranan ilce   : {len(summary.districts)}")
        batch_logger.info(f"  Basarili       : {len(summary.successful)}")
        batch_logger.info(f"  Basarisiz      : {len(summary.failed)}")
        batch_logger.info(f"  Toplam mekan   : {summary.total_places}")
        batch_logger.info(f"  Cikti dizini   : {self.output_dir}")
        batch_logger.info("=" * 70)

        batch_logger.info("En cok helal restoran bulunan ilceler:")
        for sira, status in enumerate(summary.top_districts(5), start=1):
            batch_logger.info(f"  {sira}. {status.name}: {status.places_found} mekan")
