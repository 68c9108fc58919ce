"""
Yaban Kayit Pipeline'lari

Scrape edilen verilerin diske yazilmadan once gectigi adimlar:
    1. ValidationPipeline  - Zorunlu alan kontrolu
    2. JsonWriterPipeline  - Dogrulanmis calisma sonucunun JSON'a yazilmasi

ValidationPipeline process_item() metodunda kaydi dogrular,
gecersiz kayitlari DropItem ile eler.
"""

from dataclasses import replace
from pathlib import Path

from loguru import logger
from scrapy.exceptions import DropItem

from .items import BatchSummary, PlaceRecord, RunResult
from .storage import write_json


class ValidationPipeline:
    """
    Veri dogrulama pipeline'i.

    Extractor zaten eksik kayit uretmez; bu sinif kalici dosyaya
    yazilmadan onceki son kontroldur.
    """

    PLACE_REQUIRED_FIELDS = ["place_id", "name", "url"]

    def __init__(self) -> None:
        self.logger = logger.bind(pipeline="Validation")
        self.stats: dict[str, int] = {
            "kabul_edilen": 0,
            "reddedilen": 0,
        }

    def process_item(self, item: PlaceRecord) -> PlaceRecord:
        """
        Kaydi dogrular.

        Raises:
            DropItem: Zorunlu alan eksik veya bossa
        """
        for alan in self.PLACE_REQUIRED_FIELDS:
            deger = getattr(item, alan, None)
            if not deger or (isinstance(deger, str) and not deger.strip()):
                self.stats["reddedilen"] += 1
                raise DropItem(
                    f"Mekan zorunlu alan eksik: '{alan}' - "
                    f"placeId: {item.place_id!r}, name: {item.name!r}"
                )

        self.stats["kabul_edilen"] += 1
        return item

    def process_run(self, run: RunResult) -> RunResult:
        """Calisma sonucundaki gecersiz kayitlari eler, yeni RunResult dondurur."""
        gecerli: list[PlaceRecord] = []
        for place in run.places:
            try:
                gecerli.append(self.process_item(place))
            except DropItem as e:
                self.logger.warning(str(e))
        return replace(run, places=gecerli)


class JsonWriterPipeline:
    """Dogrulanmis sonuclari ve toplu tarama ozetini JSON olarak yazar."""

    def __init__(self, validation: ValidationPipeline | None = None) -> None:
        self.validation = validation or ValidationPipeline()
        self.logger = logger.bind(pipeline="JsonWriter")

    def write_run(self, path: Path | str, run: RunResult) -> RunResult:
        """
        Calisma sonucunu dogrulayip yazar.

        Returns:
            Diske yazilan (dogrulanmis) RunResult
        """
        run = self.validation.process_run(run)
        write_json(path, run.to_dict())
        self.logger.info(f"{run.total_results} mekan kaydedildi: {path}")
        return run

    def write_summary(self, path: Path | str, summary: BatchSummary) -> None:
        write_json(path, summary.to_dict())
        self.logger.info(f"Ozet kaydedildi: {path}")
