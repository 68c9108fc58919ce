"""
Yaban Veri Yapilari

Scrape edilen verilerin yapilandirilmis formatlari.
JSON ciktisindaki alan adlari (camelCase) to_dict() metodlarinda uretilir.

    PlaceRecord     - Tek bir mekan (restoran) kaydi
    RunResult       - Tek bir aramanin sonucu
    DistrictStatus  - Toplu taramada bir ilcenin durumu
    BatchSummary    - Toplu taramanin ozeti (summary.json)
"""

from dataclasses import dataclass, field
from typing import Any, Literal

STATUS_SUCCESS = "success"
STATUS_ERROR = "error"


@dataclass(frozen=True)
class PlaceRecord:
    """
    Scrape edilen mekan verisi.

    Extractor tarafindan bir kez olusturulur, sonrasinda degistirilmez.
    name ve place_id zorunludur, diger alanlar bulunamazsa None kalir.
    """

    place_id: str
    name: str
    url: str
    scraped_at: str
    address: str | None = None
    rating: float | None = None
    total_reviews: int | None = None
    category: str | None = None
    price_level: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """JSON ciktisi icin sozluk. None olan opsiyonel alanlar yazilmaz."""
        data: dict[str, Any] = {
            "placeId": self.place_id,
            "name": self.name,
            "address": self.address,
            "rating": self.rating,
            "totalReviews": self.total_reviews,
            "category": self.category,
            "priceLevel": self.price_level,
            "url": self.url,
            "scrapedAt": self.scraped_at,
        }
        return {k: v for k, v in data.items() if v is not None}


@dataclass
class RunResult:
    """Tek bir arama calismasinin sonucu"""

    query: str
    scraped_at: str
    places: list[PlaceRecord] = field(default_factory=list)
    district: str | None = None

    @property
    def total_results(self) -> int:
        return len(self.places)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {}
        if self.district is not None:
            data["district"] = self.district
        data.update({
            "query": self.query,
            "scrapedAt": self.scraped_at,
            "totalResults": self.total_results,
            "places": [place.to_dict() for place in self.places],
        })
        return data


@dataclass(frozen=True)
class DistrictStatus:
    """
    Toplu taramada tek bir ilcenin sonucu.

    Dogrudan degil, success() / failure() ile olusturulmalidir:
    hata durumunda places_found her zaman 0'dir.
    """

    name: str
    query: str
    places_found: int
    status: Literal["success", "error"]
    error: str | None = None

    @classmethod
    def success(cls, name: str, query: str, places_found: int) -> "DistrictStatus":
        return cls(name=name, query=query, places_found=places_found, status=STATUS_SUCCESS)

    @classmethod
    def failure(cls, name: str, query: str, error: str) -> "DistrictStatus":
        return cls(name=name, query=query, places_found=0, status=STATUS_ERROR, error=error)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "name": self.name,
            "query": self.query,
            "placesFound": self.places_found,
            "status": self.status,
        }
        if self.error is not None:
            data["error"] = self.error
        return data


@dataclass
class BatchSummary:
    """Toplu taramanin ozeti (summary.json icerigi)"""

    scraped_at: str
    output_directory: str
    total_districts: int
    districts: list[DistrictStatus] = field(default_factory=list)

    @property
    def successful(self) -> list[DistrictStatus]:
        return [d for d in self.districts if d.status == STATUS_SUCCESS]

    @property
    def failed(self) -> list[DistrictStatus]:
        return [d for d in self.districts if d.status == STATUS_ERROR]

    @property
    def total_places(self) -> int:
        return sum(d.places_found for d in self.districts)

    def top_districts(self, limit: int = 5) -> list[DistrictStatus]:
        """Basarili ilceleri bulunan mekan sayisina gore (azalan) siralar."""
        return sorted(self.successful, key=lambda d: d.places_found, reverse=True)[:limit]

    def to_dict(self) -> dict[str, Any]:
        return {
            "scrapedAt": self.scraped_at,
            "outputDirectory": self.output_directory,
            "totalDistricts": self.total_districts,
            "districts": [d.to_dict() for d in self.districts],
        }
