"""
Komut Satiri Testleri

Test Senaryolari:
1. Varsayilan argumanlar ve headless "false" kurali
2. Tek sorgu calismasi data/raw/ altina dosya yazar
3. Cikis kodlari (hata -> 1, Ctrl+C -> 0)
"""

import asyncio
import json
from unittest.mock import patch

import pytest

from yaban_scraper import settings
from yaban_scraper.cli import (
    build_fetch_all_parser,
    build_scrape_parser,
    fetch_all_main,
    parse_headless,
    run_single,
    scrape_main,
)


class TestArgumanlar:
    """argparse yapilandirmasi"""

    def test_scrape_varsayilanlari(self):
        args = build_scrape_parser().parse_args([])
        assert args.query == "halal restaurants in Tokyo"
        assert args.max_results == settings.DEFAULT_MAX_RESULTS
        assert args.headless is True

    def test_scrape_tum_argumanlar(self):
        args = build_scrape_parser().parse_args(["halal ramen shibuya", "5", "false"])
        assert args.query == "halal ramen shibuya"
        assert args.max_results == 5
        assert args.headless is False

    @pytest.mark.parametrize("deger, beklenen", [
        ("false", False),
        ("true", True),
        ("False", True),
        ("0", True),
    ])
    def test_sadece_false_headless_kapatir(self, deger, beklenen):
        assert parse_headless(deger) is beklenen

    def test_fetch_all_argumanlari(self):
        args = build_fetch_all_parser().parse_args(["15", "false"])
        assert args.max_results == 15
        assert args.headless is False

        varsayilan = build_fetch_all_parser().parse_args([])
        assert varsayilan.headless is True


class TestTekSorgu:
    """run_single"""

    def test_sonuc_dosyasi_yazilir(self, tmp_path, fake_scraper_class, places_factory):
        scraper = fake_scraper_class(places=places_factory(4))

        run = asyncio.run(run_single(
            "Halal Ramen", 4, headless=False, scraper=scraper, raw_dir=tmp_path,
        ))

        assert run.total_results == 4
        assert scraper.initialized_with == (False, settings.DEFAULT_SLOW_MO_MS)
        assert scraper.queries == [("Halal Ramen", 4)]
        assert scraper.close_calls == 1

        (dosya,) = tmp_path.iterdir()
        assert dosya.name.startswith("halal-ramen_")
        assert dosya.name.endswith("Z.json")
        veri = json.loads(dosya.read_text(encoding="utf-8"))
        assert veri["query"] == "Halal Ramen"
        assert veri["totalResults"] == 4
        assert "district" not in veri

    def test_arama_hatasinda_tarayici_kapatilir(self, tmp_path, fake_scraper_class):
        scraper = fake_scraper_class(error=RuntimeError("net::ERR_CONNECTION_RESET"))

        with pytest.raises(RuntimeError):
            asyncio.run(run_single("q", 1, True, scraper=scraper, raw_dir=tmp_path))

        assert scraper.close_calls == 1
        assert list(tmp_path.iterdir()) == []


class TestCikisKodlari:
    """scrape_main / fetch_all_main"""

    @pytest.fixture(autouse=True)
    def _log_yapilandirmasi_yok(self):
        with patch("yaban_scraper.cli.configure_logging"):
            yield

    def test_hata_kodu_1(self):
        with patch("yaban_scraper.cli.run_single", side_effect=RuntimeError("Tarayici acilamadi")):
            with pytest.raises(SystemExit) as exc:
                scrape_main(["q", "3"])
        assert exc.value.code == 1

    def test_ctrl_c_kodu_0(self):
        with patch("yaban_scraper.cli.run_single", side_effect=KeyboardInterrupt):
            with pytest.raises(SystemExit) as exc:
                scrape_main([])
        assert exc.value.code == 0

    def test_toplu_tarama_hata_kodu_1(self):
        with patch("yaban_scraper.cli.run_batch", side_effect=RuntimeError("disk dolu")):
            with pytest.raises(SystemExit) as exc:
                fetch_all_main(["5"])
        assert exc.value.code == 1
