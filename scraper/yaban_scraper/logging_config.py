"""
Loglama yapilandirmasi

Proje genelinde loguru kullanilir. Playwright ve asyncio gibi
standart logging kullanan kutuphanelerin kayitlari da loguru'ya yonlendirilir.
"""

import logging
import sys
from pathlib import Path

from loguru import logger

from . import settings


class InterceptHandler(logging.Handler):
    """Standart logging kayitlarini loguru'ya aktarir."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Cagiran frame'i bul (logging modulunun kendi frame'lerini atla)
        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )


def configure_logging(
    level: str = settings.LOG_LEVEL,
    log_file: str | None = settings.LOG_FILE,
) -> None:
    """
    Konsol ve dosya log hedeflerini ayarlar.

    Args:
        level: Minimum log seviyesi (DEBUG, INFO, WARNING...)
        log_file: Log dosyasi yolu. None ise sadece konsola yazilir.
    """
    # Varsayilan handler'i kaldir (cift log olmasin)
    logger.remove()

    logger.add(
        sys.stderr,
        level=level,
        format=(
            "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | "
            "<cyan>{extra}</cyan> - <level>{message}</level>"
        ),
    )

    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_file,
            rotation="10 MB",
            retention="10 days",
            level=level,
            encoding="utf-8",
            format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} | {extra} - {message}",
            backtrace=True,
            diagnose=False,
        )

    logging.basicConfig(handlers=[InterceptHandler()], level=logging.INFO, force=True)
    for logger_name in ("playwright", "asyncio"):
        logging.getLogger(logger_name).handlers = [InterceptHandler()]
        logging.getLogger(logger_name).propagate = False
