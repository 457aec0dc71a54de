"""Настройка логирования ico2img.

Принципы:
- Консольный вывод идёт через Rich в stderr и не смешивается с таблицами в stdout.
- Файл журнала подключается через настройки (`ICO2IMG_LOG_FILE`).
"""

import logging
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

from ico2img.config.settings import get_settings


def setup_logging(
    log_level: Optional[str] = None,
    log_file_path: Optional[Path] = None,
) -> None:
    """Настраивает корневой логгер.

    Args:
        log_level: Уровень логирования (по умолчанию из настроек).
        log_file_path: Путь к файлу журнала (по умолчанию из настроек).
    """
    settings = get_settings()

    log_level = log_level or settings.log_level
    log_file_path = log_file_path or settings.log_file

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers.clear()

    console_handler = RichHandler(
        console=Console(stderr=True),
        show_time=False,
        show_path=False,
        rich_tracebacks=True,
    )
    console_handler.setLevel(log_level)
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    root_logger.addHandler(console_handler)

    if log_file_path:
        file_handler = logging.FileHandler(log_file_path, encoding="utf-8")
        file_handler.setLevel(log_level)
        file_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        root_logger.addHandler(file_handler)

    # Pillow пишет в DEBUG каждый прочитанный чанк
    logging.getLogger("PIL").setLevel(logging.WARNING)

    logging.getLogger(__name__).debug(
        "Logging configured (level=%s, file=%s)", log_level, log_file_path
    )


def get_logger(name: str) -> logging.Logger:
    """Возвращает логгер модуля."""
    return logging.getLogger(name)
