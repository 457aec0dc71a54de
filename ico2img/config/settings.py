"""Настройки запуска ico2img из переменных окружения.

Принципы:
- SRP: только значения по умолчанию и их источник (env, `.env`), без логики.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Настройки приложения (префикс `ICO2IMG_`, необязательный `.env`)."""

    model_config = SettingsConfigDict(
        env_prefix="ICO2IMG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Логирование
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "WARNING"
    log_file: Optional[Path] = None

    # Конвертация по умолчанию
    default_format: str = "png"
    output_template: str = "{stem}_{index}.{extension}"


@lru_cache
def get_settings() -> Settings:
    """Возвращает закэшированный экземпляр настроек."""
    return Settings()
