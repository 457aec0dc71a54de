"""Выбор целевого формата: флаг CLI или переопределение из TOML-конфигурации.

Файл конфигурации, если указан, побеждает флаг CLI на весь запуск:

    [ico2img]
    format = "bmp"
"""
from __future__ import annotations

import tomllib
from pathlib import Path
from typing import Any, Optional

from ico2img.models.selection import TargetFormat
from ico2img.utils.errors import ConfigError, FormatNotSpecifiedError, UnsupportedFormatError
from ico2img.utils.logging import get_logger

logger = get_logger(__name__)

CONFIG_SECTION = "ico2img"
CONFIG_FORMAT_KEY = "format"


class ConfigService:
    def load_config(self, config_path: str | Path) -> dict[str, Any]:
        """Читает TOML-документ.

        Raises:
            ConfigError: если файл не читается или не является корректным TOML.
        """
        path = Path(config_path)
        try:
            with path.open("rb") as fh:
                return tomllib.load(fh)
        except OSError as exc:
            raise ConfigError(f"Не удалось прочитать конфигурацию: {path} ({exc})", {"config_path": str(path)}) from exc
        except tomllib.TOMLDecodeError as exc:
            raise ConfigError(f"Некорректный TOML в {path}: {exc}", {"config_path": str(path)}) from exc

    def format_from_config(self, config_path: str | Path) -> TargetFormat:
        path = Path(config_path)
        config = self.load_config(path)
        section = config.get(CONFIG_SECTION)
        if not isinstance(section, dict) or CONFIG_FORMAT_KEY not in section:
            raise FormatNotSpecifiedError(path)
        value = section[CONFIG_FORMAT_KEY]
        if not isinstance(value, str):
            raise UnsupportedFormatError(repr(value))
        return TargetFormat.parse(value)

    def resolve_format(self, cli_format: str, config_path: Optional[str | Path] = None) -> TargetFormat:
        """Определяет формат запуска до любой работы с записями.

        Имя из CLI проверяется всегда, даже если его перекрывает конфигурация.
        """
        cli_target = TargetFormat.parse(cli_format)
        if config_path is None:
            return cli_target
        target = self.format_from_config(config_path)
        if target is not cli_target:
            logger.info("Format %s from %s overrides --format %s", target.extension, config_path, cli_target.extension)
        return target
