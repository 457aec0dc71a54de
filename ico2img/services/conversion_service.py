"""Конвейер конвертации: запись ICO -> канонический растр RGBA -> байты формата.

Принципы:
- SRP: только декодирование и кодирование, без файлового ввода-вывода.
- Формат выбирается из закрытого перечисления, диспетчеризация по словарю
  без ветки «по умолчанию».
"""
from __future__ import annotations

import io
from typing import Callable, Dict

import numpy as np
from PIL import Image

from ico2img.models.image_model import IcoEntry
from ico2img.models.selection import TargetFormat
from ico2img.utils.errors import DecodeFailedError, EncodeFailedError
from ico2img.utils.logging import get_logger

logger = get_logger(__name__)


class ConversionService:
    def __init__(self) -> None:
        self._encoders: Dict[TargetFormat, Callable[[Image.Image], bytes]] = {
            TargetFormat.PNG: self._encode_png,
            TargetFormat.JPEG: self._encode_jpeg,
            TargetFormat.BMP: self._encode_bmp,
            TargetFormat.WEBP: self._encode_webp,
        }

    def convert(self, entry: IcoEntry, target: TargetFormat) -> bytes:
        """Конвертирует одну запись контейнера в байты целевого формата.

        Raises:
            DecodeFailedError: запись битая или её глубина цвета не поддерживается.
            EncodeFailedError: кодировщик отверг растр.
        """
        try:
            raster = entry.decode()
        except Exception as exc:
            raise DecodeFailedError(entry.index, exc) from exc

        data = self.encode(raster, target)
        logger.debug("Entry #%d (%dx%d) -> %s, %d bytes", entry.index, raster.width, raster.height, target.pil_format, len(data))
        return data

    def encode(self, raster: Image.Image, target: TargetFormat) -> bytes:
        """Кодирует канонический растр в `target`."""
        if raster.width == 0 or raster.height == 0:
            raise EncodeFailedError(target.pil_format, f"пустой растр {raster.width}x{raster.height}")
        try:
            return self._encoders[target](raster)
        except (OSError, ValueError, SystemError) as exc:
            raise EncodeFailedError(target.pil_format, exc) from exc

    # ---------- Кодировщики ----------
    def _encode_png(self, raster: Image.Image) -> bytes:
        # PNG является родным промежуточным представлением
        return self._save(raster, TargetFormat.PNG)

    def _encode_jpeg(self, raster: Image.Image) -> bytes:
        return self._save(self.drop_alpha(raster), TargetFormat.JPEG)

    # BMP и WEBP хранят альфу, растр передаётся без изменений
    def _encode_bmp(self, raster: Image.Image) -> bytes:
        return self._save(raster, TargetFormat.BMP)

    def _encode_webp(self, raster: Image.Image) -> bytes:
        return self._save(raster, TargetFormat.WEBP)

    def _save(self, image: Image.Image, target: TargetFormat) -> bytes:
        buffer = io.BytesIO()
        image.save(buffer, format=target.pil_format)
        return buffer.getvalue()

    # ---------- Вспомогательные функции ----------
    def drop_alpha(self, raster: Image.Image) -> Image.Image:
        """
        Отбрасывает альфа-канал: RGBA -> RGB без смешивания с фоном.
        Цвет полностью прозрачного пикселя сохраняется как есть.
        """
        arr = np.asarray(raster.convert("RGBA"), dtype=np.uint8)
        rgb = np.ascontiguousarray(arr[..., :3])
        return Image.fromarray(rgb)
