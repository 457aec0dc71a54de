"""Загрузка ICO-контейнеров и декодирование их записей через Pillow.

Принципы:
- SRP: класс отвечает только за разбор каталога и декодирование записи.
- Разбор каталога и кодеки остаются за Pillow (`IcoImagePlugin.IcoFile`);
  здесь лишь восстанавливается порядок записей и ошибки переводятся в свои.
"""
from __future__ import annotations

import io
import struct
from collections import defaultdict, deque
from functools import partial
from pathlib import Path
from typing import Deque, Dict, List, Optional

from PIL import IcoImagePlugin, Image

from ico2img.models.image_model import IcoContainer, IcoEntry
from ico2img.utils.errors import ContainerParseError
from ico2img.utils.logging import get_logger

logger = get_logger(__name__)

# Ошибки, которыми Pillow сообщает о битых или усечённых данных
_PIL_READ_ERRORS = (OSError, SyntaxError, ValueError, IndexError, EOFError, struct.error, Image.DecompressionBombError)

# ICONDIR и ICONDIRENTRY
_ICONDIR_SIZE = 6
_DIRENTRY_SIZE = 16
_DIRENTRY_FORMAT = "<BBBBHHII"


class ImageService:
    def load_container(self, file_path: str | Path) -> IcoContainer:
        """Читает ICO-файл с диска и разбирает его каталог.

        Args:
            file_path: Путь до ICO-файла.

        Returns:
            `IcoContainer` с записями в порядке каталога.

        Raises:
            FileNotFoundError: если путь не существует или не указывает на файл.
            ContainerParseError: если файл не является ICO.
        """
        path = Path(file_path)
        if not path.exists() or not path.is_file():
            raise FileNotFoundError(f"Файл не найден: {path}")
        return self.parse_container(path.read_bytes(), source=path)

    def parse_container(self, data: bytes, source: Optional[Path] = None) -> IcoContainer:
        """Разбирает байты ICO в `IcoContainer`.

        Pillow сортирует записи по размеру и глубине цвета, поэтому индексы
        берутся из самого каталога: смещение каждой записи сопоставляется
        с записью Pillow.
        """
        name = source if source is not None else "<bytes>"
        try:
            ico = IcoImagePlugin.IcoFile(io.BytesIO(data))
        except _PIL_READ_ERRORS as exc:
            raise ContainerParseError(f"Файл не является ICO: {name} ({exc})", {"source": str(name)}) from exc

        ordered = self._directory_order(ico, data)
        entries = []
        for index, pil_idx in enumerate(ordered):
            header = ico.entry[pil_idx]
            entries.append(
                IcoEntry(
                    index=index,
                    width=header.width,
                    height=header.height,
                    bits_per_pixel=header.bpp,
                    decoder=partial(self._decode_frame, ico, pil_idx),
                )
            )

        logger.debug("Parsed ICO directory %s: %d entries", source or "<bytes>", len(entries))
        return IcoContainer(entries=tuple(entries), source=source)

    def _directory_order(self, ico: IcoImagePlugin.IcoFile, data: bytes) -> List[int]:
        """Индексы записей Pillow в порядке каталога файла.

        Заголовок: 6 байт, затем по 16 байт на запись; смещение данных лежит
        в последних 4 байтах записи.
        """
        by_offset: Dict[int, Deque[int]] = defaultdict(deque)
        for pil_idx, header in enumerate(ico.entry):
            by_offset[header.offset].append(pil_idx)

        ordered = []
        for position in range(len(ico.entry)):
            *_, offset = struct.unpack_from(_DIRENTRY_FORMAT, data, _ICONDIR_SIZE + _DIRENTRY_SIZE * position)
            ordered.append(by_offset[offset].popleft())
        return ordered

    def _decode_frame(self, ico: IcoImagePlugin.IcoFile, pil_idx: int) -> Image.Image:
        """Декодирует кадр и приводит его к каноническому растру RGBA.

        Кадры делят один буфер, поэтому пиксели загружаются сразу.
        """
        frame = ico.frame(pil_idx)
        frame.load()
        if frame.mode == "RGBA":
            return frame.copy()
        return frame.convert("RGBA")
