"""Модели данных для ICO-контейнера и его записей.

Принципы:
- SRP: только структура данных, без логики обработки.
- Чистый код: неизменяемость (`frozen=True`) для предсказуемости.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Iterator, Optional, Tuple

from PIL import Image


@dataclass(frozen=True)
class IcoEntry:
    """Одна запись каталога ICO.

    Размеры и глубина цвета берутся из заголовка каталога, без декодирования.
    Сами пиксели получаются отдельным шагом `decode()`, который может упасть.

    Fields:
        index: Позиция записи в каталоге, начиная с 0.
        width: Ширина, px.
        height: Высота, px.
        bits_per_pixel: Глубина цвета из заголовка (0 для некоторых PNG-записей).
        decoder: Функция, возвращающая канонический растр (RGBA).
    """
    index: int
    width: int
    height: int
    bits_per_pixel: int
    decoder: Callable[[], Image.Image] = field(repr=False, compare=False)

    def decode(self) -> Image.Image:
        """Декодирует запись в канонический растр `PIL.Image.Image` в режиме RGBA."""
        return self.decoder()

    def describe(self) -> str:
        return f"{self.width}x{self.height} - {self.bits_per_pixel} bits per pixel"


@dataclass(frozen=True)
class IcoContainer:
    """Разобранный каталог ICO: упорядоченные записи и путь к источнику."""
    entries: Tuple[IcoEntry, ...]
    source: Optional[Path] = None

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[IcoEntry]:
        return iter(self.entries)

    def __getitem__(self, index: int) -> IcoEntry:
        return self.entries[index]
