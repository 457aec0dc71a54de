"""Модели запроса: выбор записей, целевой формат и место назначения.

Принципы:
- Запрос выбора является закрытым объединением четырёх неизменяемых вариантов.
- Формат задан закрытым перечислением: после разбора строки кодировщик получает
  только значение из этого набора.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Tuple, Union

from ico2img.utils.errors import UnsupportedFormatError


class TargetFormat(Enum):
    PNG = ("PNG", "png")
    JPEG = ("JPEG", "jpg")
    BMP = ("BMP", "bmp")
    WEBP = ("WEBP", "webp")

    def __init__(self, pil_format: str, extension: str) -> None:
        self.pil_format = pil_format
        self.extension = extension

    @property
    def supports_alpha(self) -> bool:
        return self is not TargetFormat.JPEG

    @classmethod
    def parse(cls, name: str) -> "TargetFormat":
        """Разбирает имя формата без учёта регистра (`jpg` и `jpeg` равнозначны).

        Raises:
            UnsupportedFormatError: если имя не входит в набор форматов.
        """
        key = name.strip().lower()
        for fmt in cls:
            if key in (fmt.extension, fmt.pil_format.lower()):
                return fmt
        raise UnsupportedFormatError(name)


@dataclass(frozen=True)
class SingleSelection:
    index: int = 0


@dataclass(frozen=True)
class ListSelection:
    indices: Tuple[int, ...]


@dataclass(frozen=True)
class RangeSelection:
    """Включительный диапазон в текстовой форме `"начало-конец"`."""
    text: str


@dataclass(frozen=True)
class AllSelection:
    pass


SelectionRequest = Union[SingleSelection, ListSelection, RangeSelection, AllSelection]


@dataclass(frozen=True)
class OutputSpec:
    """Куда писать результат.

    Fields:
        path: Файл (одиночный режим) или каталог (остальные режимы).
        multiple: True, если имена файлов генерируются по шаблону.
        stem: Основа имени, обычно имя исходного ICO без расширения.
        template: Шаблон имени с полями `stem`, `index`, `extension`.
    """
    path: Path
    multiple: bool = False
    stem: str = "image"
    template: str = "{stem}_{index}.{extension}"

    @classmethod
    def for_request(cls, request: SelectionRequest, path: Path, stem: str, template: str = "{stem}_{index}.{extension}") -> "OutputSpec":
        return cls(path=path, multiple=not isinstance(request, SingleSelection), stem=stem, template=template)

    def destination_for(self, index: int, target: TargetFormat) -> Path:
        if not self.multiple:
            return self.path
        name = self.template.format(stem=self.stem, index=index, extension=target.extension)
        return self.path / name
