"""Иерархия исключений ico2img.

Принципы:
- Каждое исключение несёт человекочитаемое сообщение и словарь `details`
  (индекс, границы, имя формата), чтобы CLI мог вывести одну понятную строку.
- Ошибки выбора и формата возникают до декодирования; ошибки конвертации
  относятся к конкретной записи контейнера.
"""
from __future__ import annotations

from pathlib import Path
from typing import Any, Optional


class Ico2ImgError(Exception):
    """Базовое исключение для всех ошибок ico2img."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        return self.message


# ---------- Выбор индексов ----------
class SelectionError(Ico2ImgError):
    """Базовая ошибка разрешения индексов."""


class EmptyContainerError(SelectionError):
    def __init__(self) -> None:
        super().__init__("ICO-файл не содержит изображений", {"total_entries": 0})


class IndexOutOfBoundsError(SelectionError):
    def __init__(self, index: int, total_entries: int) -> None:
        message = f"Неверный индекс изображения: {index} (доступно записей: {total_entries}, допустимо 0..{total_entries - 1})"
        super().__init__(message, {"index": index, "total_entries": total_entries})
        self.index = index
        self.total_entries = total_entries


class RangeOutOfBoundsError(SelectionError):
    def __init__(self, start: int, end: int, total_entries: int) -> None:
        message = f"Диапазон {start}-{end} выходит за границы (доступно записей: {total_entries}, последний индекс {total_entries - 1})"
        super().__init__(message, {"start": start, "end": end, "total_entries": total_entries})
        self.start = start
        self.end = end
        self.total_entries = total_entries


class InvalidRangeError(SelectionError):
    def __init__(self, start: int, end: int) -> None:
        message = f"Начало диапазона больше конца: {start}-{end}"
        super().__init__(message, {"start": start, "end": end})
        self.start = start
        self.end = end


class InvalidRangeFormatError(SelectionError):
    def __init__(self, text: str) -> None:
        message = f"Неверный формат диапазона: {text!r} (ожидается 'начало-конец', например '0-3')"
        super().__init__(message, {"text": text})
        self.text = text


class InvalidIndexListError(SelectionError):
    def __init__(self, text: str) -> None:
        message = f"Неверный список индексов: {text!r} (ожидаются целые числа через запятую, например '0,2,3')"
        super().__init__(message, {"text": text})
        self.text = text


class SelectionConflictError(SelectionError):
    def __init__(self, modes: list[str]) -> None:
        message = f"Можно указать только один способ выбора изображений, получено: {', '.join(modes)}"
        super().__init__(message, {"modes": modes})
        self.modes = modes


# ---------- Формат и конфигурация ----------
class FormatError(Ico2ImgError):
    """Базовая ошибка выбора целевого формата."""


class UnsupportedFormatError(FormatError):
    def __init__(self, name: str) -> None:
        message = f"Формат не поддерживается: {name!r} (доступны: png, jpg, bmp, webp)"
        super().__init__(message, {"format": name})
        self.name = name


class FormatNotSpecifiedError(FormatError):
    def __init__(self, config_path: Path) -> None:
        message = f"Формат вывода не указан в конфигурации: {config_path} (ожидается ключ ico2img.format)"
        super().__init__(message, {"config_path": str(config_path)})
        self.config_path = config_path


class ConfigError(Ico2ImgError):
    """Файл конфигурации не читается или не является корректным TOML."""


# ---------- Контейнер ----------
class ContainerParseError(Ico2ImgError):
    """Данные не являются каталогом ICO."""


# ---------- Запись результата ----------
class OutputError(Ico2ImgError):
    def __init__(self, path: Path, cause: OSError) -> None:
        message = f"Не удалось записать результат: {path} ({cause.strerror or cause})"
        super().__init__(message, {"path": str(path), "cause": repr(cause)})
        self.path = path
        self.cause = cause


# ---------- Конвертация ----------
class ConversionError(Ico2ImgError):
    """Базовая ошибка конвертации одной записи."""


class DecodeFailedError(ConversionError):
    def __init__(self, index: int, cause: BaseException) -> None:
        message = f"Не удалось декодировать изображение #{index}: {cause}"
        super().__init__(message, {"index": index, "cause": repr(cause)})
        self.index = index
        self.cause = cause


class EncodeFailedError(ConversionError):
    def __init__(self, format_name: str, cause: BaseException | str) -> None:
        message = f"Не удалось закодировать изображение в {format_name}: {cause}"
        super().__init__(message, {"format": format_name, "cause": str(cause)})
        self.format_name = format_name
        self.cause = cause
