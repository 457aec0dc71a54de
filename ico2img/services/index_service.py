"""Разрешение запроса выбора в упорядоченный список индексов записей.

Принципы:
- Ничего не «подрезается»: любой индекс за границами считается ошибкой.
- Список от пользователя сохраняет порядок и повторы как есть.
"""
from __future__ import annotations

import re
from typing import List, Tuple

from ico2img.models.selection import (
    AllSelection,
    ListSelection,
    RangeSelection,
    SelectionRequest,
    SingleSelection,
)
from ico2img.utils.errors import (
    EmptyContainerError,
    IndexOutOfBoundsError,
    InvalidRangeError,
    InvalidRangeFormatError,
    RangeOutOfBoundsError,
)

# Ровно две неотрицательные целые части через дефис
_RANGE_RE = re.compile(r"\s*(\d+)\s*-\s*(\d+)\s*", re.ASCII)


class IndexService:
    def resolve(self, request: SelectionRequest, total_entries: int) -> List[int]:
        """Возвращает индексы записей для запроса.

        Args:
            request: Один из вариантов `SelectionRequest`.
            total_entries: Число записей в контейнере.

        Returns:
            Индексы в порядке обработки.

        Raises:
            EmptyContainerError: если записей нет (кроме явно пустого списка).
            IndexOutOfBoundsError, InvalidRangeFormatError, InvalidRangeError,
            RangeOutOfBoundsError: при неверном выборе.
        """
        if isinstance(request, ListSelection) and not request.indices:
            return []
        if total_entries <= 0:
            raise EmptyContainerError()

        if isinstance(request, AllSelection):
            return list(range(total_entries))
        if isinstance(request, RangeSelection):
            start, end = self.parse_range(request.text)
            if end >= total_entries:
                raise RangeOutOfBoundsError(start, end, total_entries)
            return list(range(start, end + 1))
        if isinstance(request, ListSelection):
            for index in request.indices:
                self._check_index(index, total_entries)
            return list(request.indices)
        if isinstance(request, SingleSelection):
            self._check_index(request.index, total_entries)
            return [request.index]
        raise TypeError(f"Unknown selection request: {request!r}")

    def parse_range(self, text: str) -> Tuple[int, int]:
        """Разбирает `"начало-конец"`; начало не может быть больше конца."""
        match = _RANGE_RE.fullmatch(text)
        if match is None:
            raise InvalidRangeFormatError(text)
        start, end = int(match.group(1)), int(match.group(2))
        if start > end:
            raise InvalidRangeError(start, end)
        return start, end

    def _check_index(self, index: int, total_entries: int) -> None:
        if index < 0 or index >= total_entries:
            raise IndexOutOfBoundsError(index, total_entries)
