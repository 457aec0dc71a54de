"""Контроллер приложения: оркестрация сервисов для одного запуска.

SOLID:
- SRP: класс связывает сервисы и файловую систему (без логики выбора и кодирования).
- DIP: сервисы подставляются полями dataclass, в тестах их можно заменить.
Clean Code:
- Вся проверка запроса и формата выполняется до первого декодирования.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple

from ico2img.config.settings import get_settings
from ico2img.models.image_model import IcoContainer
from ico2img.models.selection import (
    AllSelection,
    ListSelection,
    OutputSpec,
    RangeSelection,
    SelectionRequest,
    SingleSelection,
    TargetFormat,
)
from ico2img.services.config_service import ConfigService
from ico2img.services.conversion_service import ConversionService
from ico2img.services.image_service import ImageService
from ico2img.services.index_service import IndexService
from ico2img.utils.errors import ConversionError, InvalidIndexListError, OutputError, SelectionConflictError
from ico2img.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass
class ConversionReport:
    """Итог запуска: записанные файлы и ошибки по индексам (только в режиме keep-going)."""
    target: TargetFormat
    written: List[Tuple[int, Path]] = field(default_factory=list)
    failures: List[Tuple[int, ConversionError]] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures


@dataclass
class AppController:
    """Связывает выбор, конвертацию и запись результата.

    Ответственности:
    - Сборка `SelectionRequest` из параметров CLI (ровно один режим).
    - Выбор формата через `ConfigService`.
    - Загрузка контейнера, разрешение индексов, конвертация и запись файлов.
    """
    image_service: ImageService = field(default_factory=ImageService)
    index_service: IndexService = field(default_factory=IndexService)
    conversion_service: ConversionService = field(default_factory=ConversionService)
    config_service: ConfigService = field(default_factory=ConfigService)
    output_template: Optional[str] = None

    def build_request(
        self,
        index: Optional[int] = None,
        indices: Optional[str] = None,
        range_text: Optional[str] = None,
        extract_all: bool = False,
    ) -> SelectionRequest:
        """Собирает запрос выбора; без параметров берётся первая запись."""
        given = [
            name
            for name, value in (("index", index), ("indices", indices), ("range", range_text), ("all", extract_all or None))
            if value is not None
        ]
        if len(given) > 1:
            raise SelectionConflictError(given)

        if extract_all:
            return AllSelection()
        if range_text is not None:
            return RangeSelection(range_text)
        if indices is not None:
            return ListSelection(self.parse_index_list(indices))
        return SingleSelection(index if index is not None else 0)

    def parse_index_list(self, text: str) -> Tuple[int, ...]:
        parts = [part.strip() for part in text.split(",")]
        try:
            return tuple(int(part) for part in parts)
        except ValueError as exc:
            raise InvalidIndexListError(text) from exc

    def resolve_format(self, cli_format: str, config_path: Optional[Path] = None) -> TargetFormat:
        return self.config_service.resolve_format(cli_format, config_path)

    def inspect(self, input_path: Path) -> IcoContainer:
        container = self.image_service.load_container(input_path)
        logger.info("Number of entries in ICO file: %d", len(container))
        return container

    def run(
        self,
        input_path: Path,
        output: Path,
        request: SelectionRequest,
        target: TargetFormat,
        keep_going: bool = False,
    ) -> ConversionReport:
        """Конвертирует выбранные записи и пишет результат на диск.

        По умолчанию первая ошибка конвертации прерывает запуск; уже записанные
        файлы остаются. При `keep_going=True` ошибки копятся в отчёте.

        Raises:
            SelectionError: до создания каких-либо файлов.
            ConversionError: при первой ошибке конвертации (если не `keep_going`).
            OutputError: если каталог или файл результата не удаётся создать.
        """
        container = self.inspect(input_path)
        indices = self.index_service.resolve(request, len(container))
        logger.debug("Resolved indices: %s", indices)

        template = self.output_template or get_settings().output_template
        spec = OutputSpec.for_request(request, Path(output), stem=Path(input_path).stem, template=template)
        if spec.multiple:
            try:
                spec.path.mkdir(parents=True, exist_ok=True)
            except OSError as exc:
                raise OutputError(spec.path, exc) from exc

        report = ConversionReport(target=target)
        for index in indices:
            entry = container[index]
            try:
                data = self.conversion_service.convert(entry, target)
            except ConversionError as exc:
                if not keep_going:
                    raise
                logger.warning("Skipping entry #%d: %s", index, exc)
                report.failures.append((index, exc))
                continue

            destination = spec.destination_for(index, target)
            try:
                destination.write_bytes(data)
            except OSError as exc:
                raise OutputError(destination, exc) from exc
            report.written.append((index, destination))
            logger.info("Wrote entry #%d (%s) to %s", index, entry.describe(), destination)
        return report
