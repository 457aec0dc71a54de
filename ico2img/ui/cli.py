"""Интерфейс командной строки: конвертация записей ICO и просмотр каталога.

Принципы:
- SRP: только разбор параметров и вывод; работа делегируется `AppController`.
- Любая ошибка ico2img превращается в одну строку и код выхода 1.
"""

from pathlib import Path
from typing import NoReturn, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ico2img.config.settings import get_settings
from ico2img.controllers.app_controller import AppController
from ico2img.models.image_model import IcoContainer
from ico2img.utils.errors import Ico2ImgError
from ico2img.utils.logging import setup_logging

app = typer.Typer(
    name="ico2img",
    help="Извлечение изображений из ICO-файлов в PNG, JPEG, BMP и WEBP",
    add_completion=False,
)
console = Console(soft_wrap=True)
err_console = Console(stderr=True, soft_wrap=True)


def _fail(message: str) -> NoReturn:
    err_console.print(f"[bold red]Ошибка:[/] {escape(message)}")
    raise typer.Exit(1)


def _entries_table(container: IcoContainer) -> Table:
    table = Table(title=str(container.source) if container.source else None)
    table.add_column("#", justify="right")
    table.add_column("Размер")
    table.add_column("Бит на пиксель", justify="right")
    for entry in container:
        table.add_row(str(entry.index), f"{entry.width}x{entry.height}", str(entry.bits_per_pixel))
    return table


@app.command()
def convert(
    file: Path = typer.Argument(..., help="Путь к ICO-файлу."),
    output: Path = typer.Option(..., "--output", "-o", help="Файл результата (одна запись) или каталог (несколько записей)."),
    index: Optional[int] = typer.Option(None, "--index", "-i", help="Индекс конвертируемого изображения (по умолчанию 0)."),
    indices: Optional[str] = typer.Option(None, "--indices", "-l", help="Список индексов через запятую, например 0,2,3."),
    range_text: Optional[str] = typer.Option(None, "--range", "-r", help="Включительный диапазон индексов, например 0-3."),
    extract_all: bool = typer.Option(False, "--all", "-a", help="Извлечь все изображения."),
    format_name: Optional[str] = typer.Option(None, "--format", "-f", help="Формат результата: png, jpg, bmp, webp."),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="TOML-конфигурация; её ico2img.format важнее --format."),
    keep_going: bool = typer.Option(False, "--keep-going", help="Продолжать после ошибки конвертации записи."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Подробный вывод."),
):
    """Конвертировать изображения из ICO-файла."""
    settings = get_settings()
    setup_logging("DEBUG" if verbose else None)
    controller = AppController(output_template=settings.output_template)

    try:
        request = controller.build_request(index=index, indices=indices, range_text=range_text, extract_all=extract_all)
        target = controller.resolve_format(format_name or settings.default_format, config)
        if verbose:
            container = controller.inspect(file)
            console.print(f"Number of entries in ICO file: {len(container)}")
            for i in controller.index_service.resolve(request, len(container)):
                console.print(f"Image #{i} details: {container[i].describe()}")
        report = controller.run(file, output, request, target, keep_going=keep_going)
    except (Ico2ImgError, FileNotFoundError) as exc:
        _fail(str(exc))

    for idx, path in report.written:
        console.print(f"[green]✓[/] #{idx} -> {path}")
    if not report.ok:
        for idx, exc in report.failures:
            err_console.print(f"[bold red]✗[/] #{idx}: {exc}")
        raise typer.Exit(1)


@app.command()
def info(
    file: Path = typer.Argument(..., help="Путь к ICO-файлу."),
):
    """Показать записи ICO-файла."""
    setup_logging()
    try:
        container = AppController().inspect(file)
    except (Ico2ImgError, FileNotFoundError) as exc:
        _fail(str(exc))

    console.print(f"Number of entries in ICO file: {len(container)}")
    if len(container):
        console.print(_entries_table(container))
