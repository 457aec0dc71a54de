"""Точка входа в приложение."""
from ico2img.ui.cli import app


def main() -> None:
    """Запускает интерфейс командной строки."""
    app()


if __name__ == "__main__":
    main()
