"""Точка входа в приложение."""
import argparse
from typing import List, Optional

from dotenv import load_dotenv

from pastie.app import PastieApp
from pastie.config import AppConfig
from pastie.services.log_service import configure_logging


def main(argv: Optional[List[str]] = None) -> None:
    """Создаёт и запускает главное окно; пути из командной строки загружаются сразу."""
    parser = argparse.ArgumentParser(prog="pastie", description="Просмотр и аннотирование изображений")
    parser.add_argument("images", nargs="*", help="файлы изображений для загрузки")
    args = parser.parse_args(argv)

    load_dotenv()
    config = AppConfig.from_env()
    configure_logging(config)

    app = PastieApp(config)
    if args.images:
        app.controller.load(args.images)
    app.mainloop()


if __name__ == "__main__":
    main()
