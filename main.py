from __future__ import annotations

from pathlib import Path
import sys

from PySide6.QtWidgets import QApplication
from loguru import logger

from app.viewmodels.gallery_vm import GalleryVM
from app.viewmodels.home_vm import HomeVM
from app.views.main_window import MainWindow
from app.views.widgets.lightbox_widget import locale_date_text
from infrastructure.http_repository import HttpPhotoRepository
from infrastructure.image_service import ImageService
from infrastructure.logging import init_logging
from infrastructure.settings import JsonSettings

BASE_DIR = Path(__file__).parent


def main() -> int:
    init_logging()
    settings = JsonSettings(BASE_DIR / "settings.json")

    app = QApplication(sys.argv)

    base_url = str(settings.get("server.base_url"))
    timeout = settings.get_int("server.timeout_seconds", 10)
    logger.info("Viewer starting against {}", base_url)

    repo = HttpPhotoRepository(base_url, timeout=timeout)
    images = ImageService(base_url, timeout=timeout)
    home_vm = HomeVM(repo, date_formatter=locale_date_text)
    gallery_vm = GalleryVM(repo, date_formatter=locale_date_text)

    win = MainWindow(home_vm, gallery_vm, image_service=images, settings=settings)
    win.resize(1280, 860)
    win.show()
    win.reload_all()

    return app.exec()


if __name__ == "__main__":
    raise SystemExit(main())
