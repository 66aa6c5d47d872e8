"""MainWindow hosting the home and gallery pages.

The window owns the shared task runner and routes background results (collection
loads and image loads) to the page that requested them.
"""

from __future__ import annotations

from typing import Any

from PySide6.QtCore import Signal
from PySide6.QtWidgets import QMainWindow, QTabWidget
from loguru import logger

from app.viewmodels.gallery_vm import GalleryVM
from app.viewmodels.home_vm import HomeVM
from app.views.components.menu_controller import MenuController
from app.views.constants import PAGE_GALLERY, PAGE_HOME, PAGE_TITLES
from app.views.gallery_page import GalleryPage
from app.views.home_page import HomePage
from app.views.image_tasks import ImageTaskRunner
from infrastructure.logging import open_latest_log, open_log_directory


class MainWindow(QMainWindow):
    """Main application window with one tab per portfolio page."""

    imageLoaded = Signal(str, str, object)  # token, url, QImage
    collectionLoaded = Signal(str, object)  # page key, LoadResult

    def __init__(
        self,
        home_vm: HomeVM,
        gallery_vm: GalleryVM,
        image_service: Any | None = None,
        settings: Any | None = None,
    ) -> None:
        """Initialize MainWindow with both page view-models.

        Args:
            home_vm: ViewModel for the filterable home grid
            gallery_vm: ViewModel for the grouped gallery
            image_service: Service used by background image tasks
            settings: Settings instance for configuration
        """
        super().__init__()
        self._settings = settings
        self._thumb_size = 320
        title = "Folio"
        if settings is not None:
            self._thumb_size = settings.get_int("gallery.thumbnail_size", 320)
            title = str(settings.get("window.title", title))
        self.setWindowTitle(title)

        self._runner = ImageTaskRunner(service=image_service, receiver=self)

        self.tabs = QTabWidget()
        self.home_page = HomePage(home_vm, self._runner, thumb_size=self._thumb_size)
        self.gallery_page = GalleryPage(gallery_vm, self._runner, thumb_size=self._thumb_size)
        self._pages = {PAGE_HOME: self.home_page, PAGE_GALLERY: self.gallery_page}
        for key, page in self._pages.items():
            self.tabs.addTab(page, PAGE_TITLES[key])
        self.setCentralWidget(self.tabs)

        self.menu_controller = MenuController(self)
        self.menu_controller.setup_menus()
        self.menu_controller.connect_actions(
            {
                "reload": self.reload_all,
                "exit": self.close,
                "show_home": lambda: self.tabs.setCurrentWidget(self.home_page),
                "show_gallery": lambda: self.tabs.setCurrentWidget(self.gallery_page),
                "open_latest_log": self._open_latest_log,
                "open_log_directory": open_log_directory,
            }
        )

        self.imageLoaded.connect(self._on_image_loaded)
        self.collectionLoaded.connect(self._on_collection_loaded)
        self.statusBar().showMessage("Ready", 3000)

    def reload_all(self) -> None:
        """Start one collection load per page."""
        for page in self._pages.values():
            page.start_load()
        self.statusBar().showMessage("Loading…")

    def _on_collection_loaded(self, page_key: str, result: Any) -> None:
        page = self._pages.get(page_key)
        if page is None:
            logger.warning("Collection result for unknown page: {}", page_key)
            return
        page.on_collection_loaded(result)
        if result.ok:
            self.statusBar().showMessage(f"{len(result.photos)} photos", 3000)
        else:
            self.statusBar().showMessage("Load failed", 5000)

    def _on_image_loaded(self, token: str, url: str, image: Any) -> None:
        owner = token.split("|", 2)[1] if token.startswith("thumb|") else None
        if owner is not None:
            page = self._pages.get(owner)
            if page is not None:
                page.on_image_loaded(token, url, image)
            return
        # full-size loads go to whichever lightbox is waiting for the token
        for page in self._pages.values():
            page.on_image_loaded(token, url, image)

    def _open_latest_log(self) -> None:
        if not open_latest_log():
            self.statusBar().showMessage("No log file found", 3000)
