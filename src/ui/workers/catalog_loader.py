# ui/workers/catalog_loader.py
import logging

from PySide6.QtCore import QThread, Signal

from core.catalog_client import CatalogClient
from core.errors import CatalogUnavailable

logger = logging.getLogger(__name__)


class TrackListLoader(QThread):
    loaded = Signal(str, object)    # folder, [Track]
    failed = Signal(str, str)       # folder, message

    def __init__(self, catalog: CatalogClient, folder: str, parent=None):
        super().__init__(parent)
        self.catalog = catalog
        self.folder = folder

    def run(self):
        try:
            tracks = self.catalog.list_tracks(self.folder)
        except CatalogUnavailable as e:
            logger.error("%s", e)
            self.failed.emit(self.folder, str(e))
            return
        self.loaded.emit(self.folder, tracks)


class AlbumListLoader(QThread):
    albumLoaded = Signal(object)       # Album, one per readable folder
    finished_signal = Signal(bool, str)  # ok, message

    def __init__(self, catalog: CatalogClient, with_covers: bool = True, parent=None):
        super().__init__(parent)
        self.catalog = catalog
        self.with_covers = with_covers

    def run(self):
        count = 0
        try:
            for album in self.catalog.iter_albums(with_covers=self.with_covers):
                count += 1
                self.albumLoaded.emit(album)
        except CatalogUnavailable as e:
            logger.error("%s", e)
            self.finished_signal.emit(False, f"Album listing failed: {e}")
            return
        self.finished_signal.emit(True, f"Loaded {count} album(s).")
