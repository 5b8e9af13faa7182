# ui/album_list_widget.py
from __future__ import annotations

from typing import Iterable

from PySide6.QtCore import Qt, Signal, QSize, QModelIndex
from PySide6.QtGui import QStandardItem, QStandardItemModel, QPixmap, QIcon
from PySide6.QtWidgets import QWidget, QVBoxLayout, QListView, QMenu

from core.models import Album

COVER_SIZE = 140


class AlbumListWidget(QWidget):
    # Emit folder_id when user wants to open an album
    openAlbum = Signal(str)

    def __init__(self):
        super().__init__()
        self._albums: list[Album] = []

        self.view = QListView()
        self.model = QStandardItemModel(self)
        self.view.setModel(self.model)

        self.view.setViewMode(QListView.ViewMode.IconMode)
        self.view.setResizeMode(QListView.ResizeMode.Adjust)
        self.view.setMovement(QListView.Movement.Static)
        self.view.setIconSize(QSize(COVER_SIZE, COVER_SIZE))
        self.view.setGridSize(QSize(COVER_SIZE + 40, COVER_SIZE + 70))
        self.view.setWordWrap(True)
        self.view.setSpacing(8)
        self.view.setObjectName("AlbumCards")

        self._apply_styles()

        self.view.clicked.connect(self._on_click)

        self.view.setContextMenuPolicy(Qt.ContextMenuPolicy.CustomContextMenu)
        self.view.customContextMenuRequested.connect(self._on_context_menu)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.addWidget(self.view)

    # -------------------------
    # External API
    # -------------------------

    def clear(self):
        self._albums = []
        self.model.clear()

    def add_album(self, album: Album):
        self._albums.append(album)
        self.set_albums(self._albums)

    def set_albums(self, albums: Iterable[Album]):
        """Render the whole card list from scratch."""
        self._albums = list(albums)
        self.model.clear()
        for a in self._albums:
            self.model.appendRow(self._card(a))

    def albums(self) -> list[Album]:
        return list(self._albums)

    # -------------------------
    # UI Events
    # -------------------------

    def _folder_at(self, index: QModelIndex):
        if not index.isValid():
            return None
        return index.data(Qt.ItemDataRole.UserRole)

    def _on_click(self, index: QModelIndex):
        folder_id = self._folder_at(index)
        if folder_id:
            self.openAlbum.emit(str(folder_id))

    def _on_context_menu(self, pos):
        folder_id = self._folder_at(self.view.indexAt(pos))
        if not folder_id:
            return

        menu = QMenu(self)
        act_open = menu.addAction("Play album")

        chosen = menu.exec(self.view.viewport().mapToGlobal(pos))
        if chosen == act_open:
            self.openAlbum.emit(str(folder_id))

    # -------------------------
    # Helpers
    # -------------------------

    def _card(self, album: Album) -> QStandardItem:
        text = album.title
        if album.description:
            text = f"{album.title}\n{album.description}" if album.title else album.description

        it = QStandardItem(text)
        it.setEditable(False)
        it.setData(album.folder_id, Qt.ItemDataRole.UserRole)
        it.setToolTip(album.description or album.title)
        it.setTextAlignment(Qt.AlignmentFlag.AlignHCenter | Qt.AlignmentFlag.AlignTop)

        if album.cover:
            pm = QPixmap()
            if pm.loadFromData(album.cover):
                it.setIcon(QIcon(pm.scaled(
                    COVER_SIZE, COVER_SIZE,
                    Qt.AspectRatioMode.KeepAspectRatio,
                    Qt.TransformationMode.SmoothTransformation,
                )))
        return it

    def _apply_styles(self):
        self.setStyleSheet("""
        QListView#AlbumCards {
            background-color: #020617;
            border: none;
            color: #e5e7eb;
            selection-background-color: rgba(56, 189, 248, 0.2);
            selection-color: #e5e7eb;
        }

        QListView::item {
            padding: 6px;
            border-radius: 10px;
        }
        QListView::item:hover {
            background: #0b1222;
        }
        """)
