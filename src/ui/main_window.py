from PySide6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QHBoxLayout, QLabel, QSplitter, QToolButton, QStyle
)
from PySide6.QtCore import Qt
from PySide6.QtGui import QShortcut, QKeySequence

from ui.player_bar import PlayerBar
from ui.widgets.track_list_widget import TrackListWidget
from ui.widgets.album_list_widget import AlbumListWidget
from ui.workers.catalog_loader import TrackListLoader, AlbumListLoader


class MainWindow(QMainWindow):
    def __init__(self, app_state):
        super().__init__()
        self.setWindowTitle("Playlist Player")
        self.resize(1000, 640)
        self.app_state = app_state
        self.session = app_state.session
        self.catalog = app_state.catalog

        self._loaders: list = []

        # --- Shortcuts ---
        QShortcut(QKeySequence("Space"), self, activated=self.session.toggle_play_pause)
        QShortcut(QKeySequence("Ctrl+Right"), self, activated=self.session.next)
        QShortcut(QKeySequence("Ctrl+Left"), self, activated=self.session.previous)
        QShortcut(QKeySequence("Ctrl+M"), self, activated=self.session.toggle_mute)

        self.central_widget = QWidget()
        self.setCentralWidget(self.central_widget)
        self.layout = QVBoxLayout(self.central_widget)

        self.app_state.notification.connect(self._on_notify)
        self.session.mediaError.connect(lambda msg: self.app_state.notify(msg, "error"))

        # --- Top bar (menu toggle + heading) ---
        top_bar = QHBoxLayout()

        self.btn_menu = QToolButton()
        self.btn_menu.setIcon(self.style().standardIcon(QStyle.StandardPixmap.SP_FileDialogListView))
        self.btn_menu.setToolTip("Show/hide track list")
        self.btn_menu.clicked.connect(self.toggle_side_panel)
        top_bar.addWidget(self.btn_menu)

        heading = QLabel("Albums")
        heading.setObjectName("Heading")
        top_bar.addWidget(heading)
        top_bar.addStretch(1)

        self.btn_refresh = QToolButton()
        self.btn_refresh.setIcon(self.style().standardIcon(QStyle.StandardPixmap.SP_BrowserReload))
        self.btn_refresh.setToolTip("Reload albums")
        self.btn_refresh.clicked.connect(self.load_albums)
        top_bar.addWidget(self.btn_refresh)

        self.layout.addLayout(top_bar)

        # --- Side panel (tracks) + album cards ---
        self.splitter = QSplitter(Qt.Orientation.Horizontal)

        self.track_list = TrackListWidget(self.session)
        self.splitter.addWidget(self.track_list)

        self.album_list = AlbumListWidget()
        self.album_list.openAlbum.connect(self.open_album)
        self.splitter.addWidget(self.album_list)

        self.splitter.setStretchFactor(0, 2)
        self.splitter.setStretchFactor(1, 3)
        self.layout.addWidget(self.splitter, 1)

        # --- PlayerBar ---
        self.player_bar = PlayerBar(self.session, self)
        self.layout.addWidget(self.player_bar)

        self.setStyleSheet(self.styleSheet() + """
            QLabel#Heading {
                color: #e5e7eb;
                font-size: 14px;
                font-weight: 600;
            }
            QToolButton {
                border: 1px solid transparent;
                background: transparent;
                padding: 6px;
                border-radius: 10px;
            }
            QToolButton:hover {
                background: #0b1222;
                border-color: #1f2937;
            }
            """)

    # ------------------ startup ------------------
    def start(self):
        config = self.app_state.config
        self.load_folder(config.start_folder, select_first=True, autoplay=False)
        self.load_albums()

    # ------------------ side menu ------------------
    def toggle_side_panel(self):
        self.set_side_panel_visible(self.track_list.isHidden())

    def set_side_panel_visible(self, visible: bool):
        self.track_list.setVisible(visible)

    # ------------------ folders ------------------
    def load_folder(self, folder: str, select_first: bool = False, autoplay: bool = False):
        self.session.begin_folder_switch(folder, select_first=select_first, autoplay=autoplay)
        self.statusBar().showMessage(f"Loading {folder}…")

        loader = TrackListLoader(self.catalog, folder, self)
        loader.loaded.connect(self._on_tracks_loaded)
        loader.failed.connect(self._on_tracks_failed)
        self._start_worker(loader)

    def open_album(self, folder_id: str):
        root = self.app_state.config.albums_root
        self.load_folder(f"{root}/{folder_id}", select_first=True, autoplay=True)

    def _on_tracks_loaded(self, folder: str, tracks: list):
        if self.session.finish_folder_switch(folder, tracks):
            self.statusBar().showMessage(f"{folder}: {len(tracks)} track(s)", 3000)

    def _on_tracks_failed(self, folder: str, msg: str):
        if self.session.fail_folder_switch(folder):
            self.app_state.notify(msg, "error")

    # ------------------ albums ------------------
    def load_albums(self):
        self.album_list.clear()
        self.btn_refresh.setEnabled(False)

        loader = AlbumListLoader(self.catalog, with_covers=True, parent=self)
        loader.albumLoaded.connect(self.album_list.add_album)
        loader.finished_signal.connect(self._on_albums_finished)
        self._start_worker(loader)

    def _on_albums_finished(self, ok: bool, msg: str):
        self.btn_refresh.setEnabled(True)
        if ok:
            self.statusBar().showMessage(msg, 3000)
        else:
            self.app_state.notify(msg, "error")

    # ------------------ helpers ------------------
    def _start_worker(self, worker):
        self._loaders.append(worker)
        worker.finished.connect(self._forget_worker)
        worker.start()

    def _forget_worker(self):
        worker = self.sender()
        if worker in self._loaders:
            self._loaders.remove(worker)
        worker.deleteLater()

    def _on_notify(self, n):
        msg = getattr(n, "message", "") or ""
        if not msg:
            return
        kind = (getattr(n, "notify_type", "info") or "info").lower()
        prefix = {"error": "Error: ", "warn": "Warning: "}.get(kind, "")
        self.statusBar().showMessage(prefix + msg, 5000)

    def closeEvent(self, event):
        for w in list(self._loaders):
            w.wait()
        super().closeEvent(event)
