# ui/track_list_widget.py
from __future__ import annotations

from PySide6.QtCore import Qt, QItemSelectionModel, QModelIndex
from PySide6.QtGui import QStandardItem, QStandardItemModel
from PySide6.QtWidgets import QWidget, QVBoxLayout, QLabel, QTableView, QHeaderView, QMenu


class TrackListWidget(QWidget):
    def __init__(self, session):
        super().__init__()
        self.session = session
        self._folder: str = ""

        self.lbl_folder = QLabel("")
        self.lbl_folder.setObjectName("FolderLabel")

        self.table = QTableView()
        self.model = QStandardItemModel(0, 2, self)
        self.model.setHorizontalHeaderLabels(["Track", ""])
        self.table.setModel(self.model)

        self.table.setSelectionBehavior(QTableView.SelectionBehavior.SelectRows)
        self.table.setSelectionMode(QTableView.SelectionMode.SingleSelection)
        self.table.verticalHeader().setVisible(False)
        self.table.setShowGrid(False)
        self.table.setAlternatingRowColors(True)
        self.table.setObjectName("TrackTable")
        self.table.verticalHeader().setDefaultSectionSize(24)
        self.table.horizontalHeader().setSectionResizeMode(0, QHeaderView.ResizeMode.Stretch)
        self.table.setColumnWidth(1, 90)

        self._apply_styles()

        self.table.clicked.connect(self._on_click)

        self.table.setContextMenuPolicy(Qt.ContextMenuPolicy.CustomContextMenu)
        self.table.customContextMenuRequested.connect(self._on_context_menu)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.addWidget(self.lbl_folder)
        layout.addWidget(self.table)

        self.session.queueChanged.connect(self.set_tracks)
        self.session.trackChanged.connect(lambda _t: self.set_now_playing(self.session.index))

    # -------------------------
    # External API
    # -------------------------

    def set_tracks(self, folder: str, tracks: list):
        self._folder = folder
        self.lbl_folder.setText(folder)
        self.model.setRowCount(0)
        for row, t in enumerate(tracks):
            name = QStandardItem(t.label)
            name.setEditable(False)
            name.setData(row, Qt.ItemDataRole.UserRole)

            play = QStandardItem("Play Now")
            play.setEditable(False)
            play.setData(row, Qt.ItemDataRole.UserRole)
            play.setTextAlignment(Qt.AlignmentFlag.AlignCenter)

            self.model.appendRow([name, play])

    def row_count(self) -> int:
        return self.model.rowCount()

    def set_now_playing(self, index: int):
        if index is None or index < 0 or index >= self.model.rowCount():
            self.table.clearSelection()
            return

        idx = self.model.index(index, 0)
        sm = self.table.selectionModel()
        if sm is None:
            return

        sm.setCurrentIndex(idx, QItemSelectionModel.ClearAndSelect | QItemSelectionModel.Rows)
        self.table.scrollTo(idx, QTableView.ScrollHint.EnsureVisible)

    # -------------------------
    # UI Events
    # -------------------------

    def _row_at(self, index: QModelIndex):
        if not index.isValid():
            return None
        row = self.model.index(index.row(), 0).data(Qt.ItemDataRole.UserRole)
        return None if row is None else int(row)

    def _on_click(self, index: QModelIndex):
        row = self._row_at(index)
        if row is not None:
            self.session.select_track(row, autoplay=True, folder=self._folder)

    def _on_context_menu(self, pos):
        row = self._row_at(self.table.indexAt(pos))
        if row is None:
            return

        menu = QMenu(self)
        act_play = menu.addAction("Play")
        act_load = menu.addAction("Load paused")

        chosen = menu.exec(self.table.viewport().mapToGlobal(pos))
        if chosen == act_play:
            self.session.select_track(row, autoplay=True, folder=self._folder)
        elif chosen == act_load:
            self.session.select_track(row, autoplay=False, folder=self._folder)

    def _apply_styles(self):
        self.setStyleSheet("""
        QTableView#TrackTable {
            background-color: #020617;
            alternate-background-color: #030712;
            border: none;
            color: #e5e7eb;
            gridline-color: #020617;
            selection-background-color: rgba(56, 189, 248, 0.2);
            selection-color: #e5e7eb;
        }

        QHeaderView::section {
            background-color: #020617;
            color: #9ca3af;
            padding: 4px 6px;
            border: none;
            border-bottom: 1px solid #111827;
            font-size: 11px;
            text-transform: uppercase;
            letter-spacing: 0.08em;
        }

        QLabel#FolderLabel {
            color: #9ca3af;
            font-size: 11px;
            padding: 4px 6px;
        }
        """)
