# ui/player_bar.py
from __future__ import annotations

from PySide6.QtCore import Qt, QSize, Signal
from PySide6.QtGui import QIcon, QPixmap, QPainter
from PySide6.QtWidgets import QWidget, QHBoxLayout, QLabel, QToolButton, QSlider, QStyle
from PySide6.QtCore import QByteArray
from PySide6.QtSvg import QSvgRenderer

SEEK_STEPS = 1000

def _svg_icon(path_d: str, size: int = 20, color: str = "#e5e7eb") -> QIcon:
    svg = f"""
    <svg xmlns="http://www.w3.org/2000/svg" width="{size}" height="{size}" viewBox="0 0 24 24">
      <path d="{path_d}" fill="{color}"/>
    </svg>
    """.strip()

    renderer = QSvgRenderer(QByteArray(svg.encode("utf-8")))
    pm = QPixmap(size, size)
    pm.fill(Qt.transparent)

    p = QPainter(pm)
    renderer.render(p)
    p.end()

    return QIcon(pm)


SVG_PREV = "M6 18V6h2v12H6zm3.5-6L18 6v12l-8.5-6z"
SVG_NEXT = "M16 6v12h2V6h-2zM6 18l8.5-6L6 6v12z"
SVG_PLAY = "M8 5v14l11-7L8 5z"
SVG_PAUSE = "M6 5h4v14H6V5zm8 0h4v14h-4V5z"
SVG_VOLUME = "M3 9v6h4l5 5V4L7 9H3zm13.5 3A4.5 4.5 0 0 0 14 8v8a4.5 4.5 0 0 0 2.5-4z"
SVG_MUTE = "M3 9v6h4l5 5V4L7 9H3zm13.3-.7L15 9.6l2.4 2.4-2.4 2.4 1.3 1.3 2.4-2.4 2.4 2.4 1.3-1.3-2.4-2.4 2.4-2.4-1.3-1.3-2.4 2.4z"


class SeekSlider(QSlider):
    """Horizontal slider that jumps to the clicked position."""

    clickedFraction = Signal(float)

    def mousePressEvent(self, event):
        if event.button() == Qt.MouseButton.LeftButton and self.maximum() > self.minimum():
            x = int(event.position().x())
            value = QStyle.sliderValueFromPosition(self.minimum(), self.maximum(), x, self.width())
            self.setValue(value)
            self.clickedFraction.emit(value / float(self.maximum()))
        super().mousePressEvent(event)


class PlayerBar(QWidget):
    def __init__(self, session, parent=None):
        super().__init__(parent)
        self.session = session

        self._dragging = False
        self._is_playing = False
        self._muted = False

        root = QHBoxLayout(self)
        root.setContentsMargins(8, 6, 8, 6)
        root.setSpacing(10)

        # --- buttons ---
        self.btn_prev = QToolButton()
        self.btn_prev.setObjectName("BtnPrev")
        self.btn_prev.setIcon(_svg_icon(SVG_PREV, 20))
        self.btn_prev.setIconSize(QSize(20, 20))
        self.btn_prev.setToolTip("Previous")

        self.btn_play = QToolButton()
        self.btn_play.setObjectName("BtnPlay")
        self.btn_play.setIcon(_svg_icon(SVG_PLAY, 22))
        self.btn_play.setIconSize(QSize(22, 22))
        self.btn_play.setToolTip("Play")

        self.btn_next = QToolButton()
        self.btn_next.setObjectName("BtnNext")
        self.btn_next.setIcon(_svg_icon(SVG_NEXT, 20))
        self.btn_next.setIconSize(QSize(20, 20))
        self.btn_next.setToolTip("Next")

        # --- labels ---
        self.lbl_title = QLabel("")
        self.lbl_title.setMinimumWidth(220)
        self.lbl_title.setTextInteractionFlags(Qt.TextSelectableByMouse)
        self.lbl_title.setObjectName("NowPlaying")

        self.lbl_time = QLabel("")
        self.lbl_time.setObjectName("SongTime")

        # --- seek bar ---
        self.slider = SeekSlider(Qt.Orientation.Horizontal)
        self.slider.setObjectName("SeekBar")
        self.slider.setRange(0, SEEK_STEPS)
        self.slider.setSingleStep(10)
        self.slider.setPageStep(50)

        # --- volume ---
        self.btn_volume = QToolButton()
        self.btn_volume.setObjectName("BtnVolume")
        self.btn_volume.setIconSize(QSize(20, 20))

        self.volume_slider = QSlider(Qt.Orientation.Horizontal)
        self.volume_slider.setObjectName("VolumeSlider")
        self.volume_slider.setRange(0, 100)
        self.volume_slider.setFixedWidth(100)

        root.addWidget(self.btn_prev)
        root.addWidget(self.btn_play)
        root.addWidget(self.btn_next)
        root.addSpacing(6)
        root.addWidget(self.lbl_title, 1)
        root.addWidget(self.lbl_time)
        root.addWidget(self.slider, 3)
        root.addWidget(self.btn_volume)
        root.addWidget(self.volume_slider)

        # --- signals ---
        self.slider.sliderPressed.connect(self._on_slider_pressed)
        self.slider.sliderReleased.connect(self._on_slider_released)
        self.slider.clickedFraction.connect(self._on_seek_clicked)
        self.volume_slider.valueChanged.connect(self._on_volume_slider)
        self.btn_volume.clicked.connect(self.session.toggle_mute)

        self.btn_play.clicked.connect(self.session.toggle_play_pause)
        self.btn_prev.clicked.connect(self.session.previous)
        self.btn_next.clicked.connect(self.session.next)

        self.session.trackChanged.connect(self._on_track_changed)
        self.session.playingChanged.connect(self._set_playing)
        self.session.progressChanged.connect(self._on_progress)
        self.session.volumeChanged.connect(self._on_volume_changed)

        self._on_volume_changed(self.session.volume, self.session.muted)
        self._set_playing(self.session.playing)

        self.setObjectName("PlayerBar")
        self._apply_styles()

    # --- seek handling ---
    def _on_slider_pressed(self):
        self._dragging = True

    def _on_slider_released(self):
        self._dragging = False
        self.session.seek(self.slider.value() / float(SEEK_STEPS))

    def _on_seek_clicked(self, fraction: float):
        if not self._dragging:
            self.session.seek(fraction)

    # --- volume handling ---
    def _on_volume_slider(self, value: int):
        self.session.set_volume(value / 100.0)

    def _on_volume_changed(self, level: float, muted: bool):
        self._muted = bool(muted)
        self.btn_volume.setIcon(_svg_icon(SVG_MUTE if self._muted else SVG_VOLUME, 20))
        self.btn_volume.setToolTip("Unmute" if self._muted else "Mute")

        self.volume_slider.blockSignals(True)
        self.volume_slider.setValue(int(round(level * 100)))
        self.volume_slider.blockSignals(False)

    # --- session updates ---
    def _on_track_changed(self, track):
        if track:
            self.lbl_title.setText(track.label)
        else:
            self.lbl_title.setText("")
            self.lbl_time.setText("")
            self.slider.setValue(0)

    def _set_playing(self, playing: bool):
        self._is_playing = bool(playing)
        if self._is_playing:
            self.btn_play.setIcon(_svg_icon(SVG_PAUSE, 22))
            self.btn_play.setToolTip("Pause")
        else:
            self.btn_play.setIcon(_svg_icon(SVG_PLAY, 22))
            self.btn_play.setToolTip("Play")

    def _on_progress(self, label: str, ratio):
        self.lbl_time.setText(label)
        # None means duration unknown; keep the handle where it is
        if ratio is None or self._dragging:
            return
        self.slider.setValue(int(ratio * SEEK_STEPS))

    def _apply_styles(self):
        self.setStyleSheet("""
        QWidget#PlayerBar {
            background-color: #020617;
            border-top: 1px solid #111827;
        }

        QToolButton {
            border: 1px solid transparent;
            background: transparent;
            padding: 6px;
            border-radius: 10px;
            color: #e5e7eb;
        }
        QToolButton:hover {
            background: #0b1222;
            border-color: #1f2937;
            color: #38bdf8;
        }
        QToolButton:pressed {
            background: #0f172a;
        }

        QToolButton#BtnPlay {
            background: #111827;
            border: 1px solid #1f2937;
            border-radius: 999px;
            padding: 8px;
        }
        QToolButton#BtnPlay:hover {
            border-color: #38bdf8;
            background: #020617;
        }

        QSlider::groove:horizontal {
            height: 4px;
            background: #0f172a;
            border-radius: 2px;
        }
        QSlider::handle:horizontal {
            width: 12px;
            height: 12px;
            margin: -4px 0;
            border-radius: 6px;
            background: #38bdf8;
        }
        QSlider::sub-page:horizontal {
            background: #38bdf8;
            border-radius: 2px;
        }

        QLabel {
            color: #9ca3af;
            font-size: 11px;
        }
        QLabel#NowPlaying {
            color: #e5e7eb;
            font-size: 12px;
        }
        """)
