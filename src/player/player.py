# src/player/player.py
from __future__ import annotations

from PySide6.QtCore import QObject, Signal, QUrl
from PySide6.QtMultimedia import QMediaPlayer, QAudioOutput


class Player(QObject):
    """
    Audio-element style wrapper over QMediaPlayer: a settable source URL,
    play/pause, a seconds-based clock and a 0..1 volume. duration is NaN
    until the backend knows it.
    """

    timeAdvanced = Signal(float)     # seconds
    durationChanged = Signal(float)  # seconds, NaN when unknown
    playbackStateChanged = Signal(bool)  # playing
    errorOccurred = Signal(str)
    ended = Signal()

    def __init__(self, volume: float = 1.0, parent=None):
        super().__init__(parent)

        self.audio = QAudioOutput()
        self.media = QMediaPlayer()
        self.media.setAudioOutput(self.audio)

        self._source: str | None = None
        self.audio.setVolume(min(1.0, max(0.0, float(volume))))

        self.media.positionChanged.connect(lambda ms: self.timeAdvanced.emit(ms / 1000.0))
        self.media.durationChanged.connect(lambda _ms: self.durationChanged.emit(self.duration))
        self.media.playbackStateChanged.connect(self._on_state_changed)
        self.media.mediaStatusChanged.connect(self._on_media_status)
        self.media.errorOccurred.connect(self._on_error)

    def _on_state_changed(self, state: QMediaPlayer.PlaybackState) -> None:
        self.playbackStateChanged.emit(state == QMediaPlayer.PlaybackState.PlayingState)

    def _on_error(self, error: QMediaPlayer.Error, message: str) -> None:
        if error != QMediaPlayer.Error.NoError:
            self.errorOccurred.emit(message or str(error))

    def _on_media_status(self, status: QMediaPlayer.MediaStatus) -> None:
        if status == QMediaPlayer.MediaStatus.EndOfMedia:
            self.ended.emit()

    # ----------------------------
    # Media contract
    # ----------------------------

    @property
    def source(self) -> str | None:
        return self._source

    @source.setter
    def source(self, url: str | None) -> None:
        self._source = url
        self.media.setSource(QUrl(url) if url else QUrl())

    def play(self) -> None:
        self.media.play()

    def pause(self) -> None:
        self.media.pause()

    @property
    def paused(self) -> bool:
        return self.media.playbackState() != QMediaPlayer.PlaybackState.PlayingState

    @property
    def current_time(self) -> float:
        return self.media.position() / 1000.0

    @current_time.setter
    def current_time(self, seconds: float) -> None:
        self.media.setPosition(max(0, int(float(seconds) * 1000)))

    @property
    def duration(self) -> float:
        ms = self.media.duration()
        if ms <= 0:
            return float("nan")
        return ms / 1000.0

    @property
    def volume(self) -> float:
        return float(self.audio.volume())

    @volume.setter
    def volume(self, v: float) -> None:
        self.audio.setVolume(min(1.0, max(0.0, float(v))))

    def backend_name(self) -> str:
        return "qt-multimedia"
