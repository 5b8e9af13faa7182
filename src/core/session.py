# core/session.py
from __future__ import annotations

import logging
import math
from enum import Enum, auto
from typing import Iterable, Optional

from PySide6.QtCore import QObject, Signal

from core.catalog_client import CatalogClient
from core.config import DEFAULT_UNMUTE_VOLUME
from core.errors import IndexOutOfRange, InvalidSeekTarget
from core.models import Track
from core.queue import TrackQueue
from core.utils import format_progress, progress_ratio

logger = logging.getLogger(__name__)


class SessionState(Enum):
    EMPTY = auto()
    PAUSED = auto()
    PLAYING = auto()


class PlaybackSession(QObject):
    """
    Owns everything mutable about playback: the queue, the current index,
    play/pause and volume. The media object is only ever touched from here.

    media is anything with: source (settable), play(), pause(), paused,
    current_time (settable, seconds), duration (seconds, NaN when unknown)
    and volume (0..1). Whichever of its timeAdvanced, durationChanged,
    playbackStateChanged, errorOccurred and ended signals exist are wired up.
    """

    trackChanged = Signal(object)        # Track | None
    playingChanged = Signal(bool)
    progressChanged = Signal(str, object)  # "mm:ss / mm:ss", ratio | None
    volumeChanged = Signal(float, bool)  # level, muted
    queueChanged = Signal(str, object)   # folder, [Track]
    mediaError = Signal(str)

    def __init__(
        self,
        media,
        catalog: CatalogClient,
        unmute_volume: float = DEFAULT_UNMUTE_VOLUME,
        initial_volume: float | None = None,
        parent=None,
    ):
        super().__init__(parent)
        self.media = media
        self.catalog = catalog
        self.unmute_volume = min(1.0, max(0.0, float(unmute_volume)))

        self.queue = TrackQueue()
        self._index: int = -1
        self._playing: bool = False
        self._current_source: str | None = None

        if initial_volume is None:
            initial_volume = float(getattr(media, "volume", 1.0))
        self._volume: float = min(1.0, max(0.0, float(initial_volume)))
        self._muted: bool = self._volume <= 0
        self._premute_volume: float | None = None
        self.media.volume = self._volume

        # folder switch bookkeeping
        self._pending_folder: str | None = None
        self._pending_select_first = False
        self._pending_autoplay = False
        self._deferred_selection: tuple[int, bool] | None = None

        if hasattr(media, "timeAdvanced"):
            media.timeAdvanced.connect(self.on_time_advanced)
        if hasattr(media, "durationChanged"):
            media.durationChanged.connect(self.on_time_advanced)
        if hasattr(media, "playbackStateChanged"):
            media.playbackStateChanged.connect(self.on_media_playing)
        if hasattr(media, "errorOccurred"):
            media.errorOccurred.connect(self.on_media_error)
        if hasattr(media, "ended"):
            media.ended.connect(self.on_media_ended)

    # ----------------------------
    # Observable state
    # ----------------------------

    @property
    def index(self) -> int:
        return self._index

    @property
    def current_track(self) -> Optional[Track]:
        return self.queue.get(self._index)

    @property
    def playing(self) -> bool:
        return self._playing

    @property
    def volume(self) -> float:
        return self._volume

    @property
    def muted(self) -> bool:
        return self._muted

    @property
    def pending_folder(self) -> str | None:
        return self._pending_folder

    @property
    def state(self) -> SessionState:
        if self._index < 0:
            return SessionState.EMPTY
        return SessionState.PLAYING if self._playing else SessionState.PAUSED

    # ----------------------------
    # Helpers
    # ----------------------------

    def _set_playing(self, playing: bool) -> None:
        playing = bool(playing) and self._index >= 0
        if self._playing != playing:
            self._playing = playing
            self.playingChanged.emit(playing)

    def _track_at(self, index) -> Track:
        track = self.queue.get(index)
        if track is None:
            raise IndexOutOfRange(f"index {index!r} outside queue of {len(self.queue)}")
        return track

    def _clear(self) -> None:
        self._index = -1
        self._current_source = None
        if not self.media.paused:
            self.media.pause()
        self._set_playing(False)
        self.trackChanged.emit(None)
        self.progressChanged.emit("", None)

    def _resolve_current_index(self) -> int:
        """
        Trust the stored index while the media still plays what we loaded.
        Otherwise map the media source back into the queue; duplicates
        resolve to their first occurrence.
        """
        source = self.media.source
        if self._index >= 0 and source == self._current_source:
            return self._index

        name = self.catalog.track_name_from_url(self.queue.folder, source)
        idx = self.queue.index_of(name)
        if idx != self._index:
            logger.info("Media source %r resolved to queue index %d (stored %d)", source, idx, self._index)
        return idx

    def _seek_target(self, fraction) -> float:
        if self._index < 0:
            raise InvalidSeekTarget("no track loaded")
        try:
            fraction = float(fraction)
        except (TypeError, ValueError) as e:
            raise InvalidSeekTarget(f"fraction {fraction!r} is not a number") from e
        if math.isnan(fraction) or fraction < 0.0 or fraction > 1.0:
            raise InvalidSeekTarget(f"fraction {fraction} outside [0, 1]")

        duration = self.media.duration
        if duration is None or not math.isfinite(duration) or duration <= 0:
            raise InvalidSeekTarget("duration not known yet")
        return fraction * duration

    # ----------------------------
    # Queue / folder switching
    # ----------------------------

    def load_queue(self, folder: str, tracks: Iterable[Track]) -> None:
        self._pending_folder = None
        self._deferred_selection = None

        self.queue.replace(folder, tracks)
        self._clear()
        logger.info("Queue for %s: %d track(s)", folder, len(self.queue))
        self.queueChanged.emit(folder, list(self.queue.tracks))

    def begin_folder_switch(self, folder: str, select_first: bool = False, autoplay: bool = False) -> None:
        """Mark folder as the one whose listing is awaited. Older listings are dropped."""
        self._pending_folder = folder
        self._pending_select_first = select_first
        self._pending_autoplay = autoplay
        self._deferred_selection = None

    def finish_folder_switch(self, folder: str, tracks: Iterable[Track]) -> bool:
        if self._pending_folder is None or folder != self._pending_folder:
            logger.info("Discarding stale listing for %s (waiting for %s)", folder, self._pending_folder)
            return False

        select_first = self._pending_select_first
        autoplay = self._pending_autoplay
        deferred = self._deferred_selection

        self.load_queue(folder, tracks)

        if deferred is not None:
            self.select_track(*deferred)
        elif select_first and not self.queue.is_empty():
            self.select_track(0, autoplay=autoplay)
        return True

    def fail_folder_switch(self, folder: str) -> bool:
        if self._pending_folder is None or folder != self._pending_folder:
            return False
        self.load_queue(folder, [])
        return True

    # ----------------------------
    # Transport
    # ----------------------------

    def select_track(self, index: int, autoplay: bool = True, folder: str | None = None) -> bool:
        """
        folder names the listing index was taken from; None means the
        installed queue. While a switch is pending only a selection made
        against the awaited folder is kept, and applied once it is installed.
        """
        if self._pending_folder is not None:
            if folder is not None and folder == self._pending_folder:
                self._deferred_selection = (index, autoplay)
                logger.debug("Deferring selection %r until %s is loaded", index, folder)
            else:
                logger.debug("Ignoring selection %r from %s while %s loads",
                             index, folder or self.queue.folder, self._pending_folder)
            return False

        if folder is not None and folder != self.queue.folder:
            logger.debug("Ignoring selection %r from %s, queue is %s", index, folder, self.queue.folder)
            return False

        if self.queue.is_empty():
            self._clear()
            return False

        try:
            track = self._track_at(index)
        except IndexOutOfRange as e:
            logger.debug("Ignoring selection: %s", e)
            return False

        url = self.catalog.track_url(self.queue.folder, track)
        self._index = index
        self._current_source = url
        self.media.source = url

        if autoplay:
            self.media.play()
        self._set_playing(autoplay)

        logger.info("Now %s: %s", "playing" if autoplay else "loaded", track.name)
        self.trackChanged.emit(track)
        self.progressChanged.emit(format_progress(0, 0), 0.0)
        return True

    def next(self) -> bool:
        if self._pending_folder is not None:
            return False
        cur = self._resolve_current_index()
        if cur < 0 or cur >= len(self.queue) - 1:
            return False
        return self.select_track(cur + 1, autoplay=True)

    def previous(self) -> bool:
        if self._pending_folder is not None:
            return False
        cur = self._resolve_current_index()
        if cur <= 0:
            return False
        return self.select_track(cur - 1, autoplay=True)

    def toggle_play_pause(self) -> bool:
        if self._index < 0:
            return False
        if self.media.paused:
            self.media.play()
            self._set_playing(True)
        else:
            self.media.pause()
            self._set_playing(False)
        return True

    def seek(self, fraction) -> bool:
        try:
            target = self._seek_target(fraction)
        except InvalidSeekTarget as e:
            logger.debug("Ignoring seek: %s", e)
            return False

        self.media.current_time = target
        self.progressChanged.emit(format_progress(target, self.media.duration), float(fraction))
        return True

    # ----------------------------
    # Volume
    # ----------------------------

    def set_volume(self, level) -> None:
        try:
            level = float(level)
        except (TypeError, ValueError):
            logger.debug("Ignoring volume %r", level)
            return
        if math.isnan(level):
            return
        level = min(1.0, max(0.0, level))

        self._volume = level
        self._muted = level <= 0
        self._premute_volume = None
        self.media.volume = level
        self.volumeChanged.emit(level, self._muted)

    def toggle_mute(self) -> None:
        if not self._muted:
            self._premute_volume = self._volume if self._volume > 0 else None
            self._volume = 0.0
            self._muted = True
        else:
            restore = self._premute_volume or self.unmute_volume
            self._premute_volume = None
            self._volume = restore
            self._muted = restore <= 0

        self.media.volume = self._volume
        self.volumeChanged.emit(self._volume, self._muted)

    # ----------------------------
    # Media notifications
    # ----------------------------

    def on_time_advanced(self, *_args) -> None:
        if self._index < 0:
            return
        elapsed = self.media.current_time
        duration = self.media.duration
        self.progressChanged.emit(format_progress(elapsed, duration), progress_ratio(elapsed, duration))

    def on_media_ended(self) -> None:
        self._set_playing(False)

    def on_media_playing(self, playing: bool) -> None:
        """Follow the backend when it starts or stops on its own."""
        self._set_playing(playing)

    def on_media_error(self, message: str) -> None:
        logger.warning("Playback error on %s: %s", self.media.source, message)
        self._set_playing(False)
        self.mediaError.emit(message)
