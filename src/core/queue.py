# core/queue.py
from __future__ import annotations

from typing import Iterable, Optional

from core.models import Track


class TrackQueue:
    """Ordered tracks of the folder currently being browsed."""

    def __init__(self, folder: str = "", tracks: Iterable[Track] = ()):
        self._folder = ""
        self._tracks: tuple[Track, ...] = ()
        self.replace(folder, tracks)

    @property
    def folder(self) -> str:
        return self._folder

    @property
    def tracks(self) -> tuple[Track, ...]:
        return self._tracks

    def replace(self, folder: str, tracks: Iterable[Track]) -> None:
        # build first, then swap both fields together
        clean = tuple(t for t in tracks if t is not None and t.name)
        self._folder, self._tracks = folder, clean

    def get(self, index: int) -> Optional[Track]:
        if not isinstance(index, int) or index < 0 or index >= len(self._tracks):
            return None
        return self._tracks[index]

    def index_of(self, name: str | None) -> int:
        if not name:
            return -1
        for i, t in enumerate(self._tracks):
            if t.name == name:
                return i
        return -1

    def is_empty(self) -> bool:
        return not self._tracks

    def __len__(self) -> int:
        return len(self._tracks)

    def __iter__(self):
        return iter(self._tracks)
