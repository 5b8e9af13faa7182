# core/models.py
from __future__ import annotations
from dataclasses import dataclass

@dataclass(frozen=True)
class Track:
    name: str       # path inside the folder (song.mp3, sub/song.mp3), already URL-decoded

    @property
    def label(self) -> str:
        return self.name

@dataclass(frozen=True)
class Album:
    folder_id: str      # last path segment under the albums root
    title: str = ""
    description: str = ""
    cover: bytes | None = None
