# core/config.py
from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:8000"
DEFAULT_START_FOLDER = "songs/ncs"
DEFAULT_ALBUMS_ROOT = "songs"
DEFAULT_UNMUTE_VOLUME = 0.1


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning("Ignoring %s=%r (not a number)", name, raw)
        return default


def _clamp01(v: float) -> float:
    return min(1.0, max(0.0, float(v)))


@dataclass(frozen=True)
class PlayerConfig:
    base_url: str = DEFAULT_BASE_URL
    start_folder: str = DEFAULT_START_FOLDER
    albums_root: str = DEFAULT_ALBUMS_ROOT
    audio_exts: tuple[str, ...] = field(default=(".mp3",))
    timeout_s: float = 15.0
    initial_volume: float = 1.0
    unmute_volume: float = DEFAULT_UNMUTE_VOLUME
    log_level: str = "INFO"
    user_agent: str = "playlist-player/0.1"

    @classmethod
    def from_env(cls) -> "PlayerConfig":
        exts_raw = os.getenv("PLAYLIST_AUDIO_EXTS") or ".mp3"
        exts = tuple(
            e if e.startswith(".") else f".{e}"
            for e in (x.strip().lower() for x in exts_raw.split(","))
            if e
        ) or (".mp3",)

        timeout = _env_float("PLAYLIST_TIMEOUT", 15.0)
        if timeout <= 0:
            timeout = 15.0

        return cls(
            base_url=(os.getenv("PLAYLIST_BASE_URL") or DEFAULT_BASE_URL).rstrip("/"),
            start_folder=(os.getenv("PLAYLIST_START_FOLDER") or DEFAULT_START_FOLDER).strip("/"),
            albums_root=(os.getenv("PLAYLIST_ALBUMS_ROOT") or DEFAULT_ALBUMS_ROOT).strip("/"),
            audio_exts=exts,
            timeout_s=timeout,
            initial_volume=_clamp01(_env_float("PLAYLIST_VOLUME", 1.0)),
            unmute_volume=_clamp01(_env_float("PLAYLIST_UNMUTE_VOLUME", DEFAULT_UNMUTE_VOLUME)),
            log_level=(os.getenv("PLAYLIST_LOG_LEVEL") or "INFO").upper(),
        )
