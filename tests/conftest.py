"""pytest configuration file."""

import os
from unittest.mock import MagicMock

import pytest
from PySide6.QtCore import QObject, Signal

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from core.catalog_client import CatalogClient
from core.config import PlayerConfig
from core.models import Track
from core.session import PlaybackSession

BASE_URL = "http://music.test"


class FakeMedia(QObject):
    """Stands in for the audio element: records calls, never makes sound."""

    timeAdvanced = Signal(float)
    durationChanged = Signal(float)
    playbackStateChanged = Signal(bool)
    errorOccurred = Signal(str)
    ended = Signal()

    def __init__(self):
        super().__init__()
        self.source = None
        self.paused = True
        self.current_time = 0.0
        self.duration = float("nan")
        self.volume = 1.0
        self.calls: list[str] = []

    def play(self):
        self.calls.append("play")
        self.paused = False

    def pause(self):
        self.calls.append("pause")
        self.paused = True


@pytest.fixture
def config():
    return PlayerConfig(base_url=BASE_URL)


@pytest.fixture
def http():
    return MagicMock()


@pytest.fixture
def catalog(config, http):
    return CatalogClient(config, session=http)


@pytest.fixture
def media():
    return FakeMedia()


@pytest.fixture
def session(qapp, media, catalog):
    return PlaybackSession(media, catalog, unmute_volume=0.1)


def tracks(*names):
    return [Track(name=n) for n in names]
