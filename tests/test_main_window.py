import time

import requests
from PySide6.QtGui import QCloseEvent

from conftest import tracks
from core.state import AppState
from ui.main_window import MainWindow


def _window(qtbot, config, catalog, session):
    app_state = AppState(config)
    app_state.catalog = catalog
    app_state.session = session

    w = MainWindow(app_state)
    qtbot.addWidget(w)
    return w


def test_notifications_go_to_status_bar(qtbot, config, catalog, session):
    w = _window(qtbot, config, catalog, session)
    w.app_state.notify("cover missing", "warn")
    assert w.statusBar().currentMessage() == "Warning: cover missing"


def test_playback_error_is_shown(qtbot, config, catalog, session, media):
    w = _window(qtbot, config, catalog, session)
    session.load_queue("songs/ncs", tracks("a.mp3"))
    session.select_track(0)

    media.errorOccurred.emit("Resource not found")

    assert w.statusBar().currentMessage() == "Error: Resource not found"
    assert w.player_bar.btn_play.toolTip() == "Play"


def test_close_waits_for_running_loaders(qtbot, config, catalog, session, http):
    def slow_get(url, **kwargs):
        time.sleep(0.3)
        raise requests.ConnectionError("offline")

    http.get.side_effect = slow_get
    w = _window(qtbot, config, catalog, session)
    w.load_folder("songs/slow")
    loader = w._loaders[-1]

    w.closeEvent(QCloseEvent())

    assert loader.isFinished()


def test_stale_listing_does_not_replace_track_list(qtbot, config, catalog, session):
    w = _window(qtbot, config, catalog, session)

    session.begin_folder_switch("songs/a", select_first=True, autoplay=True)
    session.begin_folder_switch("songs/b", select_first=True, autoplay=True)
    w._on_tracks_loaded("songs/b", tracks("b1.mp3", "b2.mp3"))
    w._on_tracks_loaded("songs/a", tracks("a1.mp3"))

    assert w.track_list.lbl_folder.text() == "songs/b"
    assert w.track_list.row_count() == 2
    assert w.player_bar.lbl_title.text() == "b1.mp3"


def test_failed_listing_empties_list_and_notifies(qtbot, config, catalog, session):
    w = _window(qtbot, config, catalog, session)
    session.load_queue("songs/ncs", tracks("a.mp3"))

    session.begin_folder_switch("songs/broken")
    w._on_tracks_failed("songs/broken", "listing unavailable")

    assert w.track_list.row_count() == 0
    assert w.statusBar().currentMessage() == "Error: listing unavailable"


def test_side_panel_toggles(qtbot, config, catalog, session):
    w = _window(qtbot, config, catalog, session)
    assert not w.track_list.isHidden()

    w.toggle_side_panel()
    assert w.track_list.isHidden()

    w.toggle_side_panel()
    assert not w.track_list.isHidden()
