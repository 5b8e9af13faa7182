from conftest import tracks
from core.models import Album
from ui.player_bar import PlayerBar, SEEK_STEPS
from ui.widgets.album_list_widget import AlbumListWidget
from ui.widgets.track_list_widget import TrackListWidget


def test_player_bar_follows_session(qtbot, session, media):
    bar = PlayerBar(session)
    qtbot.addWidget(bar)

    session.load_queue("songs/ncs", tracks("a.mp3", "b.mp3"))
    session.select_track(0, autoplay=False)
    assert bar.lbl_title.text() == "a.mp3"
    assert bar.lbl_time.text() == "00:00 / 00:00"
    assert bar.btn_play.toolTip() == "Play"

    bar.btn_next.click()
    assert session.index == 1
    assert bar.lbl_title.text() == "b.mp3"
    assert bar.btn_play.toolTip() == "Pause"

    bar.btn_play.click()
    assert not session.playing


def test_player_bar_ignores_unknown_ratio(qtbot, session, media):
    bar = PlayerBar(session)
    qtbot.addWidget(bar)
    session.load_queue("songs/ncs", tracks("a.mp3"))
    session.select_track(0)

    media.current_time, media.duration = 30.0, 120.0
    session.on_time_advanced()
    assert bar.slider.value() == SEEK_STEPS // 4

    media.duration = float("nan")
    session.on_time_advanced()
    assert bar.slider.value() == SEEK_STEPS // 4
    assert bar.lbl_time.text() == "00:30 / 00:00"


def test_player_bar_volume_controls(qtbot, session, media):
    bar = PlayerBar(session)
    qtbot.addWidget(bar)

    bar.volume_slider.setValue(50)
    assert session.volume == 0.5
    assert media.volume == 0.5

    bar.btn_volume.click()
    assert session.muted
    assert bar.volume_slider.value() == 0
    assert bar.btn_volume.toolTip() == "Unmute"

    bar.btn_volume.click()
    assert bar.volume_slider.value() == 50
    assert bar.btn_volume.toolTip() == "Mute"


def test_player_bar_clears_on_empty_selection(qtbot, session):
    bar = PlayerBar(session)
    qtbot.addWidget(bar)
    session.load_queue("songs/ncs", tracks("a.mp3"))
    session.select_track(0)

    session.load_queue("songs/empty", [])
    session.select_track(0)

    assert bar.lbl_title.text() == ""
    assert bar.lbl_time.text() == ""


def test_track_list_renders_queue_and_selects(qtbot, session, media):
    widget = TrackListWidget(session)
    qtbot.addWidget(widget)

    session.load_queue("songs/ncs", tracks("a.mp3", "b.mp3", "c.mp3"))
    assert widget.row_count() == 3
    assert widget.lbl_folder.text() == "songs/ncs"

    widget._on_click(widget.model.index(2, 0))

    assert session.index == 2
    assert session.playing
    assert widget.table.selectionModel().selectedRows()[0].row() == 2


def test_track_list_click_during_folder_switch_is_dropped(qtbot, session, media):
    widget = TrackListWidget(session)
    qtbot.addWidget(widget)
    session.load_queue("songs/ncs", tracks("old1.mp3", "old2.mp3", "old3.mp3"))

    session.begin_folder_switch("songs/new", select_first=True, autoplay=True)
    widget._on_click(widget.model.index(2, 0))
    assert media.source is None

    session.finish_folder_switch("songs/new", tracks("n1.mp3", "n2.mp3", "n3.mp3"))

    assert session.current_track.name == "n1.mp3"
    assert media.source.endswith("/songs/new/n1.mp3")
    assert widget.lbl_folder.text() == "songs/new"


def test_album_list_appends_and_emits(qtbot):
    widget = AlbumListWidget()
    qtbot.addWidget(widget)

    widget.add_album(Album("x", "X Album", "Chill"))
    widget.add_album(Album("z", "Z Album"))
    assert widget.model.rowCount() == 2
    assert [a.folder_id for a in widget.albums()] == ["x", "z"]

    with qtbot.waitSignal(widget.openAlbum, timeout=1000) as blocker:
        widget._on_click(widget.model.index(1, 0))
    assert blocker.args == ["z"]

    widget.clear()
    assert widget.model.rowCount() == 0
