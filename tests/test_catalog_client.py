import threading
from unittest.mock import MagicMock

import pytest
import requests

from core.catalog_client import CatalogClient
from core.config import PlayerConfig
from core.errors import CatalogUnavailable, MetadataMissing
from core.models import Album, Track

BASE = "http://music.test"


def _resp(status=200, text="", json_data=None, content=b""):
    r = MagicMock()
    r.status_code = status
    r.ok = status < 400
    r.text = text
    r.content = content
    if status >= 400:
        r.raise_for_status.side_effect = requests.HTTPError(f"{status} Error")
    else:
        r.raise_for_status.return_value = None
    if json_data is None:
        r.json.side_effect = ValueError("no json")
    else:
        r.json.return_value = json_data
    return r


def _route(http, routes):
    http.get.side_effect = lambda url, **kwargs: routes.get(url, _resp(status=404))


def _listing(*hrefs):
    links = "\n".join(f'<li><a href="{h}">{h}</a></li>' for h in hrefs)
    return f"<html><body><ul>{links}</ul></body></html>"


def test_list_tracks_filters_and_decodes(catalog, http):
    _route(http, {
        f"{BASE}/songs/ncs/": _resp(text=_listing(
            "../",
            "Song%20One.mp3",
            "cover.jpg",
            "info.json",
            "B%C3%A9la.MP3",
            "/elsewhere/other.mp3",
            "two.mp3",
        )),
    })

    tracks = catalog.list_tracks("songs/ncs")

    assert tracks == [Track("Song One.mp3"), Track("Béla.MP3"), Track("two.mp3")]


def test_list_tracks_keeps_listing_order(catalog, http):
    _route(http, {f"{BASE}/f/": _resp(text=_listing("z.mp3", "a.mp3", "m.mp3"))})
    assert [t.name for t in catalog.list_tracks("f")] == ["z.mp3", "a.mp3", "m.mp3"]


def test_list_tracks_absolute_hrefs(catalog, http):
    _route(http, {f"{BASE}/songs/x/": _resp(text=_listing("/songs/x/a.mp3", "http://music.test/songs/x/b.mp3"))})
    assert [t.name for t in catalog.list_tracks("/songs/x/")] == ["a.mp3", "b.mp3"]


def test_list_tracks_http_error_raises_catalog_unavailable(catalog, http):
    _route(http, {f"{BASE}/songs/ncs/": _resp(status=500)})
    with pytest.raises(CatalogUnavailable) as exc:
        catalog.list_tracks("songs/ncs")
    assert exc.value.folder == "songs/ncs"


def test_list_tracks_transport_error_raises_catalog_unavailable(catalog, http):
    http.get.side_effect = requests.ConnectionError("refused")
    with pytest.raises(CatalogUnavailable):
        catalog.list_tracks("songs/ncs")


def test_extra_audio_extensions(http):
    client = CatalogClient(PlayerConfig(base_url=BASE, audio_exts=(".mp3", ".ogg")), session=http)
    _route(http, {f"{BASE}/f/": _resp(text=_listing("a.ogg", "b.mp3", "c.flac"))})
    assert [t.name for t in client.list_tracks("f")] == ["a.ogg", "b.mp3"]


def test_list_albums_skips_folder_with_missing_info(catalog, http):
    _route(http, {
        f"{BASE}/songs/": _resp(text=_listing("../", ".htaccess", "x/", "y/")),
        f"{BASE}/songs/x/info.json": _resp(json_data={"title": "X Album", "description": "Chill"}),
        f"{BASE}/songs/y/info.json": _resp(status=404),
    })

    albums = catalog.list_albums()

    assert albums == [Album(folder_id="x", title="X Album", description="Chill")]


def test_list_albums_tolerates_bad_json_and_missing_fields(catalog, http):
    _route(http, {
        f"{BASE}/songs/": _resp(text=_listing("a/", "b/", "c/")),
        f"{BASE}/songs/a/info.json": _resp(text="not json"),
        f"{BASE}/songs/b/info.json": _resp(json_data={}),
        f"{BASE}/songs/c/info.json": _resp(json_data={"title": "C"}),
    })

    albums = catalog.list_albums()

    assert [(a.folder_id, a.title, a.description) for a in albums] == [("b", "", ""), ("c", "C", "")]


def test_list_albums_root_failure_raises(catalog, http):
    _route(http, {})
    with pytest.raises(CatalogUnavailable):
        catalog.list_albums()


def test_iter_albums_yields_before_later_failures(catalog, http):
    _route(http, {
        f"{BASE}/songs/": _resp(text=_listing("a/", "b/")),
        f"{BASE}/songs/a/info.json": _resp(json_data={"title": "A"}),
    })

    it = catalog.iter_albums()
    assert next(it).folder_id == "a"
    assert list(it) == []


def test_iter_albums_with_covers(catalog, http):
    _route(http, {
        f"{BASE}/songs/": _resp(text=_listing("a/", "b/")),
        f"{BASE}/songs/a/info.json": _resp(json_data={"title": "A"}),
        f"{BASE}/songs/b/info.json": _resp(json_data={"title": "B"}),
        f"{BASE}/songs/a/cover.jpg": _resp(content=b"\xff\xd8jpeg"),
    })

    albums = list(catalog.iter_albums(with_covers=True))

    assert albums[0].cover == b"\xff\xd8jpeg"
    assert albums[1].cover is None


def test_fetch_album_info_transport_error(catalog, http):
    http.get.side_effect = requests.Timeout("slow")
    with pytest.raises(MetadataMissing):
        catalog.fetch_album_info("x")


def test_track_url_round_trip(catalog):
    url = catalog.track_url("songs/ncs", Track("My Song.mp3"))
    assert url == f"{BASE}/songs/ncs/My%20Song.mp3"
    assert catalog.track_name_from_url("songs/ncs", url) == "My Song.mp3"


def test_track_name_from_foreign_url(catalog):
    assert catalog.track_name_from_url("songs/ncs", f"{BASE}/songs/other/a.mp3") is None
    assert catalog.track_name_from_url("songs/ncs", None) is None


def test_cover_url(catalog):
    assert catalog.cover_url("x") == f"{BASE}/songs/x/cover.jpg"


def test_each_thread_gets_its_own_http_session():
    client = CatalogClient(PlayerConfig(base_url=BASE))
    main_session = client.session
    assert client.session is main_session
    assert main_session.headers["User-Agent"] == client.config.user_agent

    seen = []
    worker = threading.Thread(target=lambda: seen.append(client.session))
    worker.start()
    worker.join()

    assert seen[0] is not main_session
    assert isinstance(seen[0], requests.Session)


def test_injected_session_is_used_everywhere(http):
    client = CatalogClient(PlayerConfig(base_url=BASE), session=http)

    seen = []
    worker = threading.Thread(target=lambda: seen.append(client.session))
    worker.start()
    worker.join()

    assert client.session is http
    assert seen == [http]
