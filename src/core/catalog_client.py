# core/catalog_client.py
from __future__ import annotations

import logging
import threading
from typing import Iterator, Optional
from urllib.parse import quote, urljoin, urlparse, unquote

import requests
from bs4 import BeautifulSoup

from core.config import PlayerConfig
from core.errors import CatalogUnavailable, MetadataMissing
from core.models import Album, Track
from core.utils import decode_name

logger = logging.getLogger(__name__)


class CatalogClient:
    """
    Reads a static file server laid out as:

        /{folder}/                     directory listing with <a href="...mp3">
        /{albums_root}/                listing of album sub-folders
        /{albums_root}/{id}/info.json  {"title": ..., "description": ...}
        /{albums_root}/{id}/cover.jpg

    Listing order is kept as served; nothing is sorted here.

    Loader threads run concurrently, so each thread gets its own
    requests.Session unless one was passed in.
    """

    def __init__(self, config: PlayerConfig | None = None, session: requests.Session | None = None):
        self.config = config or PlayerConfig()
        self.base_url = self.config.base_url.rstrip("/")
        self._shared_session = session
        self._local = threading.local()
        if session is not None:
            session.headers.update({"User-Agent": self.config.user_agent})

    @property
    def session(self) -> requests.Session:
        if self._shared_session is not None:
            return self._shared_session
        s = getattr(self._local, "session", None)
        if s is None:
            s = requests.Session()
            s.headers.update({"User-Agent": self.config.user_agent})
            self._local.session = s
        return s

    # ----------------------------
    # URLs
    # ----------------------------

    def folder_url(self, folder: str) -> str:
        return f"{self.base_url}/{folder.strip('/')}/"

    def track_url(self, folder: str, track: Track | str) -> str:
        name = track.name if isinstance(track, Track) else str(track)
        return self.folder_url(folder) + quote(name)

    def cover_url(self, folder_id: str) -> str:
        return f"{self.folder_url(self.config.albums_root)}{quote(folder_id)}/cover.jpg"

    def info_url(self, folder_id: str) -> str:
        return f"{self.folder_url(self.config.albums_root)}{quote(folder_id)}/info.json"

    def track_name_from_url(self, folder: str, url: str | None) -> Optional[str]:
        """Map a media source URL back to the track name it was built from."""
        if not url:
            return None
        marker = f"/{folder.strip('/')}/"
        path = urlparse(url).path
        if marker not in path:
            return None
        name = unquote(path.split(marker, 1)[1])
        return name or None

    # ----------------------------
    # Listings
    # ----------------------------

    def _get_listing(self, folder: str) -> tuple[str, BeautifulSoup]:
        url = self.folder_url(folder)
        try:
            r = self.session.get(url, timeout=self.config.timeout_s)
            r.raise_for_status()
        except requests.RequestException as e:
            raise CatalogUnavailable(folder, str(e)) from e
        return url, BeautifulSoup(r.text, "html.parser")

    def _is_audio(self, path: str) -> bool:
        return path.lower().endswith(self.config.audio_exts)

    def list_tracks(self, folder: str) -> list[Track]:
        folder = folder.strip("/")
        listing_url, soup = self._get_listing(folder)
        marker = f"/{folder}/"

        tracks: list[Track] = []
        for a in soup.find_all("a", href=True):
            path = urlparse(urljoin(listing_url, a["href"])).path
            if not self._is_audio(path):
                continue
            if marker not in path:
                # link points outside the folder; no name to extract
                continue
            name = decode_name(path.split(marker, 1)[1])
            if not name:
                continue
            tracks.append(Track(name=name))

        logger.info("Listed %d track(s) in %s", len(tracks), folder)
        return tracks

    def album_folders(self) -> list[str]:
        root = self.config.albums_root
        listing_url, soup = self._get_listing(root)

        folders: list[str] = []
        for a in soup.find_all("a", href=True):
            href = urljoin(listing_url, a["href"])
            if f"/{root}" not in href or ".htaccess" in href:
                continue
            parts = [p for p in urlparse(href).path.split("/") if p]
            if not parts:
                continue
            folders.append(decode_name(parts[-1]))
        return folders

    # ----------------------------
    # Album metadata
    # ----------------------------

    def fetch_album_info(self, folder_id: str) -> dict:
        try:
            r = self.session.get(self.info_url(folder_id), timeout=self.config.timeout_s)
        except requests.RequestException as e:
            raise MetadataMissing(folder_id, str(e)) from e
        if not r.ok:
            raise MetadataMissing(folder_id, f"HTTP {r.status_code}")
        try:
            data = r.json()
        except ValueError as e:
            raise MetadataMissing(folder_id, "info.json is not valid JSON") from e
        if not isinstance(data, dict):
            raise MetadataMissing(folder_id, "info.json is not an object")
        return data

    def fetch_cover(self, folder_id: str) -> Optional[bytes]:
        try:
            r = self.session.get(self.cover_url(folder_id), timeout=self.config.timeout_s)
        except requests.RequestException as e:
            logger.debug("No cover for %s: %s", folder_id, e)
            return None
        if not r.ok:
            return None
        return r.content or None

    def iter_albums(self, with_covers: bool = False) -> Iterator[Album]:
        """
        Yields albums one at a time, in listing order. A folder whose info.json
        cannot be read is skipped; only a failed root listing raises.
        """
        for folder_id in self.album_folders():
            try:
                info = self.fetch_album_info(folder_id)
            except MetadataMissing as e:
                logger.warning("Skipping album %s: %s", folder_id, e.reason or e)
                continue

            cover = self.fetch_cover(folder_id) if with_covers else None
            yield Album(
                folder_id=folder_id,
                title=str(info.get("title") or ""),
                description=str(info.get("description") or ""),
                cover=cover,
            )

    def list_albums(self) -> list[Album]:
        return list(self.iter_albums())
