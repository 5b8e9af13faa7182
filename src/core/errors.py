# core/errors.py
from __future__ import annotations


class PlayerError(Exception):
    """Base for everything the player raises on purpose."""


class CatalogUnavailable(PlayerError):
    """A folder listing could not be fetched or read."""

    def __init__(self, folder: str, reason: str = ""):
        self.folder = folder
        self.reason = reason
        msg = f"Catalog listing for '{folder}' unavailable"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)


class MetadataMissing(PlayerError):
    """info.json for one album folder is missing or unreadable."""

    def __init__(self, folder: str, reason: str = ""):
        self.folder = folder
        self.reason = reason
        super().__init__(f"No metadata for album '{folder}'" + (f": {reason}" if reason else ""))


class InvalidSeekTarget(PlayerError):
    pass


class IndexOutOfRange(PlayerError):
    pass
