"""Jukebox: tracks, playlists and per-user playlist ownership over HTTP."""

__version__ = "1.0.0"
