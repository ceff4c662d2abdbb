"""Route blueprints exposed via Flask."""

from .users import users_bp
from .tracks import tracks_bp
from .playlist import playlist_bp
from .health import health_bp

__all__ = [
    "users_bp",
    "tracks_bp",
    "playlist_bp",
    "health_bp",
]
