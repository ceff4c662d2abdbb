"""Demo catalogue used to populate a fresh database."""

from __future__ import annotations

import logging
from typing import Dict

from jukebox.database.db_manager import db, Playlist, PlaylistTrack, Track, User

logger = logging.getLogger(__name__)

TRACKS = [
    ("Bohemian Rhapsody", 354000),
    ("Hotel California", 391000),
    ("Stairway to Heaven", 482000),
    ("Imagine", 183000),
    ("Hey Jude", 425000),
    ("Smells Like Teen Spirit", 301000),
    ("Like a Rolling Stone", 369000),
    ("Yesterday", 125000),
    ("Good Vibrations", 215000),
    ("Johnny B. Goode", 158000),
    ("What's Going On", 232000),
    ("My Generation", 227000),
    ("A Day in the Life", 337000),
    ("Light My Fire", 287000),
    ("I Want to Hold Your Hand", 145000),
    ("Respect", 148000),
    ("Goodbye Yellow Brick Road", 199000),
    ("Bridge Over Troubled Water", 294000),
    ("Let It Be", 243000),
    ("Dream On", 263000),
    ("Sweet Child O' Mine", 356000),
    ("Billie Jean", 294000),
    ("Purple Haze", 167000),
    ("Comfortably Numb", 383000),
]

USERS = [
    ("musiclover", "password123"),
    ("rockfan", "password123"),
]

# (name, description, owner username, 1-based track positions in TRACKS)
PLAYLISTS = [
    ("Classic Rock Hits", "The best classic rock songs of all time", "musiclover", [1, 2, 3, 6, 7]),
    ("Beatles Greatest", "Essential Beatles tracks", "musiclover", [4, 5, 8, 15, 19]),
    ("90s Alternative", "Alternative rock from the 1990s", "musiclover", [6, 21, 22]),
    ("Motown Classics", "Soul and R&B from Motown Records", "musiclover", [11, 16]),
    ("Guitar Heroes", "Songs featuring legendary guitar solos", "musiclover", [3, 10, 21, 24]),
    ("Summer Vibes", "Perfect songs for summer days", "rockfan", [2, 9, 17]),
    ("Late Night Chill", "Relaxing music for late nights", "rockfan", [4, 18, 19]),
    ("Road Trip Mix", "Great songs for long drives", "rockfan", [1, 2, 20, 21]),
    ("Party Starters", "High-energy songs to get the party going", "rockfan", [1, 6, 22, 24]),
    ("Acoustic Favorites", "Beautiful acoustic performances", "rockfan", [4, 8, 18, 19]),
]


def seed_database() -> Dict[str, int]:
    """Replace catalogue contents with the demo data. Must run in an app context."""
    PlaylistTrack.query.delete()
    Playlist.query.delete()
    Track.query.delete()
    User.query.filter(User.username.in_([username for username, _ in USERS])).delete()

    tracks = [Track(name=name, duration_ms=duration_ms) for name, duration_ms in TRACKS]
    db.session.add_all(tracks)

    users = {}
    for username, password in USERS:
        user = User(username=username)
        user.set_password(password)
        users[username] = user
    db.session.add_all(users.values())

    associations = 0
    for name, description, owner, positions in PLAYLISTS:
        playlist = Playlist(name=name, description=description, owner=users[owner])
        db.session.add(playlist)
        for position in positions:
            db.session.add(PlaylistTrack(playlist=playlist, track=tracks[position - 1]))
            associations += 1

    db.session.commit()

    counts = {
        "tracks": len(tracks),
        "users": len(users),
        "playlists": len(PLAYLISTS),
        "playlist_tracks": associations,
    }
    logger.info(
        "Seeded %(tracks)s tracks, %(users)s users, %(playlists)s playlists, "
        "%(playlist_tracks)s playlist-track relationships",
        counts,
    )
    return counts


def seed_if_empty() -> bool:
    """Seed only when no tracks exist yet. Returns True if seeding ran."""
    if db.session.query(Track.id).first() is not None:
        return False
    seed_database()
    return True


__all__ = ["TRACKS", "USERS", "PLAYLISTS", "seed_database", "seed_if_empty"]
