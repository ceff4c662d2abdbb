"""Factory Boy factories for database models used in tests."""

import factory
from factory.alchemy import SQLAlchemyModelFactory
from werkzeug.security import generate_password_hash

from jukebox.database.db_manager import Playlist, PlaylistTrack, Track, User

# Cheap hash so factories stay fast; the real app uses werkzeug's default method
_FAST_HASH = generate_password_hash("password123", method="pbkdf2:sha256:1000")


class _BaseFactory(SQLAlchemyModelFactory):
    class Meta:
        abstract = True
        sqlalchemy_session = None
        sqlalchemy_session_persistence = "flush"


class UserFactory(_BaseFactory):
    class Meta:
        model = User

    username = factory.Sequence(lambda n: f"user-{n}")
    password_hash = _FAST_HASH


class TrackFactory(_BaseFactory):
    class Meta:
        model = Track

    name = factory.Sequence(lambda n: f"Track {n}")
    duration_ms = 180000


class PlaylistFactory(_BaseFactory):
    class Meta:
        model = Playlist

    name = factory.Sequence(lambda n: f"Playlist {n}")
    description = factory.LazyAttribute(lambda obj: f"All about {obj.name}")
    owner = factory.SubFactory(UserFactory)


class PlaylistTrackFactory(_BaseFactory):
    class Meta:
        model = PlaylistTrack

    playlist = factory.SubFactory(PlaylistFactory)
    track = factory.SubFactory(TrackFactory)


_FACTORIES = [UserFactory, TrackFactory, PlaylistFactory, PlaylistTrackFactory]


def set_session(session):
    for factory_cls in _FACTORIES:
        factory_cls._meta.sqlalchemy_session = session


def reset_session():
    for factory_cls in _FACTORIES:
        factory_cls._meta.sqlalchemy_session = None


__all__ = [
    "UserFactory",
    "TrackFactory",
    "PlaylistFactory",
    "PlaylistTrackFactory",
    "set_session",
    "reset_session",
]
