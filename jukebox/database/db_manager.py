# jukebox/database/db_manager.py
from flask_sqlalchemy import SQLAlchemy
from flask_login import UserMixin
from werkzeug.security import check_password_hash, generate_password_hash
import os  # Import os for path handling
import logging
from sqlalchemy import ForeignKey, UniqueConstraint, CheckConstraint
from sqlalchemy.engine import make_url
from sqlalchemy.orm import relationship

# Initialize the SQLAlchemy object
db = SQLAlchemy()
logger = logging.getLogger(__name__)


class User(UserMixin, db.Model):
    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(255), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(255), nullable=False)

    playlists = relationship(
        "Playlist",
        back_populates="owner",
        order_by="Playlist.id",
        lazy=True,
    )

    def set_password(self, password: str) -> None:
        self.password_hash = generate_password_hash(password)

    def check_password(self, password: str) -> bool:
        return check_password_hash(self.password_hash, password)

    def get_id(self) -> str:
        return str(self.id)

    def to_dict(self) -> dict:
        # Never expose password_hash
        return {
            "id": self.id,
            "username": self.username,
        }

    def __repr__(self) -> str:
        return f"<User {self.username}>"


class Track(db.Model):
    __tablename__ = 'tracks'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(255), nullable=False)
    duration_ms = db.Column(db.Integer, nullable=False)

    __table_args__ = (
        CheckConstraint('duration_ms >= 0', name='ck_tracks_duration_non_negative'),
    )

    def __repr__(self):
        return f'<Track {self.id}: {self.name}>'

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'name': self.name,
            'duration_ms': self.duration_ms,
        }


class Playlist(db.Model):
    __tablename__ = 'playlists'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text, nullable=False)
    # Nullable for legacy/unowned rows; API-created playlists always carry an owner
    user_id = db.Column(
        db.Integer,
        ForeignKey('users.id', ondelete='CASCADE'),
        nullable=True,
        index=True,
    )

    owner = relationship('User', back_populates='playlists')
    entries = relationship(
        'PlaylistTrack',
        back_populates='playlist',
        cascade='all, delete-orphan',
        lazy=True,
    )

    def is_owned_by(self, user) -> bool:
        return self.user_id is not None and user is not None and self.user_id == user.id

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'name': self.name,
            'description': self.description,
            'user_id': self.user_id,
        }


class PlaylistTrack(db.Model):
    __tablename__ = 'playlists_tracks'

    id = db.Column(db.Integer, primary_key=True)
    playlist_id = db.Column(
        db.Integer,
        ForeignKey('playlists.id', ondelete='CASCADE'),
        nullable=False,
        index=True,
    )
    track_id = db.Column(
        db.Integer,
        ForeignKey('tracks.id', ondelete='CASCADE'),
        nullable=False,
        index=True,
    )

    playlist = relationship('Playlist', back_populates='entries')
    track = relationship('Track')

    __table_args__ = (
        UniqueConstraint('playlist_id', 'track_id', name='uq_playlist_track_once'),
    )

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'playlist_id': self.playlist_id,
            'track_id': self.track_id,
        }


def initialize_database(app):
    """
    Initializes the SQLAlchemy extension with the Flask app instance
    and creates all database tables if they don't already exist.
    """
    db.init_app(app)
    # Ensure the instance folder exists for SQLite database file
    instance_path = app.instance_path
    if not os.path.exists(instance_path):
        os.makedirs(instance_path)
        logger.info("Created instance folder: %s", instance_path)

    # Ensure the directory for the configured SQLite file exists
    uri = app.config.get('SQLALCHEMY_DATABASE_URI')
    if uri:
        url = make_url(uri)
        # Only handle file-based SQLite (not :memory:)
        if url.get_backend_name() == 'sqlite' and url.database and url.database != ':memory:':
            db_dir = os.path.dirname(url.database)
            if db_dir and not os.path.exists(db_dir):
                os.makedirs(db_dir, exist_ok=True)
                logger.info("Created SQLite DB directory: %s", db_dir)

    # Create database tables within the application context
    with app.app_context():
        db.create_all()
        logger.info("Database tables created or already exist.")


__all__ = ["db", "User", "Track", "Playlist", "PlaylistTrack", "initialize_database"]
