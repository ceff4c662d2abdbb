"""Playlist routes with ownership enforcement."""

from __future__ import annotations

import logging

from flask import Blueprint, jsonify
from flask_login import current_user, login_required
from sqlalchemy.exc import IntegrityError

from jukebox.database.db_manager import (
    db,
    Playlist,
    PlaylistTrack,
    Track,
)
from jukebox.errors import Conflict, Forbidden, InvalidArgument, NotFound
from jukebox.interfaces.http.validation import json_body, parse_id, required_text


logger = logging.getLogger(__name__)

playlist_bp = Blueprint('playlist_bp', __name__, url_prefix='/playlists')

_DUPLICATE_TRACK = 'Track is already in playlist'


def _find_playlist(playlist_id: int) -> Playlist:
    playlist = db.session.get(Playlist, playlist_id)
    if playlist is None:
        raise NotFound('Playlist not found')
    return playlist


def _check_owner(playlist: Playlist) -> Playlist:
    if not playlist.is_owned_by(current_user):
        logger.info(
            "User %s denied access to playlist %s", current_user.id, playlist.id
        )
        raise Forbidden('You do not have access to this playlist')
    return playlist


def _owned_playlist(raw_id: str) -> Playlist:
    playlist_id = parse_id(raw_id, 'Invalid playlist ID')
    return _check_owner(_find_playlist(playlist_id))


def _association_exists(playlist_id: int, track_id: int) -> bool:
    return (
        PlaylistTrack.query.filter_by(playlist_id=playlist_id, track_id=track_id).first()
        is not None
    )


@playlist_bp.route('', methods=['GET'])
@login_required
def list_playlists():
    playlists = (
        Playlist.query.filter_by(user_id=current_user.id)
        .order_by(Playlist.id.asc())
        .all()
    )
    return jsonify([playlist.to_dict() for playlist in playlists]), 200


@playlist_bp.route('', methods=['POST'])
@login_required
def create_playlist():
    fields = required_text(json_body(), 'name', 'description')
    if fields is None:
        raise InvalidArgument('Name and description are required')
    name, description = fields

    playlist = Playlist(name=name, description=description, user_id=current_user.id)
    db.session.add(playlist)
    db.session.commit()
    logger.info("User %s created playlist %s", current_user.id, playlist.id)

    return jsonify(playlist.to_dict()), 201


@playlist_bp.route('/<playlist_id>', methods=['GET'])
@login_required
def get_playlist(playlist_id: str):
    playlist = _owned_playlist(playlist_id)
    return jsonify(playlist.to_dict()), 200


@playlist_bp.route('/<playlist_id>/tracks', methods=['GET'])
@login_required
def list_playlist_tracks(playlist_id: str):
    playlist = _owned_playlist(playlist_id)
    tracks = (
        Track.query.join(PlaylistTrack, PlaylistTrack.track_id == Track.id)
        .filter(PlaylistTrack.playlist_id == playlist.id)
        .order_by(Track.id.asc())
        .all()
    )
    return jsonify([track.to_dict() for track in tracks]), 200


@playlist_bp.route('/<playlist_id>/tracks', methods=['POST'])
@login_required
def add_track(playlist_id: str):
    # Each check short-circuits; the order below is part of the API contract.
    parsed_playlist_id = parse_id(playlist_id, 'Invalid playlist ID')

    payload = json_body()
    if payload is None or 'trackId' not in payload:
        raise InvalidArgument('trackId is required')
    track_id = parse_id(payload['trackId'], 'Invalid track ID')

    playlist = _check_owner(_find_playlist(parsed_playlist_id))

    # A missing track comes from the body, so it is a bad request rather than a 404
    if db.session.get(Track, track_id) is None:
        raise InvalidArgument('Track not found')

    if _association_exists(playlist.id, track_id):
        raise Conflict(_DUPLICATE_TRACK)

    entry = PlaylistTrack(playlist_id=playlist.id, track_id=track_id)
    db.session.add(entry)
    try:
        db.session.commit()
    except IntegrityError:
        # Concurrent insert won the race; the unique constraint is authoritative
        db.session.rollback()
        logger.info(
            "Duplicate track %s in playlist %s rejected by constraint", track_id, parsed_playlist_id
        )
        raise Conflict(_DUPLICATE_TRACK)

    logger.info("Added track %s to playlist %s", track_id, playlist.id)
    return jsonify(entry.to_dict()), 201


__all__ = ['playlist_bp']
