"""Track catalogue routes."""

from __future__ import annotations

from flask import Blueprint, jsonify
from flask_login import current_user, login_required

from jukebox.database.db_manager import Playlist, PlaylistTrack, Track, db
from jukebox.errors import NotFound
from jukebox.interfaces.http.validation import parse_id


tracks_bp = Blueprint('tracks_bp', __name__, url_prefix='/tracks')


def _get_track_or_404(raw_id: str) -> Track:
    track_id = parse_id(raw_id, 'Invalid track ID')
    track = db.session.get(Track, track_id)
    if track is None:
        raise NotFound('Track not found')
    return track


@tracks_bp.route('', methods=['GET'])
def list_tracks():
    tracks = Track.query.order_by(Track.id.asc()).all()
    return jsonify([track.to_dict() for track in tracks]), 200


@tracks_bp.route('/<track_id>', methods=['GET'])
def get_track(track_id: str):
    track = _get_track_or_404(track_id)
    return jsonify(track.to_dict()), 200


@tracks_bp.route('/<track_id>/playlists', methods=['GET'])
@login_required
def list_track_playlists(track_id: str):
    track = _get_track_or_404(track_id)
    playlists = (
        Playlist.query.join(PlaylistTrack, PlaylistTrack.playlist_id == Playlist.id)
        .filter(PlaylistTrack.track_id == track.id, Playlist.user_id == current_user.id)
        .order_by(Playlist.id.asc())
        .all()
    )
    return jsonify([playlist.to_dict() for playlist in playlists]), 200


__all__ = ['tracks_bp']
