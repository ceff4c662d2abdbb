#!/usr/bin/env python
"""Registration and login endpoints issuing bearer tokens."""

from __future__ import annotations

import logging

from flask import Blueprint, jsonify
from sqlalchemy.exc import IntegrityError
from werkzeug.security import check_password_hash, generate_password_hash

from jukebox.auth.tokens import issue_token
from jukebox.database.db_manager import User, db
from jukebox.errors import Conflict, InvalidArgument, InvalidCredentials
from jukebox.interfaces.http.validation import json_body, required_text


logger = logging.getLogger(__name__)

users_bp = Blueprint("users_bp", __name__, url_prefix="/users")

_DUPLICATE_USERNAME = "Username already exists"

# Checked against when the username is unknown so both failure paths cost one hash check
_DUMMY_PASSWORD_HASH = generate_password_hash("not-a-real-password")


def _read_credentials() -> tuple:
    credentials = required_text(json_body(), "username", "password")
    if credentials is None:
        raise InvalidArgument("Username and password are required")
    return credentials


def _find_user(username: str) -> User | None:
    return User.query.filter_by(username=username).first()


def _session_payload(user: User) -> dict:
    return {"user": user.to_dict(), "token": issue_token(user.id)}


@users_bp.route("/register", methods=["POST"])
def register_user():
    username, password = _read_credentials()

    if _find_user(username) is not None:
        raise Conflict(_DUPLICATE_USERNAME)

    user = User(username=username)
    user.set_password(password)
    db.session.add(user)
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        logger.info("Registration for %r rejected by unique constraint", username)
        raise Conflict(_DUPLICATE_USERNAME)

    logger.info("Registered user %s (%s)", user.id, username)
    return jsonify(_session_payload(user)), 201


@users_bp.route("/login", methods=["POST"])
def login():
    username, password = _read_credentials()

    user = _find_user(username)
    if user is None:
        check_password_hash(_DUMMY_PASSWORD_HASH, password)
        logger.warning("Failed login for unknown username %r", username)
        raise InvalidCredentials()
    if not user.check_password(password):
        logger.warning("Failed login for user %s", user.id)
        raise InvalidCredentials()

    return jsonify(_session_payload(user)), 200


__all__ = ["users_bp"]
