#!/usr/bin/env python
"""Bearer-token authentication on top of Flask-Login."""

from __future__ import annotations

import logging

from flask import g
from flask_login import LoginManager

from jukebox.auth.tokens import verify_token
from jukebox.errors import InvalidToken, MissingToken

logger = logging.getLogger(__name__)

login_manager = LoginManager()
# Stateless: identity comes from the Authorization header on every request
login_manager.session_protection = None
login_manager.login_message = None


def _bearer_token(header: str | None) -> str | None:
    """Return the token part of a ``Bearer <token>`` header.

    Returns None when there is no usable token. Raises InvalidToken for a
    header using any other scheme.
    """
    if not header or not header.strip():
        return None
    scheme, _, token = header.strip().partition(" ")
    if scheme.lower() != "bearer":
        raise InvalidToken()
    token = token.strip()
    return token or None


def init_auth(app):
    """Attach Flask-Login to the Flask app with a bearer-token request loader."""
    from jukebox.database.db_manager import User, db

    login_manager.init_app(app)

    @login_manager.request_loader
    def load_user_from_request(req) -> User | None:
        try:
            token = _bearer_token(req.headers.get("Authorization"))
            if token is None:
                g.auth_failure = MissingToken()
                return None
            user_id = verify_token(token)
        except InvalidToken as exc:
            g.auth_failure = exc
            return None

        user = db.session.get(User, user_id)
        if user is None:
            logger.warning("Token references unknown user id %s", user_id)
            g.auth_failure = InvalidToken()
        return user

    @login_manager.unauthorized_handler
    def _unauthorized():
        raise g.get("auth_failure") or MissingToken()

    return login_manager


__all__ = ["login_manager", "init_auth"]
