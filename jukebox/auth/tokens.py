"""Signed, time-limited identity tokens."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Dict

import jwt
from flask import current_app

from jukebox.errors import InvalidToken
from jukebox.settings import AuthSettings


class TokenService:
    """Issue and verify HS-signed JWTs carrying a ``userId`` claim."""

    def __init__(self, secret: str, algorithm: str = "HS256", expires_in: int = 24 * 60 * 60):
        self.secret = secret
        self.algorithm = algorithm
        self.expires_in = expires_in

    @classmethod
    def from_settings(cls, settings: AuthSettings) -> "TokenService":
        return cls(
            secret=settings.signing_secret,
            algorithm=settings.jwt_algorithm,
            expires_in=settings.jwt_expires_in,
        )

    def issue(self, user_id: int) -> str:
        now = datetime.now(timezone.utc)
        payload: Dict[str, Any] = {
            "userId": int(user_id),
            "exp": now + timedelta(seconds=self.expires_in),
        }
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def verify(self, token: str) -> int:
        """Return the user id encoded in ``token`` or raise InvalidToken."""
        try:
            payload = jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                options={"require": ["exp"]},
            )
        except jwt.InvalidTokenError as exc:
            # ExpiredSignatureError and DecodeError are both InvalidTokenError
            raise InvalidToken() from exc

        user_id = payload.get("userId")
        if isinstance(user_id, bool) or not isinstance(user_id, int):
            raise InvalidToken()
        return user_id


def _service() -> TokenService:
    return current_app.extensions["token_service"]


def issue_token(user_id: int) -> str:
    return _service().issue(user_id)


def verify_token(token: str) -> int:
    return _service().verify(token)


__all__ = ["TokenService", "issue_token", "verify_token"]
