"""Request input helpers shared by the route blueprints."""

from __future__ import annotations

import re
from typing import Any, Optional

from flask import request

from jukebox.errors import InvalidArgument

_ID_RE = re.compile(r"-?[0-9]+")

# Ids are stored in 32-bit integer columns
MAX_ID = 2**31 - 1
MIN_ID = -(2**31)


def parse_id(value: Any, message: str = "Invalid ID") -> int:
    """Parse a base-10 integer identifier or raise InvalidArgument.

    Accepts JSON integers and strings of ASCII digits with an optional
    leading minus. Booleans, floats and anything else are rejected.
    """
    if isinstance(value, bool):
        raise InvalidArgument(message)
    if isinstance(value, int):
        parsed = value
    elif isinstance(value, str) and _ID_RE.fullmatch(value):
        parsed = int(value)
    else:
        raise InvalidArgument(message)
    if not MIN_ID <= parsed <= MAX_ID:
        raise InvalidArgument(message)
    return parsed


def json_body() -> Optional[dict]:
    """Return the request's JSON object, or None when absent or not an object."""
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        return None
    return payload


def required_text(payload: Optional[dict], *fields: str) -> Optional[tuple]:
    """Return the named fields when each is a non-empty string, else None."""
    if payload is None:
        return None
    values = []
    for field in fields:
        value = payload.get(field)
        if not isinstance(value, str) or not value:
            return None
        values.append(value)
    return tuple(values)


__all__ = ["MAX_ID", "MIN_ID", "parse_id", "json_body", "required_text"]
