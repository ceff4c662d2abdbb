#!/usr/bin/env python
# config.py
import os
from typing import List

# This assumes config.py is at the root of your project
basedir = os.path.abspath(os.path.dirname(__file__))


def _get_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _get_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "t", "yes", "y", "on"}


def _get_csv_list(name: str, default: str) -> List[str]:
    raw = os.getenv(name)
    source = raw if raw is not None else default
    return [token.strip() for token in source.split(",") if token and token.strip()]


class Config:
    # 'development' or 'production'; production refuses to start on dev secrets
    APP_ENV = os.getenv('APP_ENV', 'development').strip().lower()

    SECRET_KEY = os.environ.get('SECRET_KEY') or 'dev-flask-secret-key'

    # Database
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or \
        'sqlite:///' + os.path.join(basedir, 'instance', 'jukebox.db')
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    # Populate an empty database with the demo catalogue on startup
    SEED_ON_STARTUP = _get_bool('SEED_ON_STARTUP', False)

    # Token signing. Left unset here so the settings layer can tell a real
    # secret apart from the development fallback.
    JWT_SECRET = os.environ.get('JWT_SECRET')
    JWT_ALGORITHM = os.getenv('JWT_ALGORITHM', 'HS256')
    JWT_EXPIRES_IN_SECONDS = _get_int('JWT_EXPIRES_IN_SECONDS', 24 * 60 * 60)

    # HTTP
    CORS_ALLOWED_ORIGINS = _get_csv_list('CORS_ALLOWED_ORIGINS', 'http://localhost:3000')

    # Runtime behavior
    DEBUG = _get_bool('DEBUG', False)
    # Control console logging; when disabled, logs go only to file
    ENABLE_CONSOLE_LOGS = _get_bool('ENABLE_CONSOLE_LOGS', False)
    PORT = _get_int('PORT', 5000)
