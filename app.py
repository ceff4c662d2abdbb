import os
import logging
from datetime import datetime
from uuid import uuid4

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# --- Flask specific imports ---
from flask import Flask, request, g
from flask_cors import CORS

# --- Import our configuration and the app building blocks ---
from config import Config
from jukebox.auth import init_auth
from jukebox.auth.tokens import TokenService
from jukebox.database.db_manager import initialize_database
from jukebox.database.seed import seed_if_empty
from jukebox.errors import register_error_handlers
from jukebox.interfaces.http.routes import (
    users_bp,
    tracks_bp,
    playlist_bp,
    health_bp,
)
from jukebox.observability import RequestContextFilter, configure_structured_logging
from jukebox.settings import load_auth_settings


logger = logging.getLogger(__name__)


LOG_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'instance', 'log')

# Handlers installed by the last configure_logging() call
_run_handlers = []


def configure_logging(log_dir: str, console=None) -> str:
    """
    Send application logs to a fresh file per run (jukebox-YYYYMMDD-HHMMSS.log),
    tagged with the request id. Warnings also go to the console when
    ``console`` (default: Config.ENABLE_CONSOLE_LOGS) is set.

    Calling it again replaces the handlers from the previous call.
    Returns the path to the created log file.
    """
    os.makedirs(log_dir, exist_ok=True)
    log_path = os.path.join(log_dir, f"jukebox-{datetime.now():%Y%m%d-%H%M%S}.log")
    if console is None:
        console = Config.ENABLE_CONSOLE_LOGS

    root = logging.getLogger()
    root.setLevel(logging.INFO)
    for handler in _run_handlers:
        root.removeHandler(handler)
        handler.close()
    _run_handlers.clear()

    formatter = logging.Formatter(
        fmt='%(asctime)s %(levelname)s [%(request_id)s] %(name)s: %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S',
    )
    file_handler = logging.FileHandler(log_path, encoding='utf-8')
    file_handler.setLevel(logging.INFO)
    _run_handlers.append(file_handler)

    if console:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(logging.WARNING)
        _run_handlers.append(console_handler)

    for handler in _run_handlers:
        handler.setFormatter(formatter)
        handler.addFilter(RequestContextFilter())
        root.addHandler(handler)

    # Werkzeug request lines go through the root handlers only
    werkzeug_logger = logging.getLogger("werkzeug")
    werkzeug_logger.handlers = []
    werkzeug_logger.propagate = True

    return log_path


def create_app(overrides=None):
    app = Flask(__name__)
    app.config.from_object(Config)
    if overrides:
        app.config.update(overrides)

    # Fails fast (pydantic ValidationError) on bad auth configuration
    auth_settings = load_auth_settings(app.config)
    if auth_settings.uses_dev_secret:
        logger.warning(
            "JWT_SECRET is not set; signing tokens with the development default. "
            "Set JWT_SECRET before exposing this service."
        )
    app.extensions['auth_settings'] = auth_settings
    app.extensions['token_service'] = TokenService.from_settings(auth_settings)

    configure_structured_logging(app)

    @app.before_request
    def _assign_request_id():
        g.request_id = request.headers.get('X-Request-ID') or uuid4().hex

    @app.after_request
    def _inject_request_id(response):
        if getattr(g, 'request_id', None):
            response.headers.setdefault('X-Request-ID', g.request_id)
        return response

    allowed_origins = sorted({
        origin.strip()
        for origin in app.config.get('CORS_ALLOWED_ORIGINS', ())
        if origin and origin.strip() and origin.strip() != "*"
    })
    CORS(
        app,
        resources={r"/*": {"origins": allowed_origins}},
        expose_headers=["X-Request-ID"],
    )

    register_error_handlers(app)

    # Initialize database
    initialize_database(app)
    init_auth(app)

    if app.config.get('SEED_ON_STARTUP'):
        with app.app_context():
            if seed_if_empty():
                logger.info("Seeded empty database with demo catalogue")

    # --- Register Blueprints ---
    app.register_blueprint(users_bp)
    app.register_blueprint(tracks_bp)
    app.register_blueprint(playlist_bp)
    app.register_blueprint(health_bp)

    return app


def main() -> None:
    # With the reloader on, only the serving child process writes a log file
    if not Config.DEBUG or os.environ.get('WERKZEUG_RUN_MAIN') == 'true':
        logger.info("Logging to %s", configure_logging(LOG_DIR))
    app = create_app()
    app.run(debug=Config.DEBUG, host='0.0.0.0', port=Config.PORT)


if __name__ == '__main__':
    main()
