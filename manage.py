# manage.py
import sys

from app import create_app
from jukebox.database.seed import seed_database

USAGE = "Usage: python manage.py [create_db|seed_db]"


def create_db():
    """Creates the database tables."""
    # initialize_database() runs create_all() while the app is built
    app = create_app()
    print(f"Database ready at {app.config['SQLALCHEMY_DATABASE_URI']}")


def seed_db():
    """Replaces the catalogue with the demo tracks, users and playlists."""
    app = create_app()
    with app.app_context():
        counts = seed_database()
    print(f"Inserted {counts['tracks']} tracks")
    print(f"Inserted {counts['users']} users")
    print(f"Inserted {counts['playlists']} playlists")
    print(f"Inserted {counts['playlist_tracks']} playlist-track relationships")


COMMANDS = {
    'create_db': create_db,
    'seed_db': seed_db,
}


def main(argv=None) -> int:
    args = sys.argv[1:] if argv is None else argv
    if not args:
        print("No command provided. " + USAGE)
        return 1
    command = COMMANDS.get(args[0])
    if command is None:
        print(f"Unknown command: {args[0]}")
        print(USAGE)
        return 1
    command()
    return 0


if __name__ == '__main__':
    sys.exit(main())
