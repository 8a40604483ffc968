"""
Database initialization script.

    python -m app.db.init_db           create missing tables
    python -m app.db.init_db --reset   drop and recreate all tables
"""
import argparse
import logging
from app.db.session import init_db, reset_db

logger = logging.getLogger(__name__)


def main(argv=None):
    parser = argparse.ArgumentParser(description="Initialize the users database.")
    parser.add_argument(
        "--reset",
        action="store_true",
        help="drop all tables before creating them (destroys data)"
    )
    args = parser.parse_args(argv)

    if args.reset:
        logger.warning("Dropping and recreating all tables")
        reset_db()
    else:
        init_db()
    logger.info("Database initialized successfully")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    main()
