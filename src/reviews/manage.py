"""Reviews database management CLI.

Creates or drops the review tables when the active PROTEAN_ENV points the
domain at SQLite or PostgreSQL. A no-op for the in-memory provider.

Usage:
    python -m reviews.manage setup-db   # Create tables
    python -m reviews.manage drop-db    # Drop tables
"""

import argparse
import sys

from reviews.domain import reviews
from reviews.utils.db import drop_db, setup_db


def setup_database():
    print("Initializing reviews domain...")
    reviews.init()
    print("Creating reviews database schema...")
    setup_db(reviews)
    print("Done.")


def drop_database():
    print("Initializing reviews domain...")
    reviews.init()
    print("Dropping reviews database schema...")
    drop_db(reviews)
    print("Done.")


def main(argv=None):
    parser = argparse.ArgumentParser(description="Reviews database management")
    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")

    args = parser.parse_args(argv)

    if args.command == "setup-db":
        setup_database()
    elif args.command == "drop-db":
        drop_database()
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
